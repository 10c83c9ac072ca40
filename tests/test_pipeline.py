import json

import numpy as np
import pytest
import scipy.sparse as sp

from newsprep.config import EMBEDDING_MIN_COUNT, PipelineConfig
from newsprep.corpus import Corpus, IngestError
from newsprep.embeddings import EmbeddingTable
from newsprep.pipeline import run
from newsprep.vocab import Vocabulary


@pytest.fixture
def config(raw_dir, tmp_path):
    return PipelineConfig(
        data_dir=raw_dir,
        out_dir=tmp_path / "models",
        min_doc_proportion=0.0,
        embedding_dim=8,
        embedding_window=2,
        embedding_min_count=1,
        embedding_epochs=2,
        max_sequence_len=10,
    )


def test_run_writes_all_artifacts(config):
    result = run(config)
    out = config.out_dir
    assert len(result.corpus) == 8
    assert len(result.train) == 4
    assert len(result.eval) == 3
    for path in result.artifacts.values():
        assert path.exists()

    n_terms = len(result.vocabulary)
    assert sp.load_npz(out / "train_tfidf.npz").shape == (4, n_terms)
    assert sp.load_npz(out / "eval_count.npz").shape == (3, n_terms)
    assert np.load(out / "train_embedded.npy").shape == (4, 8)
    assert np.load(out / "eval_sequences.npy").shape == (3, 10)
    assert np.load(out / "embedding_matrix.npy").shape == (n_terms + 1, 8)
    assert json.loads((out / "config.json").read_text())["min_doc_proportion"] == 0.0


def test_labels_align_with_exported_rows(config):
    result = run(config)
    train = Corpus.read_csv(result.artifacts["train"])
    labels = np.load(result.artifacts["train_labels"])
    assert labels.tolist() == train.labels
    assert train.texts == result.train.texts


def test_vocabulary_built_from_train_only(config):
    result = run(config)
    train_terms = {t for d in result.train for t in d.tokens}
    eval_only = {t for d in result.eval for t in d.tokens} - train_terms
    assert eval_only
    vocab = Vocabulary.load(result.artifacts["vocabulary"])
    assert not eval_only & set(vocab.terms)
    assert vocab.n_docs == len(result.train)

    table = EmbeddingTable.load(result.artifacts["embeddings"])
    assert not eval_only & set(table.terms)


def test_rerun_is_reproducible(config, tmp_path):
    first = run(config)
    second = run(config.with_overrides({"out_dir": tmp_path / "again"}))
    assert first.train.texts == second.train.texts
    assert first.vocabulary.terms == second.vocabulary.terms
    np.testing.assert_array_equal(first.vocabulary.idf, second.vocabulary.idf)


def test_run_without_embeddings(config):
    result = run(config.with_overrides({"embeddings": False}))
    assert result.embeddings is None
    assert "embeddings" not in result.artifacts
    assert "train_tfidf" in result.artifacts


def test_missing_source_aborts(config, tmp_path):
    with pytest.raises(IngestError):
        run(config.with_overrides({"data_dir": tmp_path / "nowhere"}))
    assert not (config.out_dir / "corpus.csv").exists()


def test_empty_train_range_rejected(config):
    with pytest.raises(ValueError):
        run(config.with_overrides({"train_range": ("2010-01-01", "2011-01-01")}))
    assert not config.out_dir.exists()


def test_default_embedding_min_count_on_small_split_fails_before_writing(config):
    small = config.with_overrides({"embedding_min_count": EMBEDDING_MIN_COUNT, "embedding_epochs": 1})
    with pytest.raises(ValueError, match="embedding_min_count"):
        run(small)
    assert not (config.out_dir / "corpus.csv").exists()
    assert not (config.out_dir / "vocabulary.joblib").exists()


def test_training_script_reads_pipeline_output(config):
    from train_baseline import load_features

    result = run(config)
    for features, width in (("tfidf", len(result.vocabulary)), ("embedded", 8)):
        X, y = load_features(config.out_dir, "eval", features)
        assert X.shape == (3, width)
        assert y.tolist() == result.eval.labels
