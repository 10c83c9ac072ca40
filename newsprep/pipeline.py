# newsprep/pipeline.py
"""End-to-end run: CSVs in, frozen artifacts and feature matrices out.

    Fake.csv, True.csv
      -> normalize + filter (per document)
      -> merge (fake first, drop empty / duplicate cleaned text)
      -> time split
      -> vocabulary fit on train only
      -> count / TF-IDF matrices, optionally Word2Vec table,
         embedding aggregates and padded sequences
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import scipy.sparse as sp

from .corpus import Corpus, load_corpus
from .embeddings import EmbeddingTable, aggregate_corpus, train_embeddings
from .sequences import embedding_matrix, encode_sequences
from .split import split, split_summary
from .vocab import COUNT, TFIDF, Vocabulary

log = logging.getLogger(__name__)

CORPUS_FILE = "corpus.csv"
TRAIN_FILE = "train.csv"
EVAL_FILE = "eval.csv"
VOCAB_FILE = "vocabulary.joblib"
EMBEDDINGS_FILE = "embeddings.joblib"
CONFIG_FILE = "config.json"


@dataclass
class PipelineResult:
    corpus: Corpus
    train: Corpus
    eval: Corpus
    vocabulary: Vocabulary
    embeddings: Optional[EmbeddingTable] = None
    artifacts: dict = field(default_factory=dict)


def _save_npz(path, X):
    sp.save_npz(path, X)
    return path


def _save_npy(path, X):
    np.save(path, X)
    return path


def run(config):
    """Run the whole preparation pipeline and write every artifact to ``config.out_dir``.

    Every matrix and table is built before the first file is written, so a
    failing step leaves ``out_dir`` untouched.
    """
    out = config.out_dir

    corpus = load_corpus(config.fake_path, config.real_path, config.min_token_length)
    train_range, eval_range = config.date_ranges()
    train, evaluation = split(corpus, train_range, eval_range, seed=config.seed)
    if not len(train):
        raise ValueError(f"No documents fall in the train range {config.train_range}")
    log.info("Split summary:\n%s", split_summary(train, evaluation))

    vocabulary = Vocabulary.fit(train, config.min_doc_proportion, config.max_doc_proportion)
    parts = (("train", train), ("eval", evaluation))

    arrays = {}
    matrices = {}
    for name, part in parts:
        for weighting in (COUNT, TFIDF):
            matrices[f"{name}_{weighting}"] = vocabulary.transform(part, weighting)
        arrays[f"{name}_labels"] = np.asarray(part.labels, dtype=np.int8)

    table = None
    if config.embeddings:
        table = train_embeddings(
            train,
            vector_size=config.embedding_dim,
            window=config.embedding_window,
            min_count=config.embedding_min_count,
            epochs=config.embedding_epochs,
            seed=config.seed,
        )
        for name, part in parts:
            arrays[f"{name}_embedded"] = aggregate_corpus(part, table)
            arrays[f"{name}_sequences"] = encode_sequences(part, vocabulary, config.max_sequence_len)
        arrays["embedding_matrix"] = embedding_matrix(vocabulary, table)

    out.mkdir(parents=True, exist_ok=True)
    artifacts = {}
    artifacts["corpus"] = out / CORPUS_FILE
    corpus.to_csv(artifacts["corpus"])
    artifacts["train"] = out / TRAIN_FILE
    train.to_csv(artifacts["train"])
    artifacts["eval"] = out / EVAL_FILE
    evaluation.to_csv(artifacts["eval"])
    artifacts["vocabulary"] = out / VOCAB_FILE
    vocabulary.save(artifacts["vocabulary"])
    if table is not None:
        artifacts["embeddings"] = out / EMBEDDINGS_FILE
        table.save(artifacts["embeddings"])

    for key, X in matrices.items():
        artifacts[key] = _save_npz(out / f"{key}.npz", X)
    for key, X in arrays.items():
        artifacts[key] = _save_npy(out / f"{key}.npy", X)

    artifacts["config"] = out / CONFIG_FILE
    with open(artifacts["config"], "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)

    log.info("Wrote %d artifacts to %s", len(artifacts), out)
    return PipelineResult(corpus, train, evaluation, vocabulary, table, artifacts)
