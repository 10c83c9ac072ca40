import numpy as np
import pytest

from newsprep.corpus import Corpus
from newsprep.embeddings import EmbeddingTable, aggregate, aggregate_corpus, train_embeddings


@pytest.fixture
def table():
    return EmbeddingTable.from_mapping({"alpha": [1.0, 0.0], "beta": [0.0, 1.0]})


def test_tf_weighted_average(table):
    vec = aggregate(["alpha", "alpha", "beta", "beta"], table)
    np.testing.assert_allclose(vec, [0.5, 0.5])


def test_unknown_tokens_count_as_zero_vectors(table):
    vec = aggregate(["alpha", "alpha", "beta", "gamma"], table)
    np.testing.assert_allclose(vec, [0.5, 0.25])


def test_lookup_of_unknown_term_is_zero(table):
    assert "gamma" not in table
    np.testing.assert_array_equal(table["gamma"], np.zeros(2))


def test_dimension_constant_regardless_of_length(table):
    for tokens in ([], ["alpha"], ["beta"] * 500, ["gamma", "delta"]):
        assert aggregate(tokens, table).shape == (2,)
    np.testing.assert_array_equal(aggregate([], table), [0.0, 0.0])


def test_aggregate_corpus_rows_follow_corpus_order(table, make_doc):
    corpus = Corpus([make_doc("alpha"), make_doc("beta beta"), make_doc("")])
    X = aggregate_corpus(corpus, table)
    np.testing.assert_allclose(X, [[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
    assert aggregate_corpus(Corpus(), table).shape == (0, 2)


def test_table_is_read_only(table):
    with pytest.raises(ValueError):
        table.vectors[0, 0] = 5.0


def test_table_rejects_mismatched_rows():
    with pytest.raises(ValueError):
        EmbeddingTable(["a", "b"], np.zeros((3, 4)))


def test_train_embeddings_on_training_corpus(make_doc):
    texts = ["senate budget vote passes", "senate debate budget spending",
             "trump election rally crowd", "clinton emails scandal leaked"] * 5
    corpus = Corpus([make_doc(t, doc_id=str(i)) for i, t in enumerate(texts)])
    table = train_embeddings(corpus, vector_size=8, window=2, min_count=1, epochs=2, seed=1)
    assert table.dim == 8
    assert set(table.terms) == {t for text in texts for t in text.split()}

    again = train_embeddings(corpus, vector_size=8, window=2, min_count=1, epochs=2, seed=1)
    np.testing.assert_array_equal(table["senate"], again["senate"])
    assert aggregate(corpus[0].tokens, table).shape == (8,)


def test_train_embeddings_needs_tokens(make_doc):
    with pytest.raises(ValueError):
        train_embeddings(Corpus([make_doc("")]), min_count=1)


def test_train_embeddings_rejects_min_count_no_token_reaches(make_doc):
    corpus = Corpus([make_doc("senate budget vote", doc_id="0"), make_doc("senate budget debate", doc_id="1")])
    with pytest.raises(ValueError, match="embedding_min_count"):
        train_embeddings(corpus, vector_size=8, min_count=3, epochs=1)
    table = train_embeddings(corpus, vector_size=8, window=2, min_count=2, epochs=1)
    assert set(table.terms) == {"senate", "budget"}


def test_save_and_load(table, tmp_path):
    path = tmp_path / "embeddings.joblib"
    table.save(path)
    loaded = EmbeddingTable.load(path)
    assert loaded.terms == table.terms
    np.testing.assert_array_equal(loaded.vectors, table.vectors)
