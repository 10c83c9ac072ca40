# newsprep/embeddings.py
"""Word embedding table and TF-weighted document vectors.

The table is trained with gensim's Word2Vec on the training split only and
then frozen into a plain term -> vector lookup. Document vectors average the
vectors of their tokens weighted by term frequency; a token the table does
not know counts as a zero vector, so it still takes its share of the
denominator and pulls the average toward the origin.
"""

import logging
from collections import Counter

import joblib
import numpy as np
from gensim.models import Word2Vec

from .config import (EMBEDDING_DIM, EMBEDDING_EPOCHS, EMBEDDING_MIN_COUNT,
                     EMBEDDING_WINDOW, RANDOM_STATE)

log = logging.getLogger(__name__)


class EmbeddingTable:
    def __init__(self, terms, vectors):
        vectors = np.array(vectors, dtype=np.float32)
        if vectors.ndim != 2 or vectors.shape[0] != len(terms):
            raise ValueError(f"Expected {len(terms)} rows of vectors, got shape {vectors.shape}")
        self.terms = tuple(terms)
        self.index = {t: i for i, t in enumerate(self.terms)}
        if len(self.index) != len(self.terms):
            raise ValueError("Duplicate terms in embedding table")
        self.vectors = vectors
        self.vectors.setflags(write=False)
        self._zero = np.zeros(self.dim, dtype=np.float32)
        self._zero.setflags(write=False)

    @property
    def dim(self):
        return self.vectors.shape[1]

    def __len__(self):
        return len(self.terms)

    def __contains__(self, term):
        return term in self.index

    def __getitem__(self, term):
        i = self.index.get(term)
        return self._zero if i is None else self.vectors[i]

    def __repr__(self):
        return f"EmbeddingTable({len(self)} terms, dim={self.dim})"

    @classmethod
    def from_mapping(cls, mapping):
        terms = sorted(mapping)
        if not terms:
            raise ValueError("Embedding table needs at least one term")
        return cls(terms, np.vstack([np.asarray(mapping[t], dtype=np.float32) for t in terms]))

    @classmethod
    def from_keyed_vectors(cls, wv):
        return cls(list(wv.index_to_key), wv.vectors)

    def save(self, path):
        joblib.dump(self, path)

    @staticmethod
    def load(path):
        table = joblib.load(path)
        if not isinstance(table, EmbeddingTable):
            raise TypeError(f"{path} does not hold an EmbeddingTable")
        return table


def train_embeddings(corpus, vector_size=EMBEDDING_DIM, window=EMBEDDING_WINDOW,
                     min_count=EMBEDDING_MIN_COUNT, epochs=EMBEDDING_EPOCHS, seed=RANDOM_STATE):
    """Train Word2Vec (skip-gram) on a corpus and freeze the result.

    A single worker thread keeps the run reproducible for a given seed
    (gensim also needs ``PYTHONHASHSEED`` fixed for bit-identical vectors).
    """
    sentences = [d.tokens for d in corpus if d.tokens]
    if not sentences:
        raise ValueError("Cannot train embeddings on a corpus without tokens")
    counts = Counter(t for s in sentences for t in s)
    if max(counts.values()) < min_count:
        # gensim would fail later with "you must first build vocabulary"
        raise ValueError(
            f"No token occurs at least {min_count} times in {len(sentences):,} training documents; "
            f"lower embedding_min_count (most frequent token occurs {max(counts.values())} times)"
        )
    log.info("Training Word2Vec on %s documents (dim=%d, window=%d, min_count=%d)",
             f"{len(sentences):,}", vector_size, window, min_count)
    model = Word2Vec(
        sentences=sentences,
        vector_size=vector_size,
        window=window,
        min_count=min_count,
        sg=1,
        workers=1,
        epochs=epochs,
        seed=seed,
    )
    table = EmbeddingTable.from_keyed_vectors(model.wv)
    log.info("Embedding table: %s terms", f"{len(table):,}")
    return table


def aggregate(document_tokens, embedding_table):
    """TF-weighted mean of token vectors; unknown tokens contribute zeros."""
    vec = np.zeros(embedding_table.dim, dtype=np.float64)
    n = len(document_tokens)
    if n == 0:
        return vec
    for term, count in Counter(document_tokens).items():
        if term in embedding_table:
            vec += (count / n) * embedding_table[term]
    return vec


def aggregate_corpus(corpus, embedding_table):
    """Stack ``aggregate`` over a corpus, one row per document in corpus order."""
    rows = [aggregate(d.tokens, embedding_table) for d in corpus]
    if not rows:
        return np.zeros((0, embedding_table.dim), dtype=np.float64)
    return np.vstack(rows)
