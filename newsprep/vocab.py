# newsprep/vocab.py
"""Frozen vocabulary and count / TF-IDF document-term matrices.

The vocabulary is fit once on the training split. Everything it knows about
the corpus (which terms, their document frequencies, IDF weights) comes
from that split; transforming the eval split only looks values up.

IDF is the smoothed variant, ``ln((1 + N) / (1 + df)) + 1``, and TF-IDF
rows are L2-normalized, i.e. scikit-learn's ``TfidfTransformer`` defaults.
"""

import logging

import joblib
import numpy as np
import scipy.sparse as sp
from sklearn.feature_extraction.text import CountVectorizer, TfidfTransformer

log = logging.getLogger(__name__)

COUNT = "count"
TFIDF = "tfidf"
WEIGHTINGS = (COUNT, TFIDF)


def _texts(corpus):
    return corpus.texts if hasattr(corpus, "texts") else list(corpus)


class Vocabulary:
    """Term -> column index mapping plus the training statistics behind it.

    Use ``Vocabulary.fit`` to build one; instances are not meant to be
    mutated afterwards.
    """

    def __init__(self, terms, doc_freq, n_docs, min_doc_proportion, max_doc_proportion, tfidf):
        self.terms = tuple(terms)
        self.index = {t: i for i, t in enumerate(self.terms)}
        self.doc_freq = np.asarray(doc_freq, dtype=np.int64)
        self.n_docs = int(n_docs)
        self.min_doc_proportion = min_doc_proportion
        self.max_doc_proportion = max_doc_proportion
        # fitted on the training presence matrix, never refit
        self._tfidf = tfidf

    def __len__(self):
        return len(self.terms)

    def __contains__(self, term):
        return term in self.index

    def __repr__(self):
        return f"Vocabulary({len(self)} terms, fit on {self.n_docs} documents)"

    @property
    def idf(self):
        return self._tfidf.idf_

    @classmethod
    def fit(cls, training_corpus, min_doc_proportion, max_doc_proportion=1.0):
        """Fit on a training corpus (or an iterable of cleaned strings).

        Keeps terms with ``min_doc_proportion * N <= df <= max_doc_proportion * N``.
        Columns are ordered by descending document frequency, ties broken by
        the term itself so the mapping is deterministic.
        """
        for name, value in (("min_doc_proportion", min_doc_proportion),
                            ("max_doc_proportion", max_doc_proportion)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

        texts = _texts(training_corpus)
        if not texts:
            raise ValueError("Cannot fit a vocabulary on an empty corpus")

        # float min_df/max_df keep df >= min_df * N and df <= max_df * N
        counter = CountVectorizer(
            analyzer=str.split,
            binary=True,
            min_df=float(min_doc_proportion),
            max_df=float(max_doc_proportion),
        )
        try:
            presence = counter.fit_transform(texts)
        except ValueError as e:
            # sklearn refuses to return an empty vocabulary
            raise ValueError(
                f"No terms survive pruning (min_doc_proportion={min_doc_proportion}, "
                f"max_doc_proportion={max_doc_proportion}, {len(texts)} documents)"
            ) from e

        names = counter.get_feature_names_out()
        df = np.asarray(presence.sum(axis=0)).ravel()
        order = sorted(range(len(names)), key=lambda i: (-df[i], names[i]))
        presence = presence[:, order]

        vocab = cls(
            terms=[str(names[i]) for i in order],
            doc_freq=df[order],
            n_docs=len(texts),
            min_doc_proportion=min_doc_proportion,
            max_doc_proportion=max_doc_proportion,
            tfidf=TfidfTransformer(smooth_idf=True, norm="l2").fit(presence),
        )
        log.info("Vocabulary fit: %s terms from %s documents (min_doc_proportion=%s)",
                 f"{len(vocab):,}", f"{vocab.n_docs:,}", min_doc_proportion)
        return vocab

    def counts(self, corpus):
        """Raw term counts restricted to the vocabulary, as CSR."""
        texts = _texts(corpus)
        if not texts:
            return sp.csr_matrix((0, len(self)), dtype=np.float64)
        vec = CountVectorizer(analyzer=str.split, vocabulary=self.index)
        return sp.csr_matrix(vec.transform(texts), dtype=np.float64)

    def transform(self, corpus, weighting=TFIDF):
        if weighting not in WEIGHTINGS:
            raise ValueError(f"Unknown weighting {weighting!r}; expected one of {WEIGHTINGS}")
        X = self.counts(corpus)
        if weighting == COUNT or X.shape[0] == 0:
            return X
        return sp.csr_matrix(self._tfidf.transform(X))

    def save(self, path):
        joblib.dump(self, path)

    @staticmethod
    def load(path):
        vocab = joblib.load(path)
        if not isinstance(vocab, Vocabulary):
            raise TypeError(f"{path} does not hold a Vocabulary")
        return vocab


def fit(training_corpus, min_doc_proportion, max_doc_proportion=1.0):
    return Vocabulary.fit(training_corpus, min_doc_proportion, max_doc_proportion)


def transform(corpus, vocabulary, weighting=TFIDF):
    return vocabulary.transform(corpus, weighting)
