# newsprep/sequences.py
"""Padded token-index sequences for the recurrent models.

Index 0 is padding; a vocabulary term at column ``i`` gets index ``i + 1``.
Tokens outside the vocabulary are dropped before truncation, sequences keep
their first ``max_len`` known tokens and are zero-padded at the end.
"""

import numpy as np

from .config import MAX_SEQUENCE_LEN

PAD = 0


def encode_tokens(tokens, vocabulary, max_len=MAX_SEQUENCE_LEN):
    seq = np.full(max_len, PAD, dtype=np.int32)
    ids = [vocabulary.index[t] + 1 for t in tokens if t in vocabulary.index]
    ids = ids[:max_len]
    seq[:len(ids)] = ids
    return seq


def encode_sequences(corpus, vocabulary, max_len=MAX_SEQUENCE_LEN):
    if max_len < 1:
        raise ValueError("max_len must be positive")
    out = np.full((len(corpus), max_len), PAD, dtype=np.int32)
    for row, doc in enumerate(corpus):
        out[row] = encode_tokens(doc.tokens, vocabulary, max_len)
    return out


def embedding_matrix(vocabulary, table):
    """Weight matrix aligned with ``encode_sequences`` indices.

    Row 0 (padding) and rows of terms the table lacks stay zero.
    """
    weights = np.zeros((len(vocabulary) + 1, table.dim), dtype=np.float32)
    for term, i in vocabulary.index.items():
        if term in table:
            weights[i + 1] = table[term]
    return weights
