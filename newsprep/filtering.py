# newsprep/filtering.py
"""Stopword and short-token removal on normalized text."""

import re

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from .normalize import CONTRACTIONS, collapse_whitespace

# scikit-learn's list has no apostrophe forms, the normalizer keeps them
STOPWORDS = frozenset(ENGLISH_STOP_WORDS) | frozenset(CONTRACTIONS.values())

MIN_TOKEN_LENGTH = 4

_PUNCT_RE = re.compile(r"[^a-z\s]")


def filter_tokens(normalized_text, stopwords=STOPWORDS, min_token_length=MIN_TOKEN_LENGTH):
    """Drop stopwords, then punctuation, then tokens shorter than ``min_token_length``.

    The default keeps tokens of four or more characters, i.e. anything of
    length <= 3 is removed. An empty string comes back for text with nothing
    left; callers decide whether to drop the row.
    """
    if not normalized_text:
        return ""
    tokens = [t for t in normalized_text.split() if t not in stopwords]
    text = collapse_whitespace(_PUNCT_RE.sub("", " ".join(tokens)))
    return " ".join(t for t in text.split() if len(t) >= min_token_length)
