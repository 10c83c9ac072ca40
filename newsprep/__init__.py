"""Cleaning, time-split and feature extraction for the Fake/True news datasets."""

from .corpus import Corpus, Document, IngestError, merge
from .filtering import filter_tokens
from .normalize import normalize
from .split import DateRange, split
from .vocab import Vocabulary

__version__ = "1.0.0"

__all__ = [
    "Corpus",
    "DateRange",
    "Document",
    "IngestError",
    "Vocabulary",
    "filter_tokens",
    "merge",
    "normalize",
    "split",
]
