# newsprep/corpus.py
"""Typed article records, CSV ingest and the fake/real merge.

Each source CSV (Fake.csv / True.csv) becomes a list of ``Document``s with
normalized and cleaned text computed once at ingest. ``merge`` puts every
fake document first, then every real one, drops empty rows and keeps the
first occurrence of each cleaned text.
"""

import logging
from dataclasses import dataclass
from collections.abc import Sequence
from typing import Optional

import pandas as pd

from .filtering import MIN_TOKEN_LENGTH, filter_tokens
from .normalize import FAKE, REAL, SOURCES, normalize

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("text", "date", "subject")
LABELS = {FAKE: 1, REAL: 0}

EXPORT_COLUMNS = ["doc_id", "source", "label", "date", "subject", "title", "normalized", "cleaned"]


class IngestError(ValueError):
    """A source file is unreadable or lacks a required column."""


@dataclass(frozen=True)
class Document:
    doc_id: str
    source: str
    label: int
    title: str
    text: str
    subject: str
    date: Optional[pd.Timestamp]
    normalized: str
    cleaned: str

    @property
    def tokens(self):
        return self.cleaned.split()

    @property
    def is_empty(self):
        return not self.text.strip() or not self.cleaned


class Corpus(Sequence):
    """Ordered, read-only collection of documents."""

    def __init__(self, documents=()):
        self._docs = tuple(documents)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return Corpus(self._docs[i])
        return self._docs[i]

    def __len__(self):
        return len(self._docs)

    def __repr__(self):
        return f"Corpus({len(self)} documents)"

    @property
    def texts(self):
        return [d.cleaned for d in self._docs]

    @property
    def labels(self):
        return [d.label for d in self._docs]

    def label_counts(self):
        counts = {FAKE: 0, REAL: 0}
        for d in self._docs:
            counts[d.source] += 1
        return counts

    def to_frame(self):
        rows = [{c: getattr(d, c) for c in EXPORT_COLUMNS} for d in self._docs]
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        df["date"] = pd.to_datetime(df["date"])
        return df

    def to_csv(self, path):
        self.to_frame().to_csv(path, index=False)

    @classmethod
    def from_frame(cls, df):
        """Rebuild a corpus from an exported frame; text is taken as already cleaned."""
        missing = [c for c in EXPORT_COLUMNS if c not in df.columns]
        if missing:
            raise IngestError(f"Corpus frame is missing columns: {missing}")
        dates = pd.to_datetime(df["date"], errors="coerce")
        docs = []
        for row, date in zip(df.itertuples(index=False), dates):
            docs.append(Document(
                doc_id=str(row.doc_id),
                source=row.source,
                label=int(row.label),
                title=_as_text(row.title),
                text=_as_text(row.normalized),
                subject=_as_text(row.subject),
                date=None if pd.isna(date) else date,
                normalized=_as_text(row.normalized),
                cleaned=_as_text(row.cleaned),
            ))
        return cls(docs)

    @classmethod
    def read_csv(cls, path):
        return cls.from_frame(pd.read_csv(path, keep_default_na=False, na_values=[""]))


def _as_text(value):
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value)


def load_source(path, source):
    """Read one labeled CSV and validate its columns.

    Raises ``IngestError`` when the file cannot be read or any of
    ``REQUIRED_COLUMNS`` is missing.
    """
    if source not in SOURCES:
        raise ValueError(f"Unknown source {source!r}; expected one of {SOURCES}")
    try:
        df = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise IngestError(f"Cannot read {source} source {path}: {e}") from e

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise IngestError(f"{path} is missing required columns: {missing}")
    log.info("Loaded %s rows from %s (%s)", f"{len(df):,}", path, source)
    return df


def build_documents(df, source, min_token_length=MIN_TOKEN_LENGTH):
    """Normalize and filter every row of a source frame, preserving row order.

    Rows whose text ends up empty are kept here; ``merge`` drops them.
    """
    if source not in SOURCES:
        raise ValueError(f"Unknown source {source!r}; expected one of {SOURCES}")
    # dates in the fake set are messy (URLs, "Dec 31, 2017", "19-Feb-18")
    dates = pd.to_datetime(df["date"].astype(str).str.strip(), errors="coerce", format="mixed")
    titles = df["title"] if "title" in df.columns else pd.Series([""] * len(df), index=df.index)

    docs = []
    for i, (text, title, subject, date) in enumerate(zip(df["text"], titles, df["subject"], dates)):
        text = _as_text(text)
        normalized = normalize(text, source)
        docs.append(Document(
            doc_id=f"{source}-{i}",
            source=source,
            label=LABELS[source],
            title=_as_text(title),
            text=text,
            subject=_as_text(subject),
            date=None if pd.isna(date) else date,
            normalized=normalized,
            cleaned=filter_tokens(normalized, min_token_length=min_token_length),
        ))
    return docs


def merge(fake_docs, real_docs):
    """Concatenate fake then real documents, dropping empty and duplicate texts."""
    kept, seen = [], set()
    n_empty = n_dup = 0
    for doc in list(fake_docs) + list(real_docs):
        if doc.is_empty:
            n_empty += 1
            continue
        if doc.cleaned in seen:
            n_dup += 1
            continue
        seen.add(doc.cleaned)
        kept.append(doc)
    log.info("Merged corpus: kept %s, dropped %s empty and %s duplicate documents",
             f"{len(kept):,}", f"{n_empty:,}", f"{n_dup:,}")
    return Corpus(kept)


def load_corpus(fake_path, real_path, min_token_length=MIN_TOKEN_LENGTH):
    """Ingest both sources and merge them. Both files are validated before any text is processed."""
    fake_df = load_source(fake_path, FAKE)
    real_df = load_source(real_path, REAL)
    return merge(
        build_documents(fake_df, FAKE, min_token_length),
        build_documents(real_df, REAL, min_token_length),
    )
