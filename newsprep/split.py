# newsprep/split.py
"""Date-based train / evaluation split.

Membership is decided by publication date alone: train and eval cover two
non-overlapping half-open ranges, and anything undated or outside both is
left out of modeling. A seed only reorders rows inside each subset.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

from .corpus import Corpus

log = logging.getLogger(__name__)


class DateRange(NamedTuple):
    start: pd.Timestamp
    end: pd.Timestamp

    @classmethod
    def parse(cls, bounds):
        start, end = (pd.Timestamp(b) for b in bounds)
        if not start < end:
            raise ValueError(f"Empty date range: {start.date()} .. {end.date()}")
        return cls(start, end)

    def __contains__(self, date):
        return date is not None and self.start <= date < self.end

    def overlaps(self, other):
        return self.start < other.end and other.start < self.end


def _shuffled(docs, rng):
    if rng is None:
        return docs
    return [docs[i] for i in rng.permutation(len(docs))]


def split(corpus, train_range, eval_range, seed: Optional[int] = None):
    """Partition ``corpus`` into ``(train, eval)`` corpora by date.

    ``train_range`` / ``eval_range`` are ``DateRange``s or ``(start, end)``
    pairs of anything ``pandas.Timestamp`` accepts. Overlapping ranges raise
    ``ValueError``. With ``seed`` set, each subset is shuffled by its own
    ``RandomState(seed)`` draw so the result does not depend on the other
    subset's size.
    """
    train_range = DateRange.parse(train_range)
    eval_range = DateRange.parse(eval_range)
    if train_range.overlaps(eval_range):
        raise ValueError(f"Train range {train_range} overlaps eval range {eval_range}")

    train, evaluation = [], []
    n_out = 0
    for doc in corpus:
        if doc.date in train_range:
            train.append(doc)
        elif doc.date in eval_range:
            evaluation.append(doc)
        else:
            n_out += 1

    if seed is not None:
        train = _shuffled(train, np.random.RandomState(seed))
        evaluation = _shuffled(evaluation, np.random.RandomState(seed))

    log.info("Time split: %s train, %s eval, %s outside both ranges",
             f"{len(train):,}", f"{len(evaluation):,}", f"{n_out:,}")
    return Corpus(train), Corpus(evaluation)


def split_summary(train, evaluation):
    """Label counts and date bounds per subset, as a small DataFrame."""
    rows = []
    for name, part in (("train", train), ("eval", evaluation)):
        dates = [d.date for d in part if d.date is not None]
        counts = part.label_counts()
        rows.append({
            "split": name,
            "documents": len(part),
            "fake": counts["fake"],
            "real": counts["real"],
            "first_date": min(dates) if dates else pd.NaT,
            "last_date": max(dates) if dates else pd.NaT,
        })
    return pd.DataFrame(rows).set_index("split")
