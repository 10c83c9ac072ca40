# newsprep/config.py
"""Defaults and run configuration for the feature pipeline.

A run can be tweaked without touching code: point ``NEWSPREP_CONFIG`` (or
``--config`` on the scripts) at a JSON file, any key matching a
``PipelineConfig`` field overrides the default.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

import pandas as pd

log = logging.getLogger(__name__)

DATA = Path("data")
FIGS = Path("figures")
MODELS = Path("models")

RANDOM_STATE = 42

FAKE_FILE = "Fake.csv"
REAL_FILE = "True.csv"

# half-open [start, end) ranges
TRAIN_RANGE = ("2016-01-01", "2017-07-01")
EVAL_RANGE = ("2017-07-01", "2018-01-01")

MIN_DOC_PROPORTION = 0.01
MAX_DOC_PROPORTION = 1.0
MIN_TOKEN_LENGTH = 4

EMBEDDING_DIM = 100
EMBEDDING_WINDOW = 5
EMBEDDING_MIN_COUNT = 5
EMBEDDING_EPOCHS = 5
MAX_SEQUENCE_LEN = 300

CONFIG_ENV = "NEWSPREP_CONFIG"


@dataclass(frozen=True)
class PipelineConfig:
    data_dir: Path = DATA
    out_dir: Path = MODELS
    fake_file: str = FAKE_FILE
    real_file: str = REAL_FILE
    train_range: tuple = TRAIN_RANGE
    eval_range: tuple = EVAL_RANGE
    min_doc_proportion: float = MIN_DOC_PROPORTION
    max_doc_proportion: float = MAX_DOC_PROPORTION
    min_token_length: int = MIN_TOKEN_LENGTH
    seed: int = RANDOM_STATE
    embeddings: bool = True
    embedding_dim: int = EMBEDDING_DIM
    embedding_window: int = EMBEDDING_WINDOW
    embedding_min_count: int = EMBEDDING_MIN_COUNT
    embedding_epochs: int = EMBEDDING_EPOCHS
    max_sequence_len: int = MAX_SEQUENCE_LEN

    def __post_init__(self):
        object.__setattr__(self, "data_dir", Path(self.data_dir))
        object.__setattr__(self, "out_dir", Path(self.out_dir))
        object.__setattr__(self, "train_range", tuple(self.train_range))
        object.__setattr__(self, "eval_range", tuple(self.eval_range))
        for name in ("min_doc_proportion", "max_doc_proportion"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.min_doc_proportion > self.max_doc_proportion:
            raise ValueError("min_doc_proportion exceeds max_doc_proportion")
        if self.min_token_length < 1:
            raise ValueError("min_token_length must be positive")
        if self.max_sequence_len < 1:
            raise ValueError("max_sequence_len must be positive")

    @property
    def fake_path(self):
        return self.data_dir / self.fake_file

    @property
    def real_path(self):
        return self.data_dir / self.real_file

    def date_ranges(self):
        """Return ``(train, eval)`` as pairs of ``pandas.Timestamp``."""
        return (
            tuple(pd.Timestamp(d) for d in self.train_range),
            tuple(pd.Timestamp(d) for d in self.eval_range),
        )

    def with_overrides(self, overrides):
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self):
        d = asdict(self)
        d["data_dir"] = str(self.data_dir)
        d["out_dir"] = str(self.out_dir)
        d["train_range"] = list(self.train_range)
        d["eval_range"] = list(self.eval_range)
        return d


def load_config(path=None, **overrides):
    """Build a ``PipelineConfig`` from defaults, a JSON file and keyword overrides.

    ``path`` falls back to the ``NEWSPREP_CONFIG`` environment variable.
    Keyword overrides whose value is ``None`` are ignored so argparse
    namespaces can be passed straight through.
    """
    config = PipelineConfig()
    path = path or os.environ.get(CONFIG_ENV)
    if path:
        with open(path, encoding="utf-8") as f:
            file_overrides = json.load(f)
        log.info("Config override loaded from %s: %s", path, file_overrides)
        config = config.with_overrides(file_overrides)
    cli = {k: v for k, v in overrides.items() if v is not None}
    if cli:
        config = config.with_overrides(cli)
    return config
