# scripts/build_features.py
# Clean, dedupe and time-split Fake.csv / True.csv, then write the frozen
# vocabulary, embedding table and feature matrices.
# Run:
#   python scripts/build_features.py
#   python scripts/build_features.py --no-embeddings --min-doc-proportion 0.005
#   python scripts/build_features.py --config run.json

import argparse
import logging

from newsprep.config import load_config
from newsprep.corpus import IngestError
from newsprep.pipeline import run

parser = argparse.ArgumentParser(description="Build leak-free features for Fake/Real news")
parser.add_argument("--config", help="JSON file overriding PipelineConfig fields")
parser.add_argument("--data-dir")
parser.add_argument("--out-dir")
parser.add_argument("--min-doc-proportion", type=float)
parser.add_argument("--seed", type=int)
parser.add_argument("--train-range", nargs=2, metavar=("START", "END"))
parser.add_argument("--eval-range", nargs=2, metavar=("START", "END"))
parser.add_argument("--no-embeddings", dest="embeddings", action="store_false", default=None,
                    help="Skip Word2Vec, embedding aggregates and sequences")


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    overrides = {k: v for k, v in vars(args).items() if k != "config"}
    config = load_config(args.config, **overrides)

    try:
        result = run(config)
    except IngestError as e:
        raise SystemExit(f"Ingest failed: {e}")

    print(f"Corpus: {len(result.corpus):,} documents "
          f"(train {len(result.train):,}, eval {len(result.eval):,})")
    print(f"Vocabulary: {len(result.vocabulary):,} terms")
    for name, path in result.artifacts.items():
        print(f"Saved {name:>16} → {path.resolve()}")


if __name__ == "__main__":
    main()
