# scripts/debug_time_split.py
# Show how many cleaned, deduplicated articles land in each date range
# before committing to a full feature build.
# Run:
#   python scripts/debug_time_split.py
#   python scripts/debug_time_split.py --train-range 2016-01-01 2017-04-01 --eval-range 2017-04-01 2018-01-01

import argparse
import logging

from newsprep.config import load_config
from newsprep.corpus import load_corpus
from newsprep.split import split, split_summary

parser = argparse.ArgumentParser(description="Inspect the date-based split")
parser.add_argument("--config")
parser.add_argument("--data-dir")
parser.add_argument("--train-range", nargs=2, metavar=("START", "END"))
parser.add_argument("--eval-range", nargs=2, metavar=("START", "END"))


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)
    config = load_config(args.config, data_dir=args.data_dir,
                         train_range=args.train_range, eval_range=args.eval_range)

    corpus = load_corpus(config.fake_path, config.real_path, config.min_token_length)
    undated = sum(d.date is None for d in corpus)
    print("Documents after cleaning and dedup:", f"{len(corpus):,}")
    print("Without a parseable date:", f"{undated:,}")
    print(corpus.label_counts(), "\n")

    train_range, eval_range = config.date_ranges()
    train, evaluation = split(corpus, train_range, eval_range)
    print(f"Train: {train_range[0].date()} .. {train_range[1].date()}")
    print(f"Eval : {eval_range[0].date()} .. {eval_range[1].date()}")
    print(split_summary(train, evaluation))


if __name__ == "__main__":
    main()
