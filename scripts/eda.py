# scripts/eda.py
# Charts over the cleaned corpus written by scripts/build_features.py
# (falls back to cleaning the raw CSVs if models/corpus.csv is missing).
# Run:
#   python scripts/eda.py
#   python scripts/eda.py --drift-terms trump clinton russia obama

import argparse
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

from newsprep import eda
from newsprep.config import FIGS, MODELS, load_config
from newsprep.corpus import Corpus, load_corpus
from newsprep.pipeline import CORPUS_FILE

parser = argparse.ArgumentParser(description="Exploratory charts for Fake/Real news")
parser.add_argument("--corpus", type=Path, default=MODELS / CORPUS_FILE)
parser.add_argument("--top-n", type=int, default=20)
parser.add_argument("--drift-terms", nargs="+", default=["trump", "clinton", "obama", "russia", "korea"])


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.corpus.exists():
        corpus = Corpus.read_csv(args.corpus)
    else:
        config = load_config()
        corpus = load_corpus(config.fake_path, config.real_path, config.min_token_length)
    print(f"Loaded {len(corpus):,} articles")

    FIGS.mkdir(parents=True, exist_ok=True)
    saved = [
        eda.plot_length_histogram(corpus, FIGS / "hist_article_lengths.png"),
        eda.plot_label_counts(corpus, FIGS / "bar_fake_vs_real.png"),
        eda.plot_monthly_counts(corpus, FIGS / "line_articles_over_time.png"),
    ]
    for label, name in eda.LABEL_NAMES.items():
        saved.append(eda.plot_top_terms(corpus, FIGS / f"top_terms_{name.lower()}.png", label=label, top_n=args.top_n))
        saved.append(eda.plot_word_cloud(corpus, FIGS / f"wordcloud_{name.lower()}.png", label=label))
        saved.append(eda.plot_topic_drift(corpus, args.drift_terms, FIGS / f"topic_drift_{name.lower()}.png", label=label))

    for label, name in eda.LABEL_NAMES.items():
        print(f"\nTop terms ({name}):")
        print(eda.term_frequencies(corpus, label=label, top_n=10).to_string(index=False))

    print("\nSaved charts:")
    for path in saved:
        print(" -", path.resolve())


if __name__ == "__main__":
    main()
