# scripts/time_split_eval.py
# Compare count, TF-IDF and embedding-aggregate features on the time split,
# all with the same elastic-net search. Needs scripts/build_features.py first.
# Run:
#   python scripts/time_split_eval.py
#   python scripts/time_split_eval.py --cv 3

import argparse
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from newsprep.classify import evaluate, fit_elastic_net
from newsprep.config import FIGS, MODELS, RANDOM_STATE

from train_baseline import FEATURES, load_features

parser = argparse.ArgumentParser(description="Feature comparison on the time split")
parser.add_argument("--artifacts", type=Path, default=MODELS)
parser.add_argument("--cv", type=int, default=5)
parser.add_argument("--seed", type=int, default=RANDOM_STATE)


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    rows = []
    for features in FEATURES:
        try:
            Xtr, ytr = load_features(args.artifacts, "train", features)
            Xte, yte = load_features(args.artifacts, "eval", features)
        except FileNotFoundError:
            print(f"[{features}] artifacts not found, skipping")
            continue
        search = fit_elastic_net(Xtr, ytr, seed=args.seed, cv=args.cv)
        metrics, _ = evaluate(search.best_estimator_, Xte, yte)
        print(f"\n[{features}] best params: {search.best_params_}")
        print(f"[{features}] ROC-AUC: {metrics['roc_auc']:.4f}  F1: {metrics['f1']:.4f}")
        rows.append({"features": features, "roc_auc": metrics["roc_auc"], "f1": metrics["f1"]})

    if not rows:
        raise SystemExit("No feature artifacts found. Run: python scripts/build_features.py")

    results = pd.DataFrame(rows)
    FIGS.mkdir(parents=True, exist_ok=True)
    results.to_csv(FIGS / "time_split_features.csv", index=False)

    plt.figure(figsize=(6.5, 4.2))
    x = np.arange(len(results))
    w = 0.35
    plt.bar(x - w/2, results["roc_auc"], width=w, label="ROC-AUC")
    plt.bar(x + w/2, results["f1"], width=w, label="F1")
    plt.xticks(x, results["features"])
    plt.title("Time split: feature sets compared")
    plt.legend()
    plt.tight_layout()
    out_chart = FIGS / "time_split_features.png"
    plt.savefig(out_chart, dpi=160)
    plt.close()
    print(f"\nSaved comparison chart → {out_chart.resolve()}")


if __name__ == "__main__":
    main()
