# scripts/train_baseline.py
# Elastic-net logistic regression on the time-split features written by
# scripts/build_features.py.
# Run:
#   python scripts/train_baseline.py                   # TF-IDF features
#   python scripts/train_baseline.py --features count
#   python scripts/train_baseline.py --features embedded

import argparse
import logging
from pathlib import Path

import joblib
import matplotlib
matplotlib.use("Agg")
import numpy as np
import scipy.sparse as sp

from newsprep.classify import evaluate, fit_elastic_net, plot_confusion_matrix, plot_roc_curve
from newsprep.config import FIGS, MODELS, RANDOM_STATE

FEATURES = ("count", "tfidf", "embedded")

parser = argparse.ArgumentParser(description="Elastic-net baseline on prepared features")
parser.add_argument("--features", choices=FEATURES, default="tfidf")
parser.add_argument("--artifacts", type=Path, default=MODELS)
parser.add_argument("--cv", type=int, default=5)
parser.add_argument("--seed", type=int, default=RANDOM_STATE)


def load_features(artifacts, name, features):
    if features == "embedded":
        X = np.load(artifacts / f"{name}_embedded.npy")
    else:
        X = sp.load_npz(artifacts / f"{name}_{features}.npz")
    y = np.load(artifacts / f"{name}_labels.npy")
    return X, y


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        Xtr, ytr = load_features(args.artifacts, "train", args.features)
        Xte, yte = load_features(args.artifacts, "eval", args.features)
    except FileNotFoundError as e:
        raise SystemExit(f"Missing feature artifacts ({e}). Run: python scripts/build_features.py")

    search = fit_elastic_net(Xtr, ytr, seed=args.seed, cv=args.cv)
    metrics, probs = evaluate(search.best_estimator_, Xte, yte)
    preds = (probs >= 0.5).astype(int)

    print(f"Best params: {search.best_params_}")
    print(metrics["report"])
    print("Time-split ROC-AUC:", round(metrics["roc_auc"], 4))
    print("Time-split F1     :", round(metrics["f1"], 4))

    FIGS.mkdir(parents=True, exist_ok=True)
    roc = plot_roc_curve(yte, probs, FIGS / f"roc_curve_{args.features}.png")
    cm = plot_confusion_matrix(yte, preds, FIGS / f"confusion_matrix_{args.features}.png")
    model_path = args.artifacts / f"logreg_elasticnet_{args.features}.joblib"
    joblib.dump(search.best_estimator_, model_path)
    for path in (roc, cm, model_path):
        print("Saved →", path.resolve())


if __name__ == "__main__":
    main()
