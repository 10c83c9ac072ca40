# newsprep/classify.py
"""Elastic-net logistic regression over the prepared feature matrices.

This is the classical-ML consumer of the pipeline: it takes any of the
count, TF-IDF or embedding-aggregate matrices plus the document labels
(fake=1, real=0) and knows nothing about how they were built.
"""

import logging
import re

import matplotlib.pyplot as plt
import numpy as np
import sklearn
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import (ConfusionMatrixDisplay, accuracy_score, auc,
                             classification_report, confusion_matrix, f1_score,
                             roc_auc_score, roc_curve)
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from .config import RANDOM_STATE
from .plots import save_figure

log = logging.getLogger(__name__)

C_GRID = (0.01, 0.1, 1.0, 10.0)
L1_RATIO_GRID = (0.0, 0.25, 0.5, 0.75, 1.0)


def _sklearn_version():
    major, minor = re.match(r"(\d+)\.(\d+)", sklearn.__version__).groups()
    return int(major), int(minor)


def elastic_net_estimator(seed=RANDOM_STATE, max_iter=2000):
    """Unfitted saga LogisticRegression whose L1/L2 mix follows ``l1_ratio``.

    scikit-learn 1.8 deprecated ``penalty``; from then on ``l1_ratio`` alone
    selects the elastic-net mix.
    """
    kwargs = dict(solver="saga", max_iter=max_iter, random_state=seed)
    if _sklearn_version() < (1, 8):
        kwargs["penalty"] = "elasticnet"
    return LogisticRegression(**kwargs)


def fit_elastic_net(X, y, seed=RANDOM_STATE, cv=5, Cs=C_GRID, l1_ratios=L1_RATIO_GRID,
                    max_iter=2000, n_jobs=None):
    """Grid-search C and l1_ratio with stratified, seeded folds; return the fitted search."""
    y = np.asarray(y)
    if len(np.unique(y)) < 2:
        raise ValueError("Need both labels in the training data")
    base = elastic_net_estimator(seed=seed, max_iter=max_iter)
    search = GridSearchCV(
        base,
        param_grid={"C": list(Cs), "l1_ratio": list(l1_ratios)},
        scoring="roc_auc",
        cv=StratifiedKFold(n_splits=cv, shuffle=True, random_state=seed),
        n_jobs=n_jobs,
        refit=True,
    )
    search.fit(X, y)
    log.info("Best params %s (cv ROC-AUC %.4f)", search.best_params_, search.best_score_)
    return search


def evaluate(model, X, y, threshold=0.5):
    y = np.asarray(y)
    probs = model.predict_proba(X)[:, 1]
    preds = (probs >= threshold).astype(int)
    metrics = {
        "accuracy": accuracy_score(y, preds),
        "f1": f1_score(y, preds, zero_division=0),
        "roc_auc": roc_auc_score(y, probs) if len(np.unique(y)) == 2 else float("nan"),
        "report": classification_report(y, preds, labels=[0, 1], target_names=["Real(0)", "Fake(1)"],
                                        digits=4, zero_division=0),
    }
    return metrics, probs


def plot_roc_curve(y, probs, path, title="ROC Curve (Time Split)"):
    fpr, tpr, _ = roc_curve(y, probs)
    roc_auc = auc(fpr, tpr)
    plt.figure(figsize=(6.5, 5))
    plt.plot(fpr, tpr, linewidth=2, label=f"AUC = {roc_auc:.3f}")
    plt.plot([0, 1], [0, 1], "--", linewidth=1)
    plt.xlabel("False Positive Rate"); plt.ylabel("True Positive Rate")
    plt.title(title)
    plt.legend()
    return save_figure(path)


def plot_confusion_matrix(y, preds, path, title="Confusion Matrix (Time Split)"):
    cm = confusion_matrix(y, preds, labels=[0, 1])
    disp = ConfusionMatrixDisplay(cm, display_labels=["Real(0)", "Fake(1)"])
    disp.plot(values_format="d")
    plt.title(title)
    return save_figure(path)
