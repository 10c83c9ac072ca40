# newsprep/eda.py
"""Exploratory tables and charts over a cleaned corpus.

Tables are plain DataFrames so they can be checked without drawing. The
plot helpers each write one PNG and return its path.
"""

import logging
from collections import Counter

import matplotlib.pyplot as plt
import pandas as pd
from wordcloud import WordCloud

from .plots import save_figure

log = logging.getLogger(__name__)

LABEL_NAMES = {1: "Fake", 0: "Real"}

plt.rcParams.update({"figure.dpi": 130, "savefig.dpi": 160, "axes.grid": True, "grid.alpha": 0.25})


def _docs(corpus, label=None):
    return [d for d in corpus if label is None or d.label == label]


def term_frequencies(corpus, label=None, top_n=20):
    """Most frequent cleaned tokens, with their share of all tokens."""
    counts = Counter()
    for d in _docs(corpus, label):
        counts.update(d.tokens)
    total = sum(counts.values())
    rows = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:top_n]
    df = pd.DataFrame(rows, columns=["term", "count"])
    df["share"] = df["count"] / total if total else 0.0
    return df


def monthly_counts(corpus):
    """Article counts per month (rows) and label (columns), dated documents only."""
    df = pd.DataFrame(
        [(d.date, LABEL_NAMES[d.label]) for d in corpus if d.date is not None],
        columns=["date", "label"],
    )
    if df.empty:
        return pd.DataFrame(columns=list(LABEL_NAMES.values()))
    df["month"] = pd.to_datetime(df["date"]).dt.to_period("M").dt.to_timestamp()
    table = df.groupby(["month", "label"]).size().unstack("label", fill_value=0).sort_index()
    return table.reindex(columns=list(LABEL_NAMES.values()), fill_value=0)


def topic_drift(corpus, terms, freq="M", label=None):
    """Share of dated documents per period that contain each term.

    Rows are period starts, columns the requested terms.
    """
    terms = list(terms)
    rows = []
    for d in _docs(corpus, label):
        if d.date is None:
            continue
        present = set(d.tokens)
        rows.append([d.date] + [t in present for t in terms])
    if not rows:
        return pd.DataFrame(columns=terms, dtype=float)
    df = pd.DataFrame(rows, columns=["date"] + terms)
    df["period"] = pd.to_datetime(df["date"]).dt.to_period(freq).dt.to_timestamp()
    return df.groupby("period")[terms].mean().sort_index()


# ---------- figures ----------

def plot_length_histogram(corpus, path):
    lengths = pd.Series([len(d.tokens) for d in corpus], dtype=float)
    if not lengths.empty:
        lengths = lengths.clip(upper=lengths.quantile(0.99))
    plt.figure(figsize=(8.5, 5))
    plt.hist(lengths, bins=40, edgecolor="black", alpha=0.8)
    plt.title("Histogram of Cleaned Article Lengths"); plt.xlabel("Tokens"); plt.ylabel("Frequency")
    return save_figure(path)


def plot_label_counts(corpus, path):
    counts = pd.Series([LABEL_NAMES[d.label] for d in corpus]).value_counts()
    counts = counts.reindex(list(LABEL_NAMES.values()), fill_value=0)
    plt.figure(figsize=(6.5, 5))
    bars = plt.bar(counts.index, counts.values, alpha=0.85)
    plt.title("Fake vs Real Count"); plt.xlabel("Label"); plt.ylabel("Number of Articles")
    for b in bars:
        plt.text(b.get_x() + b.get_width() / 2, b.get_height(), f"{int(b.get_height()):,}", ha="center", va="bottom")
    return save_figure(path)


def plot_monthly_counts(corpus, path):
    monthly = monthly_counts(corpus)
    plt.figure(figsize=(9.5, 5.2))
    for name in monthly.columns:
        plt.plot(monthly.index, monthly[name], marker="o", linewidth=2, label=name)
    plt.title("Articles Over Time"); plt.xlabel("Month"); plt.ylabel("Number of Articles")
    plt.legend()
    plt.gcf().autofmt_xdate()
    return save_figure(path)


def plot_top_terms(corpus, path, label=None, top_n=20):
    freq = term_frequencies(corpus, label=label, top_n=top_n).iloc[::-1]
    title = "all articles" if label is None else LABEL_NAMES[label]
    plt.figure(figsize=(7.5, 0.3 * max(len(freq), 5) + 1.5))
    plt.barh(freq["term"], freq["count"], alpha=0.85)
    plt.title(f"Top {top_n} terms ({title})"); plt.xlabel("Count")
    return save_figure(path)


def plot_word_cloud(corpus, path, label=None, max_words=200, seed=42):
    counts = Counter()
    for d in _docs(corpus, label):
        counts.update(d.tokens)
    if not counts:
        raise ValueError("No tokens to draw a word cloud from")
    cloud = WordCloud(width=1200, height=600, background_color="white",
                      max_words=max_words, random_state=seed).generate_from_frequencies(counts)
    title = "All articles" if label is None else f"{LABEL_NAMES[label]} articles"
    plt.figure(figsize=(12, 6))
    plt.imshow(cloud, interpolation="bilinear")
    plt.axis("off")
    plt.title(f"Word Cloud - {title}")
    return save_figure(path)


def plot_topic_drift(corpus, terms, path, freq="M", label=None):
    drift = topic_drift(corpus, terms, freq=freq, label=label)
    plt.figure(figsize=(9.5, 5.2))
    for term in drift.columns:
        plt.plot(drift.index, drift[term], marker="o", linewidth=1.5, label=term)
    plt.title("Topic drift: share of articles mentioning each term")
    plt.xlabel("Period"); plt.ylabel("Share of articles")
    plt.legend()
    plt.gcf().autofmt_xdate()
    return save_figure(path)
