from __future__ import annotations
import os
from typing import Optional, Tuple, List
import numpy as np
import pandas as pd
import networkx as nx
import matplotlib.pyplot as plt

GROUP_COLORS = ("#1b9e77", "#d95f02")

def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)

def _finish(fig: plt.Figure, out_path: Optional[str], show: bool) -> Optional[str]:
    fig.tight_layout()
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
        saved = out_path
    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved

def _require(df: pd.DataFrame, need: set, name: str) -> None:
    miss = need - set(df.columns)
    if miss:
        raise ValueError(f"'{name}' is missing columns: {miss}")
    if df.empty:
        raise ValueError(f"'{name}' is empty; nothing to plot.")


def _faceted_bars(
    df: pd.DataFrame,
    label_col: str,
    value_col: str,
    facet_col: str,
    title: str,
    xlabel: str,
    colors: Optional[List] = None,
) -> Tuple[plt.Figure, List[plt.Axes]]:
    facets = sorted(df[facet_col].unique())
    height = max(3.0, 0.32 * df.groupby(facet_col).size().max() + 1.2)
    fig, axes = plt.subplots(1, len(facets), figsize=(6 * len(facets), height), squeeze=False)
    axes = list(axes[0])
    for i, (ax, key) in enumerate(zip(axes, facets)):
        sub = df[df[facet_col] == key].iloc[::-1]   # largest on top
        color = colors[i % len(colors)] if colors else None
        ax.barh(sub[label_col].astype(str), sub[value_col], color=color)
        ax.set_title(f"{facet_col} = {key}")
        ax.set_xlabel(xlabel)
    fig.suptitle(title)
    return fig, axes


def plot_top_bigrams(
    counts: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    top_n: int = 15,
) -> Tuple[plt.Figure, List[plt.Axes], Optional[str]]:
    """
    Most frequent bigrams per group.

    Expects columns: ['word1',..,'wordN','group','n'].
    """
    _require(counts, {"word1", "group", "n"}, "counts")
    words = [c for c in counts.columns if c.startswith("word")]
    top = counts.groupby("group", sort=True).head(top_n).copy()
    top["bigram"] = top[words].astype(str).agg(" ".join, axis=1)
    fig, axes = _faceted_bars(top, "bigram", "n", "group",
                              f"Top {top_n} bigrams by group", "Occurrences",
                              colors=list(GROUP_COLORS))
    return fig, axes, _finish(fig, out_path, show)


def plot_tf_idf_by_group(
    top: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, List[plt.Axes], Optional[str]]:
    """
    Highest tf-idf bigrams per group (output of metrics.top_by_group).

    Expects columns: ['bigram','group','tf_idf'].
    """
    _require(top, {"bigram", "group", "tf_idf"}, "top")
    fig, axes = _faceted_bars(top, "bigram", "tf_idf", "group",
                              "Most distinctive bigrams by group", "tf-idf",
                              colors=list(GROUP_COLORS))
    return fig, axes, _finish(fig, out_path, show)


def plot_negated_words(
    scores: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, List[plt.Axes], Optional[str]]:
    """
    Sentiment contribution of words following a negation term,
    one panel per negation word, bars colored by sign.

    Expects columns: ['negation_word','word2','contribution'].
    """
    _require(scores, {"negation_word", "word2", "contribution"}, "scores")
    facets = sorted(scores["negation_word"].unique())
    height = max(3.0, 0.32 * scores.groupby("negation_word").size().max() + 1.2)
    fig, axes = plt.subplots(1, len(facets), figsize=(5 * len(facets), height), squeeze=False)
    axes = list(axes[0])
    for ax, word in zip(axes, facets):
        sub = scores[scores["negation_word"] == word].iloc[::-1]
        colors = np.where(sub["contribution"] > 0, "#1b9e77", "#d95f02")
        ax.barh(sub["word2"].astype(str), sub["contribution"], color=colors)
        ax.axvline(0, color="grey", linewidth=0.8)
        ax.set_title(f'preceded by "{word}"')
        ax.set_xlabel("Sentiment score × occurrences")
    fig.suptitle("Words preceded by a negation term")
    return fig, axes, _finish(fig, out_path, show)


def plot_bigram_graph(
    g: nx.DiGraph,
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    seed: int = 2017,
    title: Optional[str] = None,
) -> Tuple[plt.Figure, plt.Axes, Optional[str], dict]:
    """
    Force-directed drawing of a bigram graph. The layout is seeded so the
    returned node positions are reproducible.
    """
    if g.number_of_nodes() == 0:
        raise ValueError("graph is empty; lower the count threshold.")

    pos = nx.spring_layout(g, seed=seed)
    weights = np.array([w for _, _, w in g.edges(data="weight", default=1)], dtype=float)
    widths = list(0.5 + 2.5 * (weights / weights.max())) if len(weights) else 1.0

    fig, ax = plt.subplots(figsize=(12, 9))
    nx.draw_networkx_edges(g, pos, ax=ax, width=widths, alpha=0.7,
                           arrows=True, arrowstyle="-|>", arrowsize=10,
                           edge_color="#5e81ac", node_size=60)
    nx.draw_networkx_nodes(g, pos, ax=ax, node_size=60, node_color="#88c0d0")
    nx.draw_networkx_labels(g, pos, ax=ax, font_size=9,
                            labels={n: n for n in g.nodes()},
                            verticalalignment="bottom")
    group = g.graph.get("group")
    ax.set_title(title or (f"Common bigrams (group = {group})" if group else "Common bigrams"))
    ax.axis("off")
    return fig, ax, _finish(fig, out_path, show), pos
