"""Runs the analysis stages in order and hands the tables to the renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import networkx as nx
import pandas as pd

from profile_bigrams import viz
from profile_bigrams.config import AnalysisSettings
from profile_bigrams.data_prep import clean_text, drop_incomplete, label_groups, load_profiles, select_fields
from profile_bigrams.graph import build_bigram_graph, graph_summary
from profile_bigrams.metrics import bigram_tf_idf, count_bigrams, group_totals, top_by_group
from profile_bigrams.ngrams import default_stopwords, filter_stopwords, load_stopwords, unnest_ngrams
from profile_bigrams.sentiment import load_lexicon, negated_word_scores, top_contributions, vader_lexicon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    profiles: pd.DataFrame          # text, group
    ngrams: pd.DataFrame            # word1..wordN, group (unfiltered)
    counts: pd.DataFrame            # unfiltered counts per group
    filtered_counts: pd.DataFrame   # counts after stopword removal
    tf_idf: pd.DataFrame
    top_tf_idf: pd.DataFrame
    negated: pd.DataFrame
    top_negated: pd.DataFrame
    graph: nx.DiGraph


def run_pipeline(
    settings: AnalysisSettings,
    profiles: Optional[pd.DataFrame] = None,
    lexicon: Optional[pd.DataFrame] = None,
    stopwords=None,
) -> AnalysisResult:
    """
    profiles: raw table to use instead of reading settings.data_path.
    lexicon / stopwords: override the configured (or default) lookup tables.
    """
    if profiles is None:
        raw = load_profiles(settings.data_path, settings.text_column, settings.group_column)
    else:
        raw = select_fields(profiles, settings.text_column, settings.group_column)

    labeled = drop_incomplete(label_groups(raw, settings.negative_group_value, settings.group_labels))
    labeled = labeled.assign(text=labeled["text"].map(clean_text))
    logger.info("Profiles per group: %s", labeled["group"].value_counts().sort_index().to_dict())

    if stopwords is None:
        stopwords = load_stopwords(settings.stopwords_path) if settings.stopwords_path else default_stopwords()
    if lexicon is None:
        lexicon = load_lexicon(settings.lexicon_path) if settings.lexicon_path else vader_lexicon()

    grams = unnest_ngrams(labeled, settings.ngram_size)
    logger.info("%d-grams per group: %s", settings.ngram_size, group_totals(grams).to_dict())
    counts = count_bigrams(grams)
    filtered = filter_stopwords(grams, stopwords)
    filtered_counts = count_bigrams(filtered)
    tfidf = bigram_tf_idf(filtered, n_groups=len(settings.group_labels))

    # negation scoring and the word graph are defined on adjacent pairs
    bigrams = grams if settings.ngram_size == 2 else unnest_ngrams(labeled, 2)
    negated = negated_word_scores(bigrams, lexicon, settings.negation_words)
    pair_counts = filtered_counts if settings.ngram_size == 2 else count_bigrams(filter_stopwords(bigrams, stopwords))
    graph = build_bigram_graph(pair_counts, settings.graph_group, settings.graph_min_count)
    logger.info("Bigram graph: %s", graph_summary(graph))

    return AnalysisResult(
        profiles=labeled,
        ngrams=grams,
        counts=counts,
        filtered_counts=filtered_counts,
        tf_idf=tfidf,
        top_tf_idf=top_by_group(tfidf, settings.top_n),
        negated=negated,
        top_negated=top_contributions(negated, settings.negation_top_k),
        graph=graph,
    )


def write_tables(result: AnalysisResult, out_dir) -> Dict[str, str]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    tables = {
        "bigram_counts": result.counts,
        "bigram_counts_filtered": result.filtered_counts,
        "tf_idf": result.tf_idf,
        "negated_words": result.negated,
    }
    saved = {}
    for name, df in tables.items():
        path = out_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        saved[name] = str(path)
    edges = nx.to_pandas_edgelist(result.graph, source="word1", target="word2")
    path = out_dir / "bigram_graph_edges.csv"
    edges.to_csv(path, index=False)
    saved["bigram_graph_edges"] = str(path)
    return saved


def render_all(result: AnalysisResult, out_dir, settings: AnalysisSettings, show: bool = False) -> Dict[str, str]:
    """Write every chart whose input is non-empty; return name -> path."""
    out_dir = Path(out_dir)
    saved: Dict[str, str] = {}

    jobs = [
        ("top_bigrams", result.filtered_counts,
         lambda p: viz.plot_top_bigrams(result.filtered_counts, p, show, top_n=settings.top_n)),
        ("tf_idf", result.top_tf_idf,
         lambda p: viz.plot_tf_idf_by_group(result.top_tf_idf, p, show)),
        ("negated_words", result.top_negated,
         lambda p: viz.plot_negated_words(result.top_negated, p, show)),
    ]
    for name, data, plot in jobs:
        if data.empty:
            logger.warning("Skipping %s chart: no rows", name)
            continue
        path = str(out_dir / f"{name}.png")
        plot(path)
        saved[name] = path

    if result.graph.number_of_nodes() == 0:
        logger.warning("Skipping bigram graph: no bigrams above %d in group %r",
                       settings.graph_min_count, settings.graph_group)
    else:
        path = str(out_dir / "bigram_graph.png")
        viz.plot_bigram_graph(result.graph, path, show, seed=settings.layout_seed)
        saved["bigram_graph"] = path

    return saved
