from __future__ import annotations
import logging
from typing import Dict

import networkx as nx
import pandas as pd

logger = logging.getLogger(__name__)


def build_bigram_graph(counts: pd.DataFrame, group: str = "yes", min_count: int = 20) -> nx.DiGraph:
    """
    Directed word graph from a count table (word1, word2, group, n).

    Only rows of `group` with n > min_count survive; each becomes an edge
    word1 -> word2 with weight n. Edges are inserted in count order
    (n desc, then words) so node/edge iteration is stable between runs.
    """
    if counts.empty:
        return nx.DiGraph()
    need = {"word1", "word2", "n"}
    miss = need - set(counts.columns)
    if miss:
        raise ValueError(f"counts is missing columns: {sorted(miss)}")

    sub = counts
    if "group" in counts.columns:
        sub = sub[sub["group"] == group]
    sub = sub[sub["n"] > min_count]
    if sub.empty:
        logger.info("No bigrams in group %r above %d occurrences", group, min_count)
        return nx.DiGraph()

    sub = sub.sort_values(["n", "word1", "word2"], ascending=[False, True, True], kind="mergesort")
    g = nx.from_pandas_edgelist(
        sub.rename(columns={"n": "weight"}),
        source="word1", target="word2",
        edge_attr=["weight"],
        create_using=nx.DiGraph(),
    )
    g.graph["group"] = group
    g.graph["min_count"] = min_count
    return g


def graph_summary(g: nx.DiGraph) -> Dict[str, int]:
    return {
        "nodes": g.number_of_nodes(),
        "edges": g.number_of_edges(),
        "total_weight": int(sum(w for _, _, w in g.edges(data="weight", default=0))),
    }
