from typing import Optional

import pandas as pd
import numpy as np

from profile_bigrams.ngrams import unite

TF_IDF_COLUMNS = ["bigram", "group", "n", "tf", "idf", "tf_idf"]


def _words(df: pd.DataFrame):
    return [c for c in df.columns if c.startswith("word")]


def count_bigrams(df: pd.DataFrame, by_group: bool = True) -> pd.DataFrame:
    """
    Occurrences per (word1, word2[, group]) as column n.
    Sorted by n desc; ties broken lexicographically on the key.
    """
    keys = _words(df) + (["group"] if by_group else [])
    if df.empty:
        return pd.DataFrame({**{k: pd.Series(dtype=object) for k in keys}, "n": pd.Series(dtype="int64")})
    counts = df.groupby(keys, sort=True).size().rename("n").reset_index()
    return (counts.sort_values("n", ascending=False, kind="mergesort")
                  .reset_index(drop=True))


def bigram_tf_idf(df: pd.DataFrame, n_groups: Optional[int] = None) -> pd.DataFrame:
    """
    tf-idf with each group treated as one document:
      tf     = n / total n in the group
      idf    = ln(number of groups / groups containing the bigram)
      tf_idf = tf * idf
    A bigram found in every group gets idf 0 and therefore tf_idf 0.
    n_groups is the number of groups in the study; it defaults to the
    groups present in df, which undercounts when a group has no bigrams.
    """
    if df.empty:
        return pd.DataFrame({c: pd.Series(dtype=object if c in ("bigram", "group") else float)
                             for c in TF_IDF_COLUMNS})
    united = unite(df)
    counts = united.groupby(["group", "bigram"], sort=True).size().rename("n").reset_index()

    n_docs = n_groups if n_groups is not None else counts["group"].nunique()
    doc_freq = counts.groupby("bigram")["group"].transform("nunique")
    counts["tf"] = counts["n"] / counts.groupby("group")["n"].transform("sum")
    counts["idf"] = np.log(n_docs / doc_freq)
    counts["tf_idf"] = counts["tf"] * counts["idf"]

    out = counts[TF_IDF_COLUMNS].sort_values(
        ["tf_idf", "group", "bigram"], ascending=[False, True, True], kind="mergesort"
    )
    return out.reset_index(drop=True)


def top_by_group(tfidf: pd.DataFrame, top_n: int = 15) -> pd.DataFrame:
    """Top-N rows per group, keeping the tf_idf ranking order inside each group."""
    if tfidf.empty:
        return tfidf.copy()
    ranked = tfidf.sort_values(["group", "tf_idf", "bigram"], ascending=[True, False, True], kind="mergesort")
    return ranked.groupby("group", sort=True).head(top_n).reset_index(drop=True)


def group_totals(df: pd.DataFrame) -> pd.Series:
    """Number of n-grams produced per group."""
    if df.empty:
        return pd.Series(dtype="int64", name="n")
    return df.groupby("group").size().rename("n")
