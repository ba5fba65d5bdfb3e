from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import pandas as pd
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS, CountVectorizer

logger = logging.getLogger(__name__)

# words with optional inner apostrophes: "don't", "i'm"
TOKEN_PATTERN = r"(?u)\b\w+(?:'\w+)*\b"

_vec = CountVectorizer(lowercase=True, token_pattern=TOKEN_PATTERN)
_preprocess = _vec.build_preprocessor()
_split = _vec.build_tokenizer()


def word_columns(n: int) -> List[str]:
    return [f"word{i + 1}" for i in range(n)]


def tokenize(text) -> List[str]:
    if text is None or (isinstance(text, float) and pd.isna(text)):
        return []
    return _split(_preprocess(str(text)))


def ngrams(tokens: List[str], n: int = 2) -> Iterator[Tuple[str, ...]]:
    """Yield every contiguous n-tuple; fewer than n tokens yields nothing."""
    for i in range(len(tokens) - n + 1):
        yield tuple(tokens[i:i + n])


def unnest_ngrams(df: pd.DataFrame, n: int = 2, text_col: str = "text") -> pd.DataFrame:
    """
    One row per n-gram occurrence:
      word1 .. wordN, group
    Windows never span two records; record order is preserved.
    """
    if n < 2:
        raise ValueError(f"n-gram size must be >= 2, got {n}")
    cols = word_columns(n)
    rows = []
    for text, group in zip(df[text_col], df["group"]):
        for gram in ngrams(tokenize(text), n):
            rows.append((*gram, group))
    out = pd.DataFrame(rows, columns=cols + ["group"])
    logger.debug("Tokenized %d records into %d %d-grams", len(df), len(out), n)
    return out


def unite(df: pd.DataFrame, col: str = "bigram") -> pd.DataFrame:
    """Join the word columns back into a single space-separated column."""
    words = [c for c in df.columns if c.startswith("word")]
    out = df.drop(columns=words)
    if df.empty:
        out.insert(0, col, pd.Series(dtype=object))
        return out
    out.insert(0, col, df[words].astype(str).agg(" ".join, axis=1))
    return out


def default_stopwords() -> frozenset:
    return frozenset(ENGLISH_STOP_WORDS)


def load_stopwords(path) -> frozenset:
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    return frozenset(w.strip().lower() for w in lines if w.strip() and not w.startswith("#"))


def filter_stopwords(df: pd.DataFrame, stopwords: Iterable[str]) -> pd.DataFrame:
    """Drop every row where any word column is a stopword (case-normalized)."""
    stop = {str(w).lower() for w in stopwords}
    words = [c for c in df.columns if c.startswith("word")]
    hit = pd.Series(False, index=df.index)
    for c in words:
        hit |= df[c].astype(str).str.lower().isin(stop)
    return df.loc[~hit].reset_index(drop=True)
