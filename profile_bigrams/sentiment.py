from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable

import numpy as np
import pandas as pd
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

logger = logging.getLogger(__name__)

NEGATION_WORDS = ("not", "no", "never", "without")

SCORE_COLUMNS = ["negation_word", "word2", "score", "n", "contribution"]


def load_lexicon(path) -> pd.DataFrame:
    """
    Read a word -> integer score lexicon. AFINN files are tab separated
    with no header (word<TAB>score); .csv files need word,score columns.
    """
    path = Path(path)
    if path.suffix.lower() == ".csv":
        lex = pd.read_csv(path)
        lex.columns = [str(c).lower() for c in lex.columns]
        missing = {"word", "score"} - set(lex.columns)
        if missing:
            raise ValueError(f"lexicon {path} is missing columns: {sorted(missing)}")
    else:
        lex = pd.read_csv(path, sep="\t", header=None, names=["word", "score"], quoting=3)
    return _normalize_lexicon(lex[["word", "score"]])


def vader_lexicon() -> pd.DataFrame:
    """VADER's lexicon with mean valences rounded half up to integer scores."""
    lex = SentimentIntensityAnalyzer().lexicon
    valences = np.array([float(v) for v in lex.values()])
    df = pd.DataFrame({"word": list(lex.keys()), "score": np.floor(valences + 0.5).astype(int)})
    # valences in [-0.5, 0.5) round to neutral
    return _normalize_lexicon(df[df["score"] != 0])


def _normalize_lexicon(lex: pd.DataFrame) -> pd.DataFrame:
    out = lex.dropna().copy()
    out["word"] = out["word"].astype(str).str.strip().str.lower()
    out["score"] = out["score"].astype(int)
    return out.drop_duplicates("word", keep="first").reset_index(drop=True)


def negated_word_scores(
    bigrams: pd.DataFrame,
    lexicon: pd.DataFrame,
    negation_words: Iterable[str] = NEGATION_WORDS,
    by_group: bool = False,
) -> pd.DataFrame:
    """
    Score words that follow a negation term.

    Keeps bigrams whose word1 is a negation word, inner-joins word2 on the
    lexicon (no match = dropped), counts duplicates and computes
    contribution = n * score. Ranked by |contribution| desc, ties by words.
    Expects unfiltered bigrams: most negation words are stopwords.
    """
    keys = ["negation_word"] + (["group"] if by_group else []) + ["word2", "score"]
    negations = {w.lower() for w in negation_words}
    neg = bigrams[bigrams["word1"].isin(negations)] if not bigrams.empty else bigrams
    if neg.empty:
        return _empty_scores(keys)

    joined = (neg.rename(columns={"word1": "negation_word"})
                 .merge(lexicon[["word", "score"]], left_on="word2", right_on="word", how="inner"))
    if joined.empty:
        return _empty_scores(keys)

    scored = joined.groupby(keys, sort=True).size().rename("n").reset_index()
    scored["contribution"] = scored["n"] * scored["score"]
    scored["_abs"] = scored["contribution"].abs()
    scored = (scored.sort_values("_abs", ascending=False, kind="mergesort")
                    .drop(columns="_abs")
                    .reset_index(drop=True))
    logger.debug("Scored %d negated words", len(scored))
    return scored[keys[:-2] + SCORE_COLUMNS[1:]]


def _empty_scores(keys) -> pd.DataFrame:
    cols = keys[:-2] + SCORE_COLUMNS[1:]
    return pd.DataFrame({c: pd.Series(dtype="int64" if c in ("score", "n", "contribution") else object)
                         for c in cols})


def top_contributions(scores: pd.DataFrame, k: int = 20) -> pd.DataFrame:
    return scores.head(k).reset_index(drop=True)
