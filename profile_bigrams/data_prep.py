import logging
import re
from typing import Sequence, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

HTML_TAG_RX = re.compile(r"<[^>]+>")
HTML_ENTITY_RX = re.compile(r"&[a-z]+;|&#\d+;")
URL_RX = re.compile(r"http\S+|www\.\S+")


class MissingFieldError(ValueError):
    """A required column is absent from the input table."""

    def __init__(self, missing: Sequence[str], found: Sequence[str]):
        self.missing = list(missing)
        self.found = list(found)
        super().__init__(f"Input is missing required columns: {self.missing}. Found: {self.found}")


def clean_text(s) -> str:
    if s is None or (isinstance(s, float) and pd.isna(s)):
        return ""
    s = str(s).lower()
    s = HTML_TAG_RX.sub(" ", s)       # <br />, <a href=...>
    s = HTML_ENTITY_RX.sub(" ", s)    # &amp; &rsquo;
    s = URL_RX.sub(" ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def select_fields(df: pd.DataFrame, text_col: str = "essay0", group_col: str = "smokes") -> pd.DataFrame:
    """
    Project the free-text and categorical columns (case-insensitive match)
    and rename them to:
      text, group_raw
    """
    cols = {str(c).lower(): c for c in df.columns}
    required = [text_col.lower(), group_col.lower()]
    missing = [r for r in required if r not in cols]
    if missing:
        raise MissingFieldError(missing, list(df.columns))
    out = df[[cols[required[0]], cols[required[1]]]].copy()
    out.columns = ["text", "group_raw"]
    return out.reset_index(drop=True)


def load_profiles(path, text_col: str = "essay0", group_col: str = "smokes") -> pd.DataFrame:
    """Read the profiles CSV and keep only the essay and smoking-status columns."""
    df = pd.read_csv(path)
    logger.info("Loaded %d profiles from %s", len(df), path)
    return select_fields(df, text_col=text_col, group_col=group_col)


def label_groups(
    df: pd.DataFrame,
    negative_value: str = "no",
    labels: Tuple[str, str] = ("no", "yes"),
) -> pd.DataFrame:
    """
    Collapse group_raw into a binary label. Only an exact match on
    negative_value gets labels[0]; every other value (missing included)
    gets labels[1].
    """
    out = df.copy()
    is_negative = out["group_raw"].eq(negative_value).fillna(False).astype(bool)
    out["group"] = is_negative.map({True: labels[0], False: labels[1]})
    return out[["text", "group"]].reset_index(drop=True)


def drop_incomplete(df: pd.DataFrame) -> pd.DataFrame:
    keep = df["text"].notna()
    dropped = int((~keep).sum())
    if dropped:
        logger.info("Dropped %d records with no text", dropped)
    return df.loc[keep].reset_index(drop=True)
