"""Shared fixtures for profile_bigrams tests."""

from __future__ import annotations

import logging

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def raw_profiles() -> pd.DataFrame:
    """A handful of profiles in the shape of the OkCupid export."""
    return pd.DataFrame(
        {
            "age": [22, 35, 29, 41, 30, 27],
            "essay0": [
                "I love cats and I love dogs.<br />\nNot great at cooking.",
                "Not terrible at tennis, never boring",
                None,
                "I love cats",
                "hello",
                "Without doubt I love cats &amp; coffee",
            ],
            "smokes": ["no", "sometimes", "yes", "yes", None, "no"],
        }
    )


@pytest.fixture
def small_lexicon() -> pd.DataFrame:
    return pd.DataFrame(
        {"word": ["great", "terrible", "boring", "doubt", "love"], "score": [3, -3, -3, -1, 3]}
    )


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any handlers installed by setup_logging."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    logging.basicConfig(level=logging.WARNING, force=True)
