"""Analysis settings loaded from environment variables or a .env file."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from profile_bigrams.sentiment import NEGATION_WORDS


class AnalysisSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROFILE_BIGRAMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Input
    data_path: Path = Path("profiles.csv")
    text_column: str = "essay0"
    group_column: str = "smokes"

    # Labelling: only an exact match on negative_group_value is a non-smoker
    negative_group_value: str = "no"
    group_labels: tuple[str, str] = ("no", "yes")

    # Aggregation
    ngram_size: int = Field(default=2, ge=2)
    top_n: int = Field(default=15, ge=1)

    # Negation scoring
    negation_words: tuple[str, ...] = NEGATION_WORDS
    negation_top_k: int = Field(default=20, ge=1)
    lexicon_path: Path | None = None  # None = VADER lexicon
    stopwords_path: Path | None = None  # None = scikit-learn English list

    # Graph
    graph_group: str = "yes"
    graph_min_count: int = Field(default=20, ge=0)
    layout_seed: int = 2017

    # Output
    output_dir: Path = Path("output")

    @field_validator("negation_words")
    @classmethod
    def _lower_negations(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(w.strip().lower() for w in v if w.strip())

    @model_validator(mode="after")
    def _graph_group_is_labelled(self) -> AnalysisSettings:
        if self.graph_group not in self.group_labels:
            raise ValueError(f"graph_group {self.graph_group!r} is not one of {list(self.group_labels)}")
        return self


def load_settings(**overrides: object) -> AnalysisSettings:
    """Load settings, letting explicit (non-None) overrides win over env/.env."""
    clean = {k: v for k, v in overrides.items() if v is not None}
    return AnalysisSettings(**clean)  # type: ignore[arg-type]
