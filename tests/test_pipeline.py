"""End-to-end tests for profile_bigrams.pipeline."""

from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import pytest

from profile_bigrams.config import AnalysisSettings
from profile_bigrams.data_prep import MissingFieldError
from profile_bigrams.pipeline import render_all, run_pipeline, write_tables

STOPWORDS = {"i", "and", "at", "a", "the", "not", "never", "without", "no"}


@pytest.fixture
def settings(tmp_path: Path) -> AnalysisSettings:
    return AnalysisSettings(
        data_path=tmp_path / "profiles.csv",
        output_dir=tmp_path / "out",
        graph_min_count=1,
        graph_group="no",
    )


def _run(settings, raw_profiles, small_lexicon):
    return run_pipeline(settings, profiles=raw_profiles, lexicon=small_lexicon, stopwords=STOPWORDS)


class TestRunPipeline:
    def test_drops_missing_text_and_labels(self, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        assert len(result.profiles) == 5
        assert result.profiles["group"].tolist() == ["no", "yes", "yes", "yes", "no"]
        assert "<br" not in " ".join(result.profiles["text"])

    def test_counts_cover_all_bigrams(self, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        assert result.counts["n"].sum() == len(result.ngrams)
        row = result.counts[(result.counts["word1"] == "love") & (result.counts["word2"] == "cats")]
        assert row.set_index("group")["n"].to_dict() == {"no": 2, "yes": 1}

    def test_stopwords_removed_before_tf_idf(self, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        words = set(result.filtered_counts["word1"]) | set(result.filtered_counts["word2"])
        assert not words & STOPWORDS
        shared = result.tf_idf[result.tf_idf["bigram"] == "love cats"]
        assert (shared["tf_idf"] == 0).all()

    def test_negation_uses_unfiltered_bigrams(self, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        got = {(r.negation_word, r.word2): r.contribution for r in result.negated.itertuples()}
        assert got == {("not", "great"): 3, ("not", "terrible"): -3, ("never", "boring"): -3, ("without", "doubt"): -1}

    def test_tf_idf_counts_groups_emptied_by_filtering(self, settings, small_lexicon) -> None:
        """Every "yes" bigram is a stopword pair; "no" bigrams keep idf ln 2."""
        raw = pd.DataFrame({"essay0": ["green tea lover", "i and the"], "smokes": ["no", "yes"]})
        result = run_pipeline(settings, profiles=raw, lexicon=small_lexicon, stopwords=STOPWORDS)
        assert set(result.tf_idf["group"]) == {"no"}
        assert result.tf_idf["idf"].tolist() == pytest.approx([math.log(2)] * 2)
        assert (result.tf_idf["tf_idf"] > 0).all()

    def test_graph_for_configured_group(self, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        assert result.graph.has_edge("love", "cats")
        assert result.graph["love"]["cats"]["weight"] == 2

    def test_high_threshold_gives_empty_graph(self, settings, raw_profiles, small_lexicon) -> None:
        settings = settings.model_copy(update={"graph_min_count": 500})
        result = _run(settings, raw_profiles, small_lexicon)
        assert result.graph.number_of_nodes() == 0

    def test_trigram_counts_keep_bigram_negations(self, settings, raw_profiles, small_lexicon) -> None:
        settings = settings.model_copy(update={"ngram_size": 3})
        result = _run(settings, raw_profiles, small_lexicon)
        assert "word3" in result.counts.columns
        assert len(result.negated) == 4
        assert result.graph.has_edge("love", "cats")

    def test_deterministic(self, settings, raw_profiles, small_lexicon) -> None:
        a = _run(settings, raw_profiles, small_lexicon)
        b = _run(settings, raw_profiles, small_lexicon)
        for name in ("counts", "filtered_counts", "tf_idf", "top_tf_idf", "negated"):
            pd.testing.assert_frame_equal(getattr(a, name), getattr(b, name))
        assert list(a.graph.edges(data=True)) == list(b.graph.edges(data=True))

    def test_reads_csv_from_settings(self, settings, raw_profiles, small_lexicon) -> None:
        raw_profiles.to_csv(settings.data_path, index=False)
        result = run_pipeline(settings, lexicon=small_lexicon, stopwords=STOPWORDS)
        assert len(result.profiles) == 5

    def test_missing_column(self, settings, small_lexicon) -> None:
        with pytest.raises(MissingFieldError):
            run_pipeline(settings, profiles=pd.DataFrame({"essay0": ["x y"]}), lexicon=small_lexicon)

    def test_all_rows_incomplete(self, settings, small_lexicon) -> None:
        raw = pd.DataFrame({"essay0": [None, None], "smokes": ["no", "yes"]})
        result = run_pipeline(settings, profiles=raw, lexicon=small_lexicon, stopwords=STOPWORDS)
        assert result.counts.empty
        assert result.tf_idf.empty
        assert result.negated.empty
        assert result.graph.number_of_nodes() == 0


class TestOutputs:
    def test_write_tables(self, tmp_path, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        saved = write_tables(result, tmp_path / "tables")
        assert set(saved) == {
            "bigram_counts",
            "bigram_counts_filtered",
            "tf_idf",
            "negated_words",
            "bigram_graph_edges",
        }
        edges = pd.read_csv(saved["bigram_graph_edges"])
        assert {"word1", "word2", "weight"} <= set(edges.columns)

    def test_render_all(self, tmp_path, settings, raw_profiles, small_lexicon) -> None:
        result = _run(settings, raw_profiles, small_lexicon)
        saved = render_all(result, tmp_path / "charts", settings)
        assert set(saved) == {"top_bigrams", "tf_idf", "negated_words", "bigram_graph"}
        assert all(Path(p).is_file() for p in saved.values())

    def test_render_all_skips_empty(self, tmp_path, settings, small_lexicon) -> None:
        raw = pd.DataFrame({"essay0": ["hello"], "smokes": ["no"]})
        result = run_pipeline(settings, profiles=raw, lexicon=small_lexicon, stopwords=STOPWORDS)
        assert render_all(result, tmp_path / "charts", settings) == {}
