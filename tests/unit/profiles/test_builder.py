"""
Tests for ProfileBuilder and ProbabilityTable.
"""

import json

import numpy as np
import pytest

from langscope.core.exceptions.custom_exceptions import (
    DuplicateLanguageError,
    NoProfilesLoadedError,
    ProfileLoadError,
)
from langscope.profiles.base import LanguageProfile
from langscope.profiles.builder import ProfileBuilder


class TestProfileBuilder:
    """Test cases for building the probability table."""

    def test_languages_are_sorted(self, scenario_table):
        assert scenario_table.languages == ("en", "fr", "ja")
        assert scenario_table.get_languages() == frozenset({"en", "fr", "ja"})

    def test_probability_is_count_over_length_total(self, scenario_table):
        assert scenario_table.probabilities("a") == pytest.approx(
            {"en": 3 / 9, "fr": 1 / 9, "ja": 0.0}
        )
        assert scenario_table.probabilities("あ") == pytest.approx(
            {"en": 0.0, "fr": 0.0, "ja": 3 / 7}
        )

    def test_every_ngram_has_a_full_vector(self, scenario_table):
        assert len(scenario_table) == 9
        for ngram in scenario_table:
            assert scenario_table.get(ngram).shape == (3,)

    def test_unseen_ngram(self, scenario_table):
        assert "zz" not in scenario_table
        assert scenario_table.get("zz") is None
        assert scenario_table.probabilities("zz") == {"en": 0.0, "fr": 0.0, "ja": 0.0}

    def test_insertion_order_does_not_matter(self, scenario_profiles):
        forward = ProfileBuilder()
        for profile in scenario_profiles:
            forward.add_profile(profile)
        backward = ProfileBuilder()
        for profile in reversed(scenario_profiles):
            backward.add_profile(profile)

        first, second = forward.build(), backward.build()
        assert first.languages == second.languages
        assert list(first) == list(second)
        np.testing.assert_array_equal(first.matrix, second.matrix)

    def test_duplicate_language_leaves_builder_unchanged(self, profile_factory):
        builder = ProfileBuilder()
        builder.add_profile(profile_factory("en", "a a b"))

        with pytest.raises(DuplicateLanguageError) as exc_info:
            builder.add_profile(profile_factory("en", "z z z"))
        assert exc_info.value.error_code == "DUPLICATE_LANGUAGE"
        assert exc_info.value.details == {"language": "en"}

        table = builder.build()
        assert table.languages == ("en",)
        assert "z" not in table
        assert table.probabilities("a") == pytest.approx({"en": 2 / 3})

    def test_builder_usable_after_duplicate(self, profile_factory):
        builder = ProfileBuilder()
        builder.add_profile(profile_factory("en", "a"))
        with pytest.raises(DuplicateLanguageError):
            builder.add_profile(profile_factory("en", "a"))
        builder.add_profile(profile_factory("fr", "b"))
        assert builder.languages == frozenset({"en", "fr"})

    def test_empty_builder(self):
        with pytest.raises(NoProfilesLoadedError) as exc_info:
            ProfileBuilder().build()
        assert exc_info.value.error_code == "PROFILE_NOT_LOADED"

    def test_invalid_ngrams_are_skipped(self):
        profile = LanguageProfile(
            "en", freq={"a": 2, "abcd": 5, "ab": 1}, n_words=[2, 0, 0]
        )
        table = ProfileBuilder().add_profile(profile).build()

        assert list(table) == ["a"]
        assert table.probabilities("a") == {"en": 1.0}

    def test_add_profile_is_chainable(self, profile_factory):
        table = (
            ProfileBuilder()
            .add_profile(profile_factory("en", "a"))
            .add_profile(profile_factory("fr", "b"))
            .build()
        )
        assert table.languages == ("en", "fr")

    def test_add_json(self, profile_documents):
        builder = ProfileBuilder()
        builder.add_json(json.dumps(profile_documents["en"]))
        table = builder.build()
        assert table.probabilities("e") == pytest.approx({"en": 1 / 9})

    @pytest.mark.parametrize(
        "payload",
        ['{"name": "en"', '{"name": "en", "n_words": [1], "freq": {}}', "[]"],
    )
    def test_add_json_invalid(self, payload):
        with pytest.raises(ProfileLoadError) as exc_info:
            ProfileBuilder().add_json(payload)
        assert exc_info.value.error_code == "PROFILE_PARSE_ERROR"


class TestProbabilityTable:
    """Test cases for the frozen table."""

    def test_rows_are_read_only(self, scenario_table):
        row = scenario_table.get("a")
        with pytest.raises(ValueError):
            row[0] = 1.0
        with pytest.raises(ValueError):
            scenario_table.matrix[0, 0] = 1.0

    def test_language_set_is_immutable(self, scenario_table):
        languages = scenario_table.get_languages()
        with pytest.raises(AttributeError):
            languages.add("de")

    def test_create_detector(self, scenario_table):
        detector = scenario_table.create_detector(alpha=0.3, seed=1, n_trial=3)
        assert detector.table is scenario_table
        assert detector.alpha == 0.3
        assert detector.params.n_trial == 3
        assert detector.seed == 1

    def test_caller_matrix_is_not_frozen(self):
        from langscope.profiles.builder import ProbabilityTable

        source = np.array([[0.25, 0.75]])
        table = ProbabilityTable(("en", "fr"), {"a": 0}, source)
        source[0, 0] = 1.0

        assert source.flags.writeable
        assert table.probabilities("a") == {"en": 0.25, "fr": 0.75}

    def test_shape_mismatch_rejected(self, scenario_table):
        from langscope.profiles.builder import ProbabilityTable

        with pytest.raises(ValueError):
            ProbabilityTable(("en",), {"a": 0}, np.zeros((2, 1)))


def test_skipped_ngram_is_logged(caplog):
    profile = LanguageProfile("en", freq={"a": 1, "abcd": 1}, n_words=[1, 0, 0])
    with caplog.at_level("WARNING", logger="langscope"):
        ProfileBuilder().add_profile(profile)
    assert "Invalid n-gram in language profile" in caplog.text
    assert "abcd" in caplog.text
