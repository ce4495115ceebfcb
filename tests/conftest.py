"""
Pytest configuration and fixtures for LangScope tests
"""

import json
from pathlib import Path
from typing import Callable, Dict, List

import pytest

from langscope.profiles.base import LanguageProfile
from langscope.profiles.builder import ProbabilityTable, ProfileBuilder

TRAINING_EN = "a a a b b c c d e"
TRAINING_FR = "a b b c c c d d d"
TRAINING_JA = "あ あ あ い う え え"


def make_profile(name: str, training: str) -> LanguageProfile:
    """Build a unigram profile from space-separated training tokens"""
    profile = LanguageProfile(name)
    for gram in training.split(" "):
        profile.add(gram)
    return profile


@pytest.fixture
def profile_factory() -> Callable[[str, str], LanguageProfile]:
    return make_profile


@pytest.fixture
def scenario_profiles() -> List[LanguageProfile]:
    """English, French and Japanese toy profiles"""
    return [
        make_profile("en", TRAINING_EN),
        make_profile("fr", TRAINING_FR),
        make_profile("ja", TRAINING_JA),
    ]


@pytest.fixture
def scenario_table(scenario_profiles) -> ProbabilityTable:
    builder = ProfileBuilder()
    for profile in scenario_profiles:
        builder.add_profile(profile)
    return builder.build()


@pytest.fixture
def profile_documents() -> Dict[str, dict]:
    return {
        "en": {
            "name": "en",
            "n_words": [9, 0, 0],
            "freq": {"a": 3, "b": 2, "c": 2, "d": 1, "e": 1},
        },
        "fr": {
            "name": "fr",
            "n_words": [9, 0, 0],
            "freq": {"a": 1, "b": 2, "c": 3, "d": 3},
        },
    }


@pytest.fixture
def profile_directory(tmp_path: Path, profile_documents) -> Path:
    """Directory with one JSON profile per language"""
    directory = tmp_path / "profiles"
    directory.mkdir()
    for name, document in profile_documents.items():
        (directory / f"{name}.json").write_text(
            json.dumps(document, ensure_ascii=False), encoding="utf-8"
        )
    return directory
