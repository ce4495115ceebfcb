"""
LangScope - Character N-gram Language Identification

LangScope identifies the natural language of short texts by comparing
their character n-gram statistics against per-language frequency
profiles, using a randomized (Monte Carlo) Naive-Bayes estimator.

Key Features:
    - Boundary-aware 1-3 character n-gram extraction
    - Versioned, data-driven character normalization
    - Immutable probability table shared by any number of detectors
    - Reproducible detection through explicit random seeds
    - Ranked results with probabilities for every known language

Modules:
    core: Configuration, logging and exceptions
    processing: Text normalization and n-gram extraction
    profiles: Language profiles, the profile builder and probability table
    detection: The detector and its result types

Example:
    >>> from langscope import ProfileBuilder, LanguageProfile
    >>> builder = ProfileBuilder()
    >>> for name, corpus in corpora.items():
    ...     profile = LanguageProfile(name)
    ...     profile.update(corpus)
    ...     builder.add_profile(profile)
    >>> table = builder.build()
    >>> detector = table.create_detector(seed=0)
    >>> detector.append("Das ist ein kurzer Satz.")
    >>> detector.detect()
    'de'
"""

__version__ = "0.1.0"
__description__ = (
    "Language identification from character n-gram profiles with a "
    "Monte Carlo Naive-Bayes estimator."
)

from langscope.core.config.settings import Settings
from langscope.core.exceptions.custom_exceptions import (
    CannotDetectError,
    DuplicateLanguageError,
    LangScopeError,
    NoProfilesLoadedError,
    NoTextError,
)
from langscope.core.logging.logger import get_logger
from langscope.detection import Detector, LanguageResult
from langscope.profiles import (
    LanguageProfile,
    ProbabilityTable,
    ProfileBuilder,
    build_table,
    build_table_from_directory,
)

__all__ = [
    "Settings",
    "get_logger",
    "LangScopeError",
    "DuplicateLanguageError",
    "NoProfilesLoadedError",
    "NoTextError",
    "CannotDetectError",
    "Detector",
    "LanguageResult",
    "LanguageProfile",
    "ProbabilityTable",
    "ProfileBuilder",
    "build_table",
    "build_table_from_directory",
]
