"""
LangScope Language Profiles

Available Classes:
    - LanguageProfile: Per-language n-gram counts and length totals
    - LangProfileDocument: Validated JSON document form of a profile
    - ProfileBuilder: Accumulates profiles, rejects duplicate languages
    - ProbabilityTable: Frozen n-gram to per-language probability table

Available Functions:
    - load_profiles / build_table / build_table_from_directory: JSON loading
"""

from .base import LangProfileDocument, LanguageProfile
from .builder import ProbabilityTable, ProfileBuilder
from .loader import build_table, build_table_from_directory, load_profiles

__all__ = [
    "LangProfileDocument",
    "LanguageProfile",
    "ProbabilityTable",
    "ProfileBuilder",
    "build_table",
    "build_table_from_directory",
    "load_profiles",
]
