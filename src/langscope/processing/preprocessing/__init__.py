"""
LangScope Text Preprocessing Components

Available Preprocessors:
    - UrlEmailStripper: Removes URLs and email addresses
    - UnicodeComposer: Composes combining diacritics
    - RepetitionCollapser: Shortens long character repetitions
    - CharacterNormalizer: Applies the normalization table
    - WhitespaceNormalizer: Collapses separators and pads word boundaries
    - TextNormalizer: The full chain used by detection and training
"""

from .cleaners import (
    CharacterNormalizer,
    RepetitionCollapser,
    TextNormalizer,
    UnicodeComposer,
    UrlEmailStripper,
    WhitespaceNormalizer,
)

__all__ = [
    "CharacterNormalizer",
    "RepetitionCollapser",
    "TextNormalizer",
    "UnicodeComposer",
    "UrlEmailStripper",
    "WhitespaceNormalizer",
]
