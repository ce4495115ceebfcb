"""
Text cleaning preprocessors applied before n-gram extraction.

Each cleaner removes one kind of noise that would otherwise distort the
character n-gram distribution of a text. They are applied in a fixed
order by TextNormalizer, which produces the padded, single-spaced
character stream consumed by the n-gram extractor.

Key Preprocessors:
    - UrlEmailStripper: Replaces URLs and email addresses with a space
    - UnicodeComposer: Composes combining diacritics (NFC)
    - RepetitionCollapser: Shortens runs of 4+ identical characters to 3
    - CharacterNormalizer: Canonicalizes characters via the normalization table
    - WhitespaceNormalizer: Collapses separators and pads word boundaries
    - TextNormalizer: The complete chain above

Example:
    >>> normalizer = TextNormalizer()
    >>> normalizer.process("Mail me: bob@example.com!!!!  Soooo nice")
    ' Mail me Sooo nice '
"""

import re
import unicodedata
from typing import Optional

from langscope.processing.base import BasePreprocessor, PreprocessingPipeline
from langscope.processing.normalization import (
    SPACE,
    NormalizationTable,
    get_default_table,
)

URL_REGEX = re.compile(r"https?://[-_.?&~;+=/#0-9A-Za-z]{1,2076}")
MAIL_REGEX = re.compile(r"[-_.0-9A-Za-z]{1,64}@[-_0-9A-Za-z]{1,255}[-_.0-9A-Za-z]{1,255}")
REPETITION_REGEX = re.compile(r"(.)\1{3,}", re.DOTALL)
SPACES_REGEX = re.compile(r" {2,}")


class UrlEmailStripper(BasePreprocessor):
    """
    Replaces URL-like and email-like substrings with a single space.

    Addresses are mostly ASCII letters in arbitrary order, so they would
    inflate Latin n-gram counts without saying anything about the language.
    """

    def process(self, content: str) -> str:
        content = URL_REGEX.sub(SPACE, content)
        return MAIL_REGEX.sub(SPACE, content)


class UnicodeComposer(BasePreprocessor):
    """Composes base letters and combining marks into precomposed characters"""

    def process(self, content: str) -> str:
        return unicodedata.normalize("NFC", content)


class RepetitionCollapser(BasePreprocessor):
    """
    Collapses runs of four or more identical characters down to three.

    Keeps "loooooool" or "!!!!!!!!" from dominating the distribution.

    Example:
        >>> RepetitionCollapser().process("noooooo")
        'nooo'
    """

    def process(self, content: str) -> str:
        return REPETITION_REGEX.sub(r"\1\1\1", content)


class CharacterNormalizer(BasePreprocessor):
    """Canonicalizes every character through a NormalizationTable"""

    def __init__(self, table: Optional[NormalizationTable] = None):
        self.table = table or get_default_table()

    def process(self, content: str) -> str:
        return self.table.normalize(content)


class WhitespaceNormalizer(BasePreprocessor):
    """
    Collapses space runs and pads the text with one boundary space each side.

    Expects stop characters to already be mapped to spaces. Text that is
    blank after collapsing becomes the empty string.
    """

    def process(self, content: str) -> str:
        content = SPACES_REGEX.sub(SPACE, content).strip(SPACE)
        if not content:
            return ""
        return f"{SPACE}{content}{SPACE}"


class TextNormalizer(PreprocessingPipeline):
    """
    Complete normalization chain for detection and profile training.

    Order matters: addresses are removed before anything else touches
    their characters, and repetitions are collapsed before characters are
    canonicalized so that distinct kana are not merged into one long run.
    """

    def __init__(self, table: Optional[NormalizationTable] = None):
        super().__init__(
            [
                UrlEmailStripper(),
                UnicodeComposer(),
                RepetitionCollapser(),
                CharacterNormalizer(table),
                WhitespaceNormalizer(),
            ]
        )
