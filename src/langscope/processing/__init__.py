"""
LangScope Processing Module - Text Normalization and N-gram Extraction.

Raw text is turned into the evidence the detector scores in two stages:
    1. Preprocessing: URL/email removal, diacritic composition, repetition
       collapsing, table-driven character canonicalization, whitespace
       normalization with boundary padding
    2. Extraction: rolling-window 1-3 character n-grams that never span
       a word boundary

Example:
    >>> from langscope.processing import TextNormalizer, extract_ngrams
    >>> list(extract_ngrams(TextNormalizer().process("Hi!")))
    ['H', ' H', 'i', 'Hi', ' Hi', 'i ', 'Hi ']
"""

from .ngram import extract_ngrams
from .preprocessing.cleaners import TextNormalizer

__all__ = [
    "TextNormalizer",
    "extract_ngrams",
]
