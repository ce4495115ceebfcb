"""
Language profile data structures.

A language profile records how often each character n-gram occurs in a
training corpus of one language, together with the total number of
n-grams counted per length. Profiles are exchanged as JSON documents
with the fields ``name``, ``n_words`` and ``freq``; LangProfileDocument
validates that form and LanguageProfile is the in-memory working copy.

Classes:
    LangProfileDocument: Validated profile document (serialization form)
    LanguageProfile: Mutable per-language n-gram counts and length totals

Example:
    >>> profile = LanguageProfile("en")
    >>> profile.update("the cat sat on the mat")
    >>> profile.freq["at"]
    3
    >>> profile.n_words[1] >= 3
    True
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from langscope.core.exceptions.custom_exceptions import InvalidNGramError
from langscope.processing.ngram import N_GRAM, extract_ngrams
from langscope.processing.preprocessing.cleaners import TextNormalizer

MINIMUM_FREQ = 2
LESS_FREQ_RATIO = 100000

_SINGLE_LATIN = re.compile(r"^[A-Za-z]$")
_CONTAINS_LATIN = re.compile(r"[A-Za-z]")


def ngram_length(gram: str) -> int:
    """
    Return the length of an n-gram, validating it.

    Raises:
        InvalidNGramError: If the length is outside 1..N_GRAM
    """
    length = len(gram)
    if length < 1 or length > N_GRAM:
        raise InvalidNGramError(
            f"Invalid n-gram in language profile: {gram!r}",
            error_code="INVALID_NGRAM",
            details={"ngram": gram, "length": length},
        )
    return length


class LangProfileDocument(BaseModel):
    """Serialized language profile as stored in profile JSON files"""

    name: str = Field(min_length=1)
    n_words: List[int] = Field(min_length=N_GRAM, max_length=N_GRAM)
    freq: Dict[str, int] = {}

    @field_validator("n_words")
    @classmethod
    def validate_totals(cls, v):
        if any(total < 0 for total in v):
            raise ValueError("n_words totals must be non-negative")
        return v

    @field_validator("freq")
    @classmethod
    def validate_counts(cls, v):
        negative = [gram for gram, count in v.items() if count < 0]
        if negative:
            raise ValueError(f"negative counts for n-grams: {negative[:5]}")
        return v


@dataclass
class LanguageProfile:
    """
    N-gram occurrence counts of one language.

    Attributes:
        name (str): Language identifier, e.g. "en" or "zh-cn"
        freq (Dict[str, int]): N-gram to occurrence count
        n_words (List[int]): Total occurrences per n-gram length (1, 2, 3);
            every count of length L is included in n_words[L - 1]

    Counts supplied through a document are taken as-is, even for n-grams
    of invalid length; the profile builder decides what to skip.
    """

    name: str
    freq: Dict[str, int] = field(default_factory=dict)
    n_words: List[int] = field(default_factory=lambda: [0] * N_GRAM)

    @classmethod
    def from_document(cls, document: LangProfileDocument) -> "LanguageProfile":
        return cls(
            name=document.name,
            freq=dict(document.freq),
            n_words=list(document.n_words),
        )

    def to_document(self) -> LangProfileDocument:
        return LangProfileDocument(
            name=self.name, n_words=list(self.n_words), freq=dict(self.freq)
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.to_document().model_dump()

    def add(self, gram: str) -> None:
        """Count one occurrence of gram; grams of invalid length are ignored"""
        try:
            length = ngram_length(gram)
        except InvalidNGramError:
            return
        self.n_words[length - 1] += 1
        self.freq[gram] = self.freq.get(gram, 0) + 1

    def update(self, text: str, normalizer: Optional[TextNormalizer] = None) -> None:
        """Normalize text and count every n-gram extracted from it"""
        normalizer = normalizer or TextNormalizer()
        for gram in extract_ngrams(normalizer.process(text)):
            self.add(gram)

    def omit_less_frequent(self) -> None:
        """
        Drop rare n-grams from the profile.

        N-grams seen no more than max(n_words[0] // LESS_FREQ_RATIO,
        MINIMUM_FREQ) times are removed and their counts subtracted from
        the length totals. If single ASCII letters then make up less than a
        third of all unigrams, the language is not written in Latin script
        and every n-gram containing an ASCII letter is dropped as well.
        """
        threshold = max(self.n_words[0] // LESS_FREQ_RATIO, MINIMUM_FREQ)

        roman = 0
        for gram, count in list(self.freq.items()):
            if count <= threshold:
                self._remove(gram)
            elif _SINGLE_LATIN.match(gram):
                roman += count

        if roman < self.n_words[0] // 3:
            for gram in [g for g in self.freq if _CONTAINS_LATIN.search(g)]:
                self._remove(gram)

    def _remove(self, gram: str) -> None:
        count = self.freq.pop(gram)
        length = len(gram)
        if 1 <= length <= N_GRAM:
            self.n_words[length - 1] -= count
