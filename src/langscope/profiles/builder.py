"""
Profile builder and the frozen n-gram probability table.

Language profiles are folded into a ProfileBuilder one at a time. Building
turns them into a ProbabilityTable: for every n-gram seen in any profile,
a vector holding P(n-gram | language) for each language, in sorted
language order. The table is built once, never mutated afterwards, and
shared by every detector created from it, including detectors running on
other threads.

Construction happens in two passes:
    1. add_profile() computes count / n_words[len - 1] per n-gram and keeps
       the result in a per-language map.
    2. build() fixes the language order (sorted identifiers) and
       materializes one row per n-gram in a read-only numpy matrix.

Because the order is derived from sorted identifiers, the same set of
profiles yields identical vectors whatever order they were added in.

Example:
    >>> builder = ProfileBuilder()
    >>> builder.add_profile(english_profile)
    >>> builder.add_profile(french_profile)
    >>> table = builder.build()
    >>> table.languages
    ('en', 'fr')
    >>> detector = table.create_detector(seed=0)
"""

from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Dict,
    FrozenSet,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import numpy as np
from pydantic import ValidationError

from langscope.core.exceptions.custom_exceptions import (
    DuplicateLanguageError,
    InvalidNGramError,
    NoProfilesLoadedError,
    ProfileLoadError,
)
from langscope.core.logging.logger import get_logger
from langscope.profiles.base import LangProfileDocument, LanguageProfile, ngram_length

if TYPE_CHECKING:
    from langscope.detection.detector import Detector

logger = get_logger(__name__)


class ProbabilityTable:
    """
    Immutable mapping from n-gram to per-language probabilities.

    Attributes:
        languages (Tuple[str, ...]): Language identifiers, sorted; the axis
            of every probability vector

    Rows are read-only numpy views; attempting to write one raises
    ValueError. The table holds no mutable state after construction, so
    concurrent readers need no synchronization.
    """

    def __init__(
        self,
        languages: Tuple[str, ...],
        ngram_index: Mapping[str, int],
        matrix: np.ndarray,
    ):
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.shape != (len(ngram_index), len(languages)):
            raise ValueError(
                f"matrix shape {matrix.shape} does not match "
                f"{len(ngram_index)} n-grams x {len(languages)} languages"
            )
        matrix.setflags(write=False)
        self.languages = tuple(languages)
        self._languages_view = frozenset(self.languages)
        self._index = MappingProxyType(dict(ngram_index))
        self._matrix = matrix

    def __contains__(self, ngram: object) -> bool:
        return ngram in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    @property
    def matrix(self) -> np.ndarray:
        """Read-only (n_ngrams, n_languages) probability matrix"""
        return self._matrix

    def row_index(self, ngram: str) -> Optional[int]:
        return self._index.get(ngram)

    def get(self, ngram: str) -> Optional[np.ndarray]:
        """Probability vector of an n-gram, or None if it was never observed"""
        row = self._index.get(ngram)
        if row is None:
            return None
        return self._matrix[row]

    def probabilities(self, ngram: str) -> Dict[str, float]:
        """Language to probability mapping of an n-gram (all zeros if unseen)"""
        vector = self.get(ngram)
        if vector is None:
            return {language: 0.0 for language in self.languages}
        return {language: float(p) for language, p in zip(self.languages, vector)}

    def get_languages(self) -> FrozenSet[str]:
        """Set of known language identifiers; immutable"""
        return self._languages_view

    def create_detector(
        self, alpha: Optional[float] = None, seed: Optional[int] = None, **params
    ) -> "Detector":
        """
        Construct a detector reading from this table.

        Args:
            alpha (Optional[float]): Smoothing parameter, settings default if None
            seed (Optional[int]): Fixed random seed for reproducible results
            **params: Further DetectionParameters overrides (n_trial, ...)

        Returns:
            Detector: A fresh detector in the accumulating state
        """
        from langscope.detection.detector import Detector

        return Detector(self, alpha=alpha, seed=seed, **params)


class ProfileBuilder:
    """
    Accumulates language profiles and builds a ProbabilityTable.

    A failed add leaves the builder exactly as it was, so the builder stays
    usable after a DuplicateLanguageError.
    """

    def __init__(self):
        self._probabilities: Dict[str, Dict[str, float]] = {}

    @property
    def languages(self) -> FrozenSet[str]:
        return frozenset(self._probabilities)

    def add_profile(self, profile: LanguageProfile) -> "ProfileBuilder":
        """
        Fold one language profile into the builder.

        N-grams of invalid length, and n-grams whose length total is zero,
        are skipped with a warning.

        Args:
            profile (LanguageProfile): Counts and totals of one language

        Returns:
            ProfileBuilder: self, for chaining

        Raises:
            DuplicateLanguageError: If the language was already added
        """
        language = profile.name
        if language in self._probabilities:
            raise DuplicateLanguageError(
                f"{language} language profile is already defined",
                error_code="DUPLICATE_LANGUAGE",
                details={"language": language},
            )

        probabilities: Dict[str, float] = {}
        skipped = 0
        for ngram, count in profile.freq.items():
            try:
                length = ngram_length(ngram)
                total = profile.n_words[length - 1]
                if total <= 0:
                    raise InvalidNGramError(
                        f"No n-gram total for length {length}: {ngram!r}",
                        error_code="INVALID_NGRAM_TOTAL",
                        details={"ngram": ngram, "length": length},
                    )
            except InvalidNGramError as e:
                skipped += 1
                logger.warning(
                    "Invalid n-gram in language profile",
                    language=language,
                    error_code=e.error_code,
                    **e.details,
                )
                continue
            probabilities[ngram] = count / total

        self._probabilities[language] = probabilities
        logger.debug(
            "Added language profile",
            language=language,
            ngrams=len(probabilities),
            skipped=skipped,
        )
        return self

    def add_document(self, document: LangProfileDocument) -> "ProfileBuilder":
        return self.add_profile(LanguageProfile.from_document(document))

    def add_json(self, payload: Union[str, bytes]) -> "ProfileBuilder":
        """Parse a profile JSON document and add it"""
        try:
            document = LangProfileDocument.model_validate_json(payload)
        except ValidationError as e:
            raise ProfileLoadError(
                f"Failed to read language profile: {e}",
                error_code="PROFILE_PARSE_ERROR",
            ) from e
        return self.add_document(document)

    def build(self) -> ProbabilityTable:
        """
        Materialize the probability table.

        Returns:
            ProbabilityTable: Frozen table over all added languages

        Raises:
            NoProfilesLoadedError: If no profile was added
        """
        if not self._probabilities:
            raise NoProfilesLoadedError(
                "No language profiles loaded",
                error_code="PROFILE_NOT_LOADED",
            )

        languages = tuple(sorted(self._probabilities))
        ngrams = sorted(
            {
                ngram
                for per_language in self._probabilities.values()
                for ngram in per_language
            }
        )
        index = {ngram: row for row, ngram in enumerate(ngrams)}

        matrix = np.zeros((len(ngrams), len(languages)), dtype=np.float64)
        for column, language in enumerate(languages):
            for ngram, probability in self._probabilities[language].items():
                matrix[index[ngram], column] = probability

        logger.info(
            "Built probability table", languages=len(languages), ngrams=len(ngrams)
        )
        return ProbabilityTable(languages, index, matrix)
