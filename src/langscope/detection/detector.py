"""
Monte Carlo Naive-Bayes language detector.

A Detector accumulates character n-gram evidence from appended text and
ranks the languages of a ProbabilityTable by how well they explain it.
Rather than multiplying the likelihoods of every n-gram in one pass, the
estimator runs several independent trials. Each trial samples n-grams at
random from the evidence and applies Bayesian updates until one language
dominates or an iteration limit is hit, and the trial vectors are
averaged. Sampling keeps the cost fixed whatever the text length, and the
jittered smoothing per trial keeps one unlucky smoothing value from
deciding the outcome.

Lifecycle:
    - Accumulating: append() adds evidence and drops any cached ranking
    - Classified: detect()/detect_all() computed and cached the ranking;
      further calls return the cache until more text is appended

Estimator (per trial):
    1. Start from a uniform vector (or the normalized prior map)
    2. Draw trial_alpha = alpha + N(0, 1) * alpha_width
    3. Repeatedly pick one n-gram occurrence uniformly at random and update
       prob[j] *= trial_alpha / base_freq + P(ngram | language j)
    4. Renormalize after every update; every 5th update stop once the
       maximum reaches conv_threshold or the iteration limit is reached
    5. Add prob / n_trial to the final estimate

A detector is meant for one owner at a time. Many detectors may share
one table across threads.

Example:
    >>> detector = table.create_detector(seed=42)
    >>> detector.append("Bonjour tout le monde")
    >>> detector.detect()
    'fr'
    >>> detector.detect_all()[0].language
    'fr'
"""

from collections import Counter
from itertools import count
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional

import numpy as np

from langscope.core.config.validation import DetectionParameters
from langscope.core.exceptions.custom_exceptions import (
    CannotDetectError,
    ConfigurationError,
    NoTextError,
)
from langscope.core.logging.logger import get_logger
from langscope.detection.base import LanguageResult, rank_results
from langscope.processing.ngram import (
    count_scripts,
    extract_from_chunks,
    extract_ngrams,
    latin_is_minority,
    strip_latin,
)
from langscope.processing.preprocessing.cleaners import TextNormalizer
from langscope.profiles.builder import ProbabilityTable

logger = get_logger(__name__)

CONVERGENCE_CHECK_INTERVAL = 5


class Detector:
    """
    Stateful, single-owner language classifier.

    Attributes:
        table (ProbabilityTable): Shared, read-only probabilities
        params (DetectionParameters): Estimator tunables
        seed (Optional[int]): Fixed seed; a fresh seed per run when None

    Args:
        table (ProbabilityTable): Table to classify against
        alpha (Optional[float]): Smoothing parameter (default 0.5)
        seed (Optional[int]): Seed for reproducible rankings
        normalizer (Optional[TextNormalizer]): Custom normalization chain
        **params: Overrides for the remaining DetectionParameters fields

    Raises:
        ConfigurationError: If a parameter is out of range
    """

    def __init__(
        self,
        table: ProbabilityTable,
        alpha: Optional[float] = None,
        seed: Optional[int] = None,
        normalizer: Optional[TextNormalizer] = None,
        **params,
    ):
        self.table = table
        self.params = DetectionParameters.from_settings(alpha=alpha, **params)
        self.seed = seed
        self._normalizer = normalizer or TextNormalizer()

        self._chunks: List[str] = []
        self._text_length = 0
        self._latin_count = 0
        self._non_latin_count = 0
        self._ngram_counts: Counter = Counter()
        self._prior: Optional[np.ndarray] = None
        self._results: Optional[List[LanguageResult]] = None

    @property
    def alpha(self) -> float:
        return self.params.alpha

    @property
    def text_length(self) -> int:
        """Normalized characters accumulated so far"""
        return self._text_length

    @property
    def ngram_counts(self) -> Mapping[str, int]:
        """Read-only view of the accumulated n-gram occurrence counts"""
        return MappingProxyType(self._ngram_counts)

    def get_languages(self) -> FrozenSet[str]:
        return self.table.get_languages()

    def set_prior_map(self, prior: Mapping[str, float]) -> None:
        """
        Replace the uniform starting vector with prior language weights.

        Weights are normalized to sum to 1. Languages unknown to the table
        are ignored, and languages left out start at zero.

        Raises:
            ConfigurationError: If a weight is negative or all known
                weights are zero
        """
        vector = np.zeros(len(self.table.languages), dtype=np.float64)
        positions = {language: i for i, language in enumerate(self.table.languages)}
        for language, weight in prior.items():
            if weight < 0:
                raise ConfigurationError(
                    "Prior probability must be non-negative",
                    error_code="INVALID_PRIOR",
                    details={"language": language, "weight": weight},
                )
            if language in positions:
                vector[positions[language]] = weight

        total = vector.sum()
        if total <= 0:
            raise ConfigurationError(
                "At least one known language must have a positive prior",
                error_code="INVALID_PRIOR",
                details={"languages": sorted(prior)},
            )
        self._prior = vector / total
        self._results = None

    def append(self, text: str) -> None:
        """
        Add text to the evidence.

        Only n-grams known to the table are counted. Normalized text beyond
        max_text_length is ignored. Appending text that yields no
        characters keeps the cached ranking.
        """
        if not text:
            return
        remaining = self.params.max_text_length - self._text_length
        if remaining <= 0:
            return

        normalized = self._normalizer.process(text)[:remaining]
        if not normalized:
            return

        self._chunks.append(normalized)
        self._text_length += len(normalized)
        latin, non_latin = count_scripts(normalized)
        self._latin_count += latin
        self._non_latin_count += non_latin
        self._ngram_counts.update(
            gram for gram in extract_ngrams(normalized) if gram in self.table
        )
        self._results = None

    def detect(self) -> str:
        """
        Return the most probable language.

        Raises:
            NoTextError: If there is no usable evidence
            CannotDetectError: If the best probability is below prob_threshold
        """
        best = self.detect_all()[0]
        if best.probability < self.params.prob_threshold:
            raise CannotDetectError(
                "No language reaches the detection threshold",
                error_code="CANT_DETECT",
                details={
                    "language": best.language,
                    "probability": best.probability,
                    "threshold": self.params.prob_threshold,
                },
            )
        return best.language

    def detect_all(self) -> List[LanguageResult]:
        """
        Return every language ranked by estimated probability.

        Raises:
            NoTextError: If there is no usable evidence
        """
        if self._results is None:
            self._results = self._detect_block()
        return list(self._results)

    def get_probabilities(self) -> List[LanguageResult]:
        """Ranked languages whose probability exceeds prob_threshold"""
        return [
            result
            for result in self.detect_all()
            if result.probability > self.params.prob_threshold
        ]

    def _evidence(self) -> Counter:
        if self._latin_count and latin_is_minority(
            self._latin_count, self._non_latin_count
        ):
            return Counter(
                gram
                for gram in extract_from_chunks(strip_latin(c) for c in self._chunks)
                if gram in self.table
            )
        return self._ngram_counts

    def _initial_probability(self) -> np.ndarray:
        if self._prior is not None:
            return self._prior.copy()
        n_languages = len(self.table.languages)
        return np.full(n_languages, 1.0 / n_languages, dtype=np.float64)

    def _detect_block(self) -> List[LanguageResult]:
        evidence = self._evidence()
        if not evidence:
            raise NoTextError(
                "No features in text",
                error_code="NO_TEXT",
                details={"text_length": self._text_length},
            )

        rows = np.fromiter(
            (self.table.row_index(gram) for gram in evidence),
            dtype=np.int64,
            count=len(evidence),
        )
        occurrences = np.fromiter(evidence.values(), dtype=np.int64, count=len(evidence))
        samples = np.repeat(rows, occurrences)

        params = self.params
        matrix = self.table.matrix
        rng = np.random.default_rng(self.seed)
        estimate = np.zeros(len(self.table.languages), dtype=np.float64)

        for _ in range(params.n_trial):
            prob = self._initial_probability()
            trial_alpha = params.alpha + rng.standard_normal() * params.alpha_width
            weight = trial_alpha / params.base_freq

            for i in count():
                row = samples[rng.integers(len(samples))]
                updated = prob * (weight + matrix[row])
                total = updated.sum()
                if total > 0:
                    prob = updated / total
                if i % CONVERGENCE_CHECK_INTERVAL == 0 and (
                    prob.max() >= params.conv_threshold or i >= params.iteration_limit
                ):
                    break

            estimate += prob / params.n_trial

        estimate = np.clip(estimate, 0.0, 1.0)
        results = rank_results(zip(self.table.languages, estimate.tolist()))
        logger.debug(
            "Detection finished",
            language=results[0].language,
            probability=results[0].probability,
            ngrams=int(samples.size),
        )
        return results
