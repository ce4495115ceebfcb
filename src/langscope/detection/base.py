"""
Result data structures for language detection.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class LanguageResult:
    """
    One candidate language and its estimated probability.

    Attributes:
        language (str): Language identifier from the probability table
        probability (float): Estimated probability in [0, 1]
    """

    language: str
    probability: float

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "probability": self.probability}

    def __str__(self) -> str:
        return f"{self.language}:{self.probability}"


def rank_results(pairs: Iterable[Tuple[str, float]]) -> List[LanguageResult]:
    """Sort (language, probability) pairs by probability desc, then language asc"""
    ranked = sorted(pairs, key=lambda pair: (-pair[1], pair[0]))
    return [LanguageResult(language, probability) for language, probability in ranked]
