"""
LangScope Detection Components

Available Classes:
    - Detector: Monte Carlo Naive-Bayes language classifier
    - LanguageResult: Ranked (language, probability) entry
"""

from .base import LanguageResult
from .detector import Detector

__all__ = [
    "Detector",
    "LanguageResult",
]
