"""
Base classes for the text processing phase.

Raw text goes through a chain of preprocessors before n-grams are
extracted from it. Every step implements BasePreprocessor, so steps can
be reordered, replaced or tested in isolation.

Classes:
    BasePreprocessor: Abstract base class for text preprocessing operations
    PreprocessingPipeline: Ordered chain of preprocessors applied as one

Example:
    >>> from langscope.processing.preprocessing.cleaners import (
    ...     RepetitionCollapser, UrlEmailStripper
    ... )
    >>> pipeline = PreprocessingPipeline([UrlEmailStripper(), RepetitionCollapser()])
    >>> pipeline("see http://example.com soooooo good")
    'see   sooo good'
"""

from abc import ABC, abstractmethod
from typing import Iterable, List


class BasePreprocessor(ABC):
    """
    Abstract base class for all content preprocessors.

    Preprocessors turn raw text into the normalized character stream the
    n-gram extractor consumes. They handle tasks such as:
        - Removing URLs and email addresses
        - Composing combining diacritics
        - Collapsing repeated characters
        - Canonicalizing characters and word separators

    Subclasses must implement the process() method. The __call__ method
    provides a convenient interface for using preprocessors as callables.
    """

    @abstractmethod
    def process(self, content: str) -> str:
        """
        Process raw content and return the cleaned version.

        Args:
            content (str): Raw text content to be processed

        Returns:
            str: Cleaned and normalized text content
        """
        pass

    def __call__(self, content: str) -> str:
        return self.process(content)


class PreprocessingPipeline(BasePreprocessor):
    """Applies preprocessors in order, feeding each the previous output"""

    def __init__(self, steps: Iterable[BasePreprocessor]):
        self.steps: List[BasePreprocessor] = list(steps)

    def process(self, content: str) -> str:
        for step in self.steps:
            content = step.process(content)
        return content
