"""
Custom exception hierarchy for LangScope error handling.

This module defines a structured exception hierarchy that carries error codes
and contextual details for every failure the detector can report. Each
exception is raised synchronously at the call that triggers it and never
leaves shared state (probability tables, detector evidence) modified.

Exception Hierarchy:
    LangScopeError (base)
    ├── ConfigurationError: Invalid parameters or normalization data
    ├── ProfileError: Language profile problems
    │   ├── DuplicateLanguageError: Same language added twice to a builder
    │   ├── NoProfilesLoadedError: Table requested with no profiles
    │   ├── InvalidNGramError: N-gram of unsupported length (logged, skipped)
    │   └── ProfileLoadError: Unreadable or malformed profile document
    └── DetectionError: Classification failures
        ├── NoTextError: No usable n-gram evidence accumulated
        └── CannotDetectError: Best candidate below the significance threshold

Example:
    >>> try:
    ...     language = detector.detect()
    ... except CannotDetectError as e:
    ...     logger.info("Ambiguous text", best=e.details["language"])
    ...     ranking = detector.detect_all()
    >>>
    >>> # Raising with context
    >>> raise DuplicateLanguageError(
    ...     "en language profile is already defined",
    ...     details={"language": "en"}
    ... )
"""

from typing import Any, Dict, Optional


class LangScopeError(Exception):
    """
    Base exception class for all LangScope errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code defaults to the class name if not specified and is
    used for error categorization in structured logs.

    Example:
        >>> raise LangScopeError(
        ...     "Profile could not be parsed",
        ...     error_code="PROFILE_PARSE_ERROR",
        ...     details={"path": "profiles/en.json"}
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(LangScopeError):
    """
    Raised when configuration validation or setup fails.

    Common scenarios:
        - Detection parameters out of range (e.g. conv_threshold > 1)
        - Missing or malformed normalization table file
        - Prior map with negative or all-zero weights
    """

    pass


class ProfileError(LangScopeError):
    """Base class for language profile errors"""

    pass


class DuplicateLanguageError(ProfileError):
    """
    Raised when a language identifier is added twice to one builder.

    The failed call leaves the builder untouched; the first profile for
    the language stays in effect and the builder remains usable.
    """

    pass


class NoProfilesLoadedError(ProfileError):
    """Raised when a probability table is built from zero profiles"""

    pass


class InvalidNGramError(ProfileError):
    """
    Raised for an n-gram whose length is outside 1..3.

    The profile builder catches this, logs a warning and skips the entry;
    it never escapes table construction.
    """

    pass


class ProfileLoadError(ProfileError):
    """Raised when a profile document cannot be read or validated"""

    pass


class DetectionError(LangScopeError):
    """Base class for classification errors"""

    pass


class NoTextError(DetectionError):
    """
    Raised when classification is requested without usable evidence.

    Happens for empty input and for text none of whose n-grams appear in
    the probability table. The detector keeps its state, so callers may
    append more text and retry.
    """

    pass


class CannotDetectError(DetectionError):
    """
    Raised by detect() when the best language is below the threshold.

    The details dictionary carries the best candidate and its probability;
    detect_all() never raises this error.
    """

    pass
