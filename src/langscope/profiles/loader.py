"""
Loading of language profile documents from the file system.

Profiles are stored one language per JSON file:

    {"name": "en", "n_words": [2513, 2123, 1806], "freq": {"a": 144, "th": 87}}

This module reads and validates such files and feeds them to a
ProfileBuilder. It is a thin convenience around the core; callers with
their own storage can build LanguageProfile objects and add them to a
builder directly.

Functions:
    load_profile_document(path): Read and validate one document
    load_profiles(sources): Read documents from files and directories
    build_table(sources): Load profiles and build a ProbabilityTable
    build_table_from_directory(directory): Same, for PROFILE_DIRECTORY

Example:
    >>> table = build_table_from_directory("profiles/short_messages")
    >>> detector = table.create_detector()
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from langscope.core.config.settings import settings
from langscope.core.exceptions.custom_exceptions import (
    ConfigurationError,
    ProfileLoadError,
)
from langscope.core.logging.logger import get_logger
from langscope.profiles.base import LangProfileDocument, LanguageProfile
from langscope.profiles.builder import ProbabilityTable, ProfileBuilder

logger = get_logger(__name__)

PROFILE_SUFFIX = ".json"

PathLike = Union[str, Path]


def load_profile_document(path: PathLike) -> LangProfileDocument:
    """
    Read and validate one profile document.

    Raises:
        ProfileLoadError: If the file cannot be read or is not a valid profile
    """
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read language profile", path=str(path), error=str(e))
        raise ProfileLoadError(
            f"Failed to read language profile: {path}",
            error_code="PROFILE_READ_ERROR",
            details={"path": str(path)},
        ) from e

    try:
        return LangProfileDocument.model_validate_json(payload)
    except ValidationError as e:
        logger.error(
            "Invalid language profile", path=str(path), errors=e.error_count()
        )
        raise ProfileLoadError(
            f"Invalid language profile {path}: {e}",
            error_code="PROFILE_PARSE_ERROR",
            details={"path": str(path), "errors": e.error_count()},
        ) from e


def _expand(sources: Iterable[PathLike]) -> List[Path]:
    files: List[Path] = []
    for source in sources:
        source = Path(source)
        if source.is_dir():
            files.extend(sorted(source.glob(f"*{PROFILE_SUFFIX}")))
        else:
            files.append(source)
    return files


def load_profiles(sources: Union[PathLike, Iterable[PathLike]]) -> List[LanguageProfile]:
    """
    Load profiles from files and/or directories of JSON files.

    Args:
        sources: A path or an iterable of paths; directories contribute all
            their *.json files in name order

    Returns:
        List[LanguageProfile]: One profile per file

    Raises:
        ProfileLoadError: If a file is unreadable, invalid, or listed twice
    """
    if isinstance(sources, (str, Path)):
        sources = [sources]

    seen = set()
    profiles: List[LanguageProfile] = []
    for file_path in _expand(sources):
        resolved = file_path.resolve()
        if resolved in seen:
            raise ProfileLoadError(
                f"Language profile listed more than once: {file_path}",
                error_code="DUPLICATE_PROFILE_SOURCE",
                details={"path": str(file_path)},
            )
        seen.add(resolved)
        profiles.append(LanguageProfile.from_document(load_profile_document(file_path)))

    logger.info("Loaded language profiles", count=len(profiles))
    return profiles


def build_table(sources: Union[PathLike, Iterable[PathLike]]) -> ProbabilityTable:
    """Load profiles from sources and build a probability table"""
    builder = ProfileBuilder()
    for profile in load_profiles(sources):
        builder.add_profile(profile)
    return builder.build()


def build_table_from_directory(directory: Optional[PathLike] = None) -> ProbabilityTable:
    """
    Build a probability table from every profile in a directory.

    Args:
        directory: Profile directory; PROFILE_DIRECTORY when omitted

    Raises:
        ConfigurationError: If no directory is given or configured
        ProfileLoadError: If a profile cannot be loaded
        NoProfilesLoadedError: If the directory holds no profiles
    """
    directory = directory or settings.PROFILE_DIRECTORY
    if not directory:
        raise ConfigurationError(
            "No profile directory given and PROFILE_DIRECTORY is not set",
            error_code="PROFILE_DIRECTORY_MISSING",
        )
    directory = Path(directory)
    if not directory.is_dir():
        raise ConfigurationError(
            f"Profile directory not found: {directory}",
            error_code="PROFILE_DIRECTORY_MISSING",
            details={"path": str(directory)},
        )
    return build_table(directory)
