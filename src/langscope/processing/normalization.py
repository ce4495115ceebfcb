"""
Character canonicalization driven by a versioned normalization table.

Which characters count as word separators and which codepoints collapse
into one representative are corpus-tuning decisions, so they live in a
data file (langscope/data/normalization.yaml) rather than in code. This
module loads and validates that file and applies it one character at a
time. Only the treatment of ASCII is fixed here: letters are kept with
their case, everything else in ASCII separates words.

A replacement table can be configured with NORMALIZATION_TABLE_PATH. The
profiles in use must have been built with text normalized by the same
table version, otherwise n-grams will not line up.

Example:
    >>> table = get_default_table()
    >>> table.normalize("Déjà-vu!")
    'Déjà vu '
    >>> table.normalize("ひらがな")
    'ああああ'
"""

from functools import lru_cache
from importlib import resources
from typing import Dict, List, Optional, Tuple

import yaml

from langscope.core.config.settings import settings
from langscope.core.config.validation import (
    ConfigValidator,
    NormalizationTableConfig,
)
from langscope.core.exceptions.custom_exceptions import ConfigurationError
from langscope.core.logging.logger import get_logger

logger = get_logger(__name__)

SPACE = " "
DEFAULT_TABLE_RESOURCE = "normalization.yaml"


class _TranslationCache(dict):
    """str.translate mapping that fills itself from the table on demand"""

    def __init__(self, table: "NormalizationTable"):
        super().__init__()
        self._table = table

    def __missing__(self, codepoint: int) -> str:
        value = self._table.normalize_char(chr(codepoint))
        self[codepoint] = value
        return value


class NormalizationTable:
    """
    Per-character canonicalization rules.

    Attributes:
        version (str): Version tag of the loaded table
        stop_characters (frozenset): Non-ASCII characters treated as spaces
        stop_ranges (List[Tuple[int, int]]): Codepoint ranges treated as spaces
        char_map (Dict[str, str]): Single-character substitutions
        range_map (List[Tuple[int, int, str]]): Ranges collapsed to one char
    """

    def __init__(self, config: NormalizationTableConfig):
        self.version = config.version
        self.stop_characters = frozenset(config.stop_characters)
        self.stop_ranges: List[Tuple[int, int]] = [
            (r.start, r.end) for r in config.stop_ranges
        ]
        # Ideograph variants share the lookup with orthographic variants.
        self.char_map: Dict[str, str] = {**config.char_map, **config.cjk_variants}
        self.range_map: List[Tuple[int, int, str]] = [
            (r.start, r.end, r.target) for r in config.range_map
        ]
        self._translation = _TranslationCache(self)

    @classmethod
    def from_file(cls, path: str) -> "NormalizationTable":
        table = cls(ConfigValidator.validate_file(path))
        logger.info("Loaded normalization table", path=path, version=table.version)
        return table

    @classmethod
    def from_package_data(cls) -> "NormalizationTable":
        try:
            text = (
                resources.files("langscope.data")
                .joinpath(DEFAULT_TABLE_RESOURCE)
                .read_text(encoding="utf-8")
            )
            config = yaml.safe_load(text)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Bundled normalization table is unreadable: {e}",
                error_code="NORMALIZATION_TABLE_MISSING",
            ) from e
        return cls(ConfigValidator.validate_normalization_table(config))

    def normalize_char(self, ch: str) -> str:
        """Map one character to its canonical form, or to a space for stops"""
        codepoint = ord(ch)
        if codepoint < 0x80:
            return ch if ch.isalpha() else SPACE
        if ch in self.stop_characters or ch.isspace():
            return SPACE
        for start, end in self.stop_ranges:
            if start <= codepoint <= end:
                return SPACE
        mapped = self.char_map.get(ch)
        if mapped is not None:
            return mapped
        for start, end, target in self.range_map:
            if start <= codepoint <= end:
                return target
        return ch

    def normalize(self, text: str) -> str:
        """Apply normalize_char to every character of text"""
        return text.translate(self._translation)


@lru_cache(maxsize=None)
def _load_table(path: Optional[str]) -> NormalizationTable:
    if path:
        return NormalizationTable.from_file(path)
    return NormalizationTable.from_package_data()


def get_default_table() -> NormalizationTable:
    """
    Return the process-wide normalization table.

    Uses NORMALIZATION_TABLE_PATH when configured, the bundled table
    otherwise. The table is loaded once per path and shared.

    Raises:
        ConfigurationError: If the table file is missing or invalid
    """
    return _load_table(settings.NORMALIZATION_TABLE_PATH)
