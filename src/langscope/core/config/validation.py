"""
Validation of detection parameters and normalization data for LangScope.

This module holds the Pydantic models that guard the numeric tunables of the
Monte Carlo estimator and the loader for the versioned character
normalization table. Both convert validation failures into the package's
ConfigurationError so callers see one error type for bad configuration.

Key Features:
    - Range validation for every estimator parameter
    - Construction of parameters from application settings
    - Per-detector overrides layered on top of settings
    - YAML/JSON loading of normalization tables with schema validation

Example Usage:
    >>> params = DetectionParameters.from_settings(n_trial=3)
    >>> params.n_trial
    3
    >>> table = ConfigValidator.validate_file("normalization.yaml")
    >>> table.version
    '1.0'
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from langscope.core.config.settings import Settings, settings as default_settings
from langscope.core.exceptions.custom_exceptions import ConfigurationError


class DetectionParameters(BaseModel):
    """Tunables of the Monte Carlo Naive-Bayes estimator"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    alpha: float = 0.5
    n_trial: int = Field(default=7, ge=1)
    alpha_width: float = Field(default=0.05, ge=0.0)
    iteration_limit: int = Field(default=1000, ge=0)
    conv_threshold: float = Field(default=0.99999, gt=0.0, le=1.0)
    prob_threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    max_text_length: int = Field(default=10000, ge=0)
    base_freq: float = Field(default=10000.0, gt=0.0)

    @classmethod
    def from_settings(
        cls, app_settings: Optional[Settings] = None, **overrides: Any
    ) -> "DetectionParameters":
        """
        Build parameters from settings, applying explicit overrides.

        Overrides whose value is None are ignored so that optional keyword
        arguments can be forwarded unchanged.

        Args:
            app_settings (Optional[Settings]): Settings to read defaults from,
                the module-level settings when omitted
            **overrides: Parameter values that take precedence over settings

        Returns:
            DetectionParameters: Validated, immutable parameter set

        Raises:
            ConfigurationError: If any resulting value is out of range
        """
        s = app_settings or default_settings
        values: Dict[str, Any] = {
            "alpha": s.DETECTOR_ALPHA,
            "n_trial": s.DETECTOR_N_TRIAL,
            "alpha_width": s.DETECTOR_ALPHA_WIDTH,
            "iteration_limit": s.DETECTOR_ITERATION_LIMIT,
            "conv_threshold": s.DETECTOR_CONV_THRESHOLD,
            "prob_threshold": s.DETECTOR_PROB_THRESHOLD,
            "max_text_length": s.DETECTOR_MAX_TEXT_LENGTH,
            "base_freq": s.DETECTOR_BASE_FREQ,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                f"Detection parameter validation failed: {e}",
                error_code="INVALID_DETECTION_PARAMETERS",
                details={"overrides": overrides},
            ) from e


def _parse_codepoint(value: Any) -> int:
    """Accept 'U+3042', '0x3042', a single character or an int"""
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.upper().startswith("U+"):
        return int(text[2:], 16)
    if text.lower().startswith("0x"):
        return int(text, 16)
    if len(text) == 1:
        return ord(text)
    raise ValueError(f"Invalid codepoint: {value!r}")


class CodepointRange(BaseModel):
    """Inclusive codepoint range, optionally mapped to one representative"""

    name: str = ""
    start: int
    end: int
    target: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_codepoint(cls, v):
        return _parse_codepoint(v)

    @field_validator("target", mode="before")
    @classmethod
    def parse_target(cls, v):
        if v is None:
            return v
        return chr(_parse_codepoint(v))

    @field_validator("end")
    @classmethod
    def validate_order(cls, v, info):
        start = info.data.get("start")
        if start is not None and v < start:
            raise ValueError("range end must not precede start")
        return v


class NormalizationTableConfig(BaseModel):
    """Schema of the versioned character normalization table"""

    version: str
    stop_characters: str = ""
    stop_ranges: List[CodepointRange] = []
    char_map: Dict[str, str] = {}
    range_map: List[CodepointRange] = []
    cjk_variants: Dict[str, str] = {}

    @field_validator("char_map", "cjk_variants")
    @classmethod
    def validate_single_characters(cls, v):
        for source, target in v.items():
            if len(source) != 1 or len(target) != 1:
                raise ValueError(
                    f"mappings must be single characters: {source!r} -> {target!r}"
                )
        return v

    @field_validator("range_map")
    @classmethod
    def validate_targets(cls, v):
        for entry in v:
            if entry.target is None:
                raise ValueError(f"range_map entry {entry.name!r} has no target")
        return v


class ConfigValidator:
    """Loader for data files that configure normalization"""

    @staticmethod
    def load_config(file_path: str) -> Dict[str, Any]:
        """Load configuration from file"""
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() in [".yaml", ".yml"]:
                    return yaml.safe_load(f)
                elif path.suffix.lower() == ".json":
                    return json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e
        raise ConfigurationError(f"Unsupported file format: {path.suffix}")

    @staticmethod
    def validate_normalization_table(
        config: Dict[str, Any],
    ) -> NormalizationTableConfig:
        """Validate a normalization table document"""
        try:
            return NormalizationTableConfig(**(config or {}))
        except ValidationError as e:
            raise ConfigurationError(
                f"Normalization table validation failed: {e}",
                error_code="INVALID_NORMALIZATION_TABLE",
            ) from e

    @staticmethod
    def validate_file(file_path: str) -> NormalizationTableConfig:
        """Load and validate a normalization table file"""
        config = ConfigValidator.load_config(file_path)
        return ConfigValidator.validate_normalization_table(config)
