"""
Core configuration management for LangScope.

This module provides centralized configuration management using Pydantic settings
with support for environment variables, type validation, and sensible defaults
for every tunable of the language detector.

Classes:
    Settings: Main configuration class with all application settings

Environment Variables:
    Application settings can be overridden using environment variables with the
    same names as the class attributes (case-sensitive).

Example:
    >>> from langscope.core.config.settings import Settings
    >>> settings = Settings()
    >>> print(settings.DETECTOR_N_TRIAL)
    7

Configuration Sections:
    - Application: Basic app configuration (name, version, environment)
    - Logging: Application logging configuration
    - Detection: Monte Carlo estimator defaults
    - Data: Profile and normalization table locations
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables using the
    same name as the attribute. For example, DETECTOR_ALPHA=0.3 in the
    environment changes the default smoothing of every new detector.

    Attributes:
        APP_NAME: Application name identifier
        APP_VERSION: Current application version
        ENVIRONMENT: Deployment environment (development/staging/production)
        DEBUG: Enable debug mode with rich console logging

        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        LOG_FORMAT: Log format (json/text)
        LOG_FILE_PATH: Path for log file output (optional)

        DETECTOR_ALPHA: Default smoothing parameter
        DETECTOR_N_TRIAL: Number of independent Monte Carlo trials
        DETECTOR_ALPHA_WIDTH: Standard deviation of the per-trial alpha jitter
        DETECTOR_ITERATION_LIMIT: Maximum updates per trial
        DETECTOR_CONV_THRESHOLD: Max probability at which a trial stops early
        DETECTOR_PROB_THRESHOLD: Minimum probability for detect() to commit
        DETECTOR_MAX_TEXT_LENGTH: Cap on accumulated normalized characters
        DETECTOR_BASE_FREQ: Divisor turning alpha into the additive smoothing term

        PROFILE_DIRECTORY: Directory holding profile JSON documents (optional)
        NORMALIZATION_TABLE_PATH: Replacement normalization table (optional)
    """

    # Application
    APP_NAME: str = "LangScope"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE_PATH: Optional[str] = None

    # Detection Configuration
    DETECTOR_ALPHA: float = 0.5
    DETECTOR_N_TRIAL: int = 7
    DETECTOR_ALPHA_WIDTH: float = 0.05
    DETECTOR_ITERATION_LIMIT: int = 1000
    DETECTOR_CONV_THRESHOLD: float = 0.99999
    DETECTOR_PROB_THRESHOLD: float = 0.1
    DETECTOR_MAX_TEXT_LENGTH: int = 10000
    DETECTOR_BASE_FREQ: float = 10000.0

    # Data
    PROFILE_DIRECTORY: Optional[str] = None
    NORMALIZATION_TABLE_PATH: Optional[str] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate logging level is a supported value.

        Ensures the log level is one of the standard Python logging
        levels. Converts to uppercase for consistency.

        Args:
            v (str): The log level value to validate

        Returns:
            str: The validated and normalized log level

        Raises:
            ValueError: If log level is not supported
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # This will ignore extra fields from environment
    )


settings = Settings()
