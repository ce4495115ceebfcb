"""
Tests for settings, detection parameters and the exception hierarchy.
"""

import pytest
from pydantic import ValidationError

from langscope.core.config.settings import Settings
from langscope.core.config.validation import ConfigValidator, DetectionParameters
from langscope.core.exceptions.custom_exceptions import (
    CannotDetectError,
    ConfigurationError,
    DetectionError,
    DuplicateLanguageError,
    LangScopeError,
    NoProfilesLoadedError,
    NoTextError,
    ProfileError,
)


class TestSettings:
    """Test cases for environment-driven settings."""

    def test_defaults(self):
        s = Settings()
        assert s.DETECTOR_ALPHA == 0.5
        assert s.DETECTOR_MAX_TEXT_LENGTH == 10000
        assert s.PROFILE_DIRECTORY is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DETECTOR_N_TRIAL", "3")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = Settings()
        assert s.DETECTOR_N_TRIAL == 3
        assert s.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Settings(LOG_LEVEL="LOUD")

    def test_invalid_log_format(self):
        with pytest.raises(ValueError):
            Settings(LOG_FORMAT="xml")


class TestDetectionParameters:
    """Test cases for estimator parameter validation."""

    def test_from_settings(self):
        params = DetectionParameters.from_settings(Settings(DETECTOR_ALPHA=0.2))
        assert params.alpha == 0.2
        assert params.n_trial == 7
        assert params.base_freq == 10000.0

    def test_overrides_win_and_none_is_ignored(self):
        params = DetectionParameters.from_settings(n_trial=2, alpha=None)
        assert params.n_trial == 2
        assert params.alpha == 0.5

    def test_invalid_override(self):
        with pytest.raises(ConfigurationError) as exc_info:
            DetectionParameters.from_settings(iteration_limit=-5)
        assert exc_info.value.error_code == "INVALID_DETECTION_PARAMETERS"

    def test_unknown_override_rejected(self):
        with pytest.raises(ConfigurationError):
            DetectionParameters.from_settings(n_trials=1)

    def test_parameters_are_frozen(self):
        params = DetectionParameters()
        with pytest.raises(ValidationError):
            params.alpha = 1.0


class TestConfigValidator:
    """Test cases for configuration file loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("version: '2'\nstop_characters: ''\n")
        assert ConfigValidator.load_config(str(path)) == {
            "version": "2",
            "stop_characters": "",
        }

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("version: [unclosed\n")
        with pytest.raises(ConfigurationError):
            ConfigValidator.load_config(str(path))

    def test_codepoint_notations(self):
        config = ConfigValidator.validate_normalization_table(
            {
                "version": "1",
                "range_map": [
                    {"start": "U+3040", "end": "0x309F", "target": "あ"},
                    {"start": 0x30A0, "end": 0x30FF, "target": "U+30A2"},
                ],
            }
        )
        assert config.range_map[0].start == 0x3040
        assert config.range_map[0].end == 0x309F
        assert config.range_map[1].target == "ア"

    def test_reversed_range_rejected(self):
        with pytest.raises(ConfigurationError):
            ConfigValidator.validate_normalization_table(
                {
                    "version": "1",
                    "stop_ranges": [{"start": "U+2070", "end": "U+2000"}],
                }
            )


class TestExceptions:
    """Test cases for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, LangScopeError)
        assert issubclass(DuplicateLanguageError, ProfileError)
        assert issubclass(NoProfilesLoadedError, ProfileError)
        assert issubclass(NoTextError, DetectionError)
        assert issubclass(CannotDetectError, DetectionError)

    def test_error_fields(self):
        error = NoTextError("No features in text", error_code="NO_TEXT")
        assert error.message == "No features in text"
        assert error.error_code == "NO_TEXT"
        assert error.details == {}
        assert str(error) == "No features in text"
