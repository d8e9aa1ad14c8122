"""Tests for environment based configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from textcat.category import DEFAULT_THRESHOLD
from textcat.config import Settings
from textcat.errors import InvalidThresholdError


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.profiles_path is None
        assert settings.threshold == DEFAULT_THRESHOLD
        assert settings.sample_extension == "sample"
        assert settings.log_level == "WARNING"
        assert settings.log_level_value == logging.WARNING

    def test_custom_values(self):
        settings = Settings.from_env({
            "TEXTCAT_PROFILES": " /tmp/languages.json ",
            "TEXTCAT_THRESHOLD": "0.1",
            "TEXTCAT_SAMPLE_EXTENSION": ".txt",
            "TEXTCAT_LOG_LEVEL": "debug",
        })
        assert settings.profiles_path == Path("/tmp/languages.json")
        assert settings.threshold == 0.1
        assert settings.sample_extension == "txt"
        assert settings.log_level_value == logging.DEBUG

    def test_blank_values_use_defaults(self):
        settings = Settings.from_env({"TEXTCAT_PROFILES": "  ", "TEXTCAT_THRESHOLD": ""})
        assert settings.profiles_path is None
        assert settings.threshold == DEFAULT_THRESHOLD

    @pytest.mark.parametrize("value", ["0", "1", "1.5", "-0.2"])
    def test_threshold_out_of_range(self, value):
        with pytest.raises(InvalidThresholdError):
            Settings.from_env({"TEXTCAT_THRESHOLD": value})

    def test_threshold_not_a_number(self):
        with pytest.raises(ValueError, match="TEXTCAT_THRESHOLD"):
            Settings.from_env({"TEXTCAT_THRESHOLD": "lots"})

    def test_empty_extension(self):
        with pytest.raises(ValueError, match="TEXTCAT_SAMPLE_EXTENSION"):
            Settings.from_env({"TEXTCAT_SAMPLE_EXTENSION": "."})

    def test_bad_log_level(self):
        with pytest.raises(ValueError, match="TEXTCAT_LOG_LEVEL"):
            Settings.from_env({"TEXTCAT_LOG_LEVEL": "chatty"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TEXTCAT_THRESHOLD", "0.2")
        assert Settings.from_env().threshold == 0.2
