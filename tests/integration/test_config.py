#!/usr/bin/env python3
"""
Integration tests for configuration module.

Tests configuration loading from the environment and directory creation.
"""

from pathlib import Path

import pytest

from findash.core.config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)


@pytest.mark.integration
class TestConfigLoading:
    """Test configuration loading and structure."""

    def test_config_loads_successfully(self):
        """Test that config loads in the test environment."""
        config = get_config()

        assert config.environment is Environment.TEST
        assert config.validate() == []
        assert is_test()
        assert not is_development()
        assert not is_production()

    def test_directories_created(self, tmp_path):
        """Test data, report and workspace directories exist after loading."""
        config = get_config()

        assert config.data_dir == (tmp_path / "findash_data").resolve()
        assert config.output_dir.is_dir()
        assert config.storage.workspace_dir.is_dir()
        assert get_data_dir() == config.data_dir

    def test_config_is_cached(self):
        """Test get_config returns the same instance until reloaded."""
        first = get_config()
        assert get_config() is first
        assert reload_config() is not first

    def test_environment_overrides(self, monkeypatch):
        """Test settings come from environment variables."""
        monkeypatch.setenv("FINDASH_ALERT_WINDOW_DAYS", "14")
        monkeypatch.setenv("FINDASH_CSV_ENCODING", "latin-1")
        monkeypatch.setenv("FINDASH_WORKSPACE", "household")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("DEBUG", "true")

        config = reload_config()

        assert config.analysis.alert_window_days == 14
        assert config.ingest.encoding == "latin-1"
        assert config.storage.default_workspace == "household"
        assert config.log_level == "WARNING"
        assert config.debug is True

    def test_default_date_formats(self):
        """Test CSV date fallbacks are configured."""
        assert "%m/%d/%Y" in get_config().ingest.date_formats

    def test_default_encoding_ignores_byte_order_mark(self):
        """Test CSV files are decoded with the BOM-tolerant UTF-8 codec by default."""
        assert get_config().ingest.encoding == "utf-8-sig"

    def test_extra_date_formats(self, monkeypatch):
        """Test FINDASH_DATE_FORMATS appends formats after the defaults."""
        monkeypatch.setenv("FINDASH_DATE_FORMATS", "%d.%m.%Y | %Y%m%d")

        formats = reload_config().ingest.date_formats

        assert formats[-2:] == ("%d.%m.%Y", "%Y%m%d")
        assert formats[0] == "%m/%d/%Y"


@pytest.mark.integration
class TestConfigValidation:
    """Test configuration validation."""

    def test_negative_alert_window(self, monkeypatch):
        """Test a negative alert window fails validation."""
        monkeypatch.setenv("FINDASH_ALERT_WINDOW_DAYS", "-1")

        errors = Config.from_environment().validate()

        assert any("Alert window" in error for error in errors)

    def test_unknown_encoding(self, monkeypatch):
        """Test an unknown CSV encoding fails validation."""
        monkeypatch.setenv("FINDASH_CSV_ENCODING", "no-such-codec")

        errors = Config.from_environment().validate()

        assert any("encoding" in error for error in errors)

    def test_non_integer_setting(self, monkeypatch):
        """Test a non-numeric integer setting names the variable."""
        monkeypatch.setenv("FINDASH_RECENT_TRANSACTIONS", "ten")

        with pytest.raises(ValueError, match="FINDASH_RECENT_TRANSACTIONS"):
            Config.from_environment()

    def test_unknown_log_level(self, monkeypatch):
        """Test an unknown log level fails validation."""
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        errors = Config.from_environment().validate()

        assert any("LOG_LEVEL" in error for error in errors)

    def test_get_config_raises_on_invalid(self, monkeypatch):
        """Test get_config refuses an invalid configuration."""
        monkeypatch.setenv("FINDASH_ALERT_WINDOW_DAYS", "-5")

        with pytest.raises(ValueError, match="Configuration validation failed"):
            reload_config()

    def test_to_dict_is_json_friendly(self):
        """Test paths and enums are rendered as strings."""
        data = get_config().to_dict()

        assert data["environment"] == "test"
        assert isinstance(data["data_dir"], str)
        assert isinstance(data["storage"]["workspace_dir"], str)
        assert isinstance(data["ingest"]["date_formats"], list)
        assert Path(data["output_dir"]).name == "reports"
