# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config.settings import (
    SearchSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestSearchSettings:
    """Tests for SearchSettings."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default configuration values."""
        monkeypatch.delenv("SEARCH_TIME_LIMIT_MS", raising=False)

        settings = SearchSettings()

        assert settings.time_limit_ms == 2000
        assert settings.max_nodes is None
        assert settings.seed is None
        assert settings.default_difficulty == "medium"

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {
            "SEARCH_TIME_LIMIT_MS": "500",
            "SEARCH_MAX_NODES": "10000",
            "SEARCH_SEED": "42",
            "SEARCH_DEFAULT_DIFFICULTY": "hard",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = SearchSettings()

        assert settings.time_limit_ms == 500
        assert settings.max_nodes == 10000
        assert settings.seed == 42
        assert settings.default_difficulty == "hard"

    def test_negative_time_limit_rejected(self) -> None:
        """Test that a negative time budget is rejected."""
        with pytest.raises(ValidationError):
            SearchSettings(time_limit_ms=-1)

    def test_zero_node_budget_rejected(self) -> None:
        """Test that a node budget must be positive."""
        with pytest.raises(ValidationError):
            SearchSettings(max_nodes=0)

    def test_unknown_difficulty_rejected(self) -> None:
        """Test that only known difficulty levels are accepted."""
        with pytest.raises(ValidationError):
            SearchSettings(default_difficulty="impossible")  # type: ignore[arg-type]


class TestSettings:
    """Tests for main Settings class."""

    def test_subsettings_loaded(self) -> None:
        """Test that search subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.search, SearchSettings)

    def test_search_settings_follow_environment(self) -> None:
        """Test that nested search settings read their own prefix."""
        with patch.dict(os.environ, {"SEARCH_MAX_NODES": "321"}, clear=False):
            settings = Settings()

        assert settings.search.max_nodes == 321

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_development is True
        assert prod_settings.is_development is False

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_production is False
        assert prod_settings.is_production is True

    def test_invalid_log_level_rejected(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_level="VERBOSE")  # type: ignore[arg-type]


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        clear_settings_cache()

        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        clear_settings_cache()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_clear_cache_allows_reload(self) -> None:
        """Test that clearing cache allows reloading settings."""
        clear_settings_cache()

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2
