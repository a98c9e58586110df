"""Tests for environment configuration."""

import pytest

from livecast.app_config import AppEnvironConfig, get_app_environ_config
from livecast.shared.config import EnvironConfig, config


class TestEnvironConfig:
    def test_is_singleton(self):
        assert EnvironConfig() is config

    def test_environment_overrides_after_reload(self, monkeypatch):
        """Test process environment values are visible after reload."""
        # Arrange
        monkeypatch.setenv("LIVECAST_TEST_VALUE", "from-env")

        # Act
        config.reload()

        # Assert
        assert config.get("LIVECAST_TEST_VALUE") == "from-env"
        assert "LIVECAST_TEST_VALUE" in config

        monkeypatch.delenv("LIVECAST_TEST_VALUE")
        config.reload()
        assert config.get("LIVECAST_TEST_VALUE", "fallback") == "fallback"

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            config["LIVECAST_DOES_NOT_EXIST"]


class TestAppEnvironConfig:
    def test_returns_module_singleton(self):
        assert get_app_environ_config() is get_app_environ_config()

    def test_explicit_values(self):
        """Test settings can be built explicitly for tests and embedding."""
        # Act
        cfg = AppEnvironConfig(
            ACCOUNTNAME="amslive",
            STREAMING_ENDPOINT_NAME="se-eu",
            WAIT_FOR_STREAMING_ENDPOINT=False,
        )

        # Assert
        assert cfg.ACCOUNTNAME == "amslive"
        assert cfg.STREAMING_ENDPOINT_NAME == "se-eu"
        assert cfg.WAIT_FOR_STREAMING_ENDPOINT is False
