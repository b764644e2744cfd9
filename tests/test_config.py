"""Tests for startup configuration."""

import pytest

from tradeapi.config import load_settings
from tradeapi.errors import ConfigError


class TestSettings:
    """Key material must be present and well formed."""

    def test_loads_from_environment(self, settings):
        assert settings.api_key == "test-api-key"
        assert len(settings.encryption_key_bytes) == 32
        assert settings.port == 3001
        assert settings.solana_rpc_url == "https://api.devnet.solana.com"

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("API_KEY")

        with pytest.raises(ConfigError, match="API_KEY"):
            load_settings(_env_file=None)

    def test_empty_api_key(self):
        with pytest.raises(ConfigError):
            load_settings(_env_file=None, api_key="")

    def test_missing_encryption_key(self, monkeypatch):
        monkeypatch.delenv("ENCRYPTION_KEY")

        with pytest.raises(ConfigError, match="ENCRYPTION_KEY"):
            load_settings(_env_file=None)

    @pytest.mark.parametrize("key", ["00" * 31, "00" * 64, "not-hex"])
    def test_bad_encryption_key(self, key):
        with pytest.raises(ConfigError):
            load_settings(_env_file=None, encryption_key=key)

    def test_settings_are_frozen(self, settings):
        with pytest.raises(Exception):
            settings.api_key = "changed"

    def test_safe_dict_redacts_secrets(self):
        settings = load_settings(
            _env_file=None, mongodb_uri="mongodb://bot:hunter2@db:27017/solana-bot"
        )
        data = settings.get_safe_dict()

        assert data["api_key"] == "***"
        assert data["encryption_key"] == "***"
        assert "hunter2" not in data["mongodb_uri"]
