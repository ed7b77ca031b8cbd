"""Tests for environment configuration."""
import pytest

from tools.config import (
    ConfigError,
    get_api_token,
    get_debug_info,
    get_log_level,
    get_timeout,
)


class TestApiToken:
    def test_token_from_env(self, monkeypatch):
        monkeypatch.setenv("TODOIST_API_TOKEN", "abc123")
        assert get_api_token() == "abc123"

    def test_token_is_stripped(self, monkeypatch):
        monkeypatch.setenv("TODOIST_API_TOKEN", "  abc123\n")
        assert get_api_token() == "abc123"

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("TODOIST_API_TOKEN", raising=False)
        with pytest.raises(ConfigError, match="TODOIST_API_TOKEN"):
            get_api_token()

    def test_blank_token(self, monkeypatch):
        monkeypatch.setenv("TODOIST_API_TOKEN", "   ")
        with pytest.raises(ConfigError):
            get_api_token()


class TestTimeout:
    def test_unset_means_no_timeout(self, monkeypatch):
        monkeypatch.delenv("TODOIST_TIMEOUT", raising=False)
        assert get_timeout() is None

    def test_valid_timeout(self, monkeypatch):
        monkeypatch.setenv("TODOIST_TIMEOUT", "30")
        assert get_timeout() == 30.0

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_invalid_timeout_ignored(self, monkeypatch, raw):
        monkeypatch.setenv("TODOIST_TIMEOUT", raw)
        assert get_timeout() is None


class TestLogLevel:
    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("TODOIST_MCP_LOG_LEVEL", raising=False)
        assert get_log_level() == "INFO"

    def test_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("TODOIST_MCP_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("TODOIST_MCP_LOG_LEVEL", "chatty")
        assert get_log_level() == "INFO"


def test_debug_info_hides_token(monkeypatch):
    monkeypatch.setenv("TODOIST_API_TOKEN", "secret-token")
    info = get_debug_info()
    assert info["token_configured"] is True
    assert "secret-token" not in str(info)
