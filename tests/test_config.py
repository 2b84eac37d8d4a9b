"""
Tests for API key lookup.
"""

import pytest
import streamlit

from sciplot import config


@pytest.fixture
def no_env_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)


class TestGetApiKey:
    """Test cases for get_api_key."""

    def test_google_api_key_preferred(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g")
        monkeypatch.setenv("API_KEY", "a")
        assert config.get_api_key() == "g"

    def test_api_key_fallback(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "a")
        assert config.get_api_key() == "a"

    def test_streamlit_secrets_fallback(self, monkeypatch, no_env_key):
        monkeypatch.setattr(streamlit, "secrets", {"GOOGLE_API_KEY": "s"})
        assert config.get_api_key() == "s"

    def test_none_when_nothing_set(self, monkeypatch, no_env_key):
        monkeypatch.setattr(streamlit, "secrets", {})
        assert config.get_api_key() is None

    def test_none_when_secrets_unreadable(self, monkeypatch, no_env_key):
        """A missing secrets.toml is reported as no key, not an error."""
        class MissingSecrets:
            def get(self, key, default=None):
                raise FileNotFoundError("secrets.toml")

        monkeypatch.setattr(streamlit, "secrets", MissingSecrets())
        assert config.get_api_key() is None
