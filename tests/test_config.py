"""
Tests for ClientConfig and the token contract.
"""

import pytest

from helix_client.auth import StaticToken, TwitchToken
from helix_client.config import DEFAULT_BASE_URL, ClientConfig


class TestClientConfig:

    def test_defaults(self):
        config = ClientConfig()
        assert config.base_url == DEFAULT_BASE_URL == "https://api.twitch.tv/helix"
        assert config.timeout == 30.0
        assert not config.debug
        assert config.verify_ssl

    def test_trailing_slash_stripped(self):
        assert ClientConfig(base_url="http://localhost:8080/mock/").base_url == "http://localhost:8080/mock"

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            ClientConfig(timeout=0)

    def test_from_env(self):
        config = ClientConfig.from_env({
            "HELIX_BASE_URL": "http://localhost:8080/mock",
            "HELIX_TIMEOUT": "5",
            "HELIX_DEBUG": "true",
        })
        assert config.base_url == "http://localhost:8080/mock"
        assert config.timeout == 5.0
        assert config.debug

    def test_from_env_defaults(self):
        config = ClientConfig.from_env({})
        assert config == ClientConfig()

    def test_from_process_environment(self, monkeypatch):
        monkeypatch.setenv("HELIX_TIMEOUT", "12.5")
        monkeypatch.delenv("HELIX_DEBUG", raising=False)
        config = ClientConfig.from_env()
        assert config.timeout == 12.5
        assert not config.debug


class TestTokens:

    def test_auth_headers(self):
        token = StaticToken("abc123", "client-1")
        assert token.auth_headers() == {"Client-Id": "client-1", "Authorization": "Bearer abc123"}

    def test_repr_hides_access_token(self):
        assert "abc123" not in repr(StaticToken("abc123", "client-1", user_id="42"))

    def test_missing_scopes(self):
        token = StaticToken("abc123", "client-1", scopes=["moderation:read"])
        assert token.missing_scopes(("moderation:read", "channel:read:vips")) == ("channel:read:vips",)
        assert token.missing_scopes(()) == ()

    def test_unknown_scopes(self):
        token = StaticToken("abc123", "client-1")
        assert token.scopes is None
        assert token.missing_scopes(("moderation:read",)) == ()

    def test_custom_token(self):
        class RefreshingToken(TwitchToken):
            access_token = "fresh"
            client_id = "client-2"

        token = RefreshingToken()
        assert token.user_id is None
        assert token.auth_headers()["Authorization"] == "Bearer fresh"
