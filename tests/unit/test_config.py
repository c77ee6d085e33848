"""
Unit tests for configuration settings.
"""

from technotes.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PORT", "NODE_ENV", "ENVIRONMENT", "REQUIRE_AUTH", "PASSWORD_HASH_ROUNDS"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)

        assert settings.port == 3500
        assert settings.environment == "development"
        assert settings.password_hash_rounds == 10
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.refresh_cookie_name == "jwt"
        assert settings.require_auth is False
        assert settings.db_error_log_file == "dbErrLog.log"

    def test_node_env_alias(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("NODE_ENV", "production")
        assert Settings(_env_file=None).environment == "production"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", '["https://notes.example.com"]')
        monkeypatch.setenv("REQUIRE_AUTH", "true")

        settings = Settings(_env_file=None)
        assert settings.port == 8080
        assert settings.cors_origins == ["https://notes.example.com"]
        assert settings.require_auth is True

    def test_get_settings_is_shared(self):
        assert get_settings() is get_settings()
