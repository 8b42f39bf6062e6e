"""
Tests for environment-driven settings.
"""

from motifia_backend.config import Settings, get_settings, reset_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("API_PORT", "CORS_ORIGIN", "ENVIRONMENT", "SESSION_COOKIE", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.api_port == 5000
        assert s.cors_origin == "http://localhost:5173"
        assert s.session_cookie == "motifia.sid"
        assert s.session_max_age_seconds == 86400
        assert not s.is_production
        assert s.cookie_same_site == "lax"

    def test_env_values_are_cleaned(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGIN", '"https://motifia.example";')
        monkeypatch.setenv("GOOGLE_CALLBACK_URL", "'https://motifia.example/login'")
        s = Settings(_env_file=None)
        assert s.cors_origin == "https://motifia.example"
        assert s.google_callback_url == "https://motifia.example/login"

    def test_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        s = Settings(_env_file=None)
        assert s.is_production
        assert s.cookie_same_site == "none"

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_get_settings_cached(self, monkeypatch):
        monkeypatch.setenv("AUTHORIZED_EMAIL", "first@example.com")
        first = get_settings()
        monkeypatch.setenv("AUTHORIZED_EMAIL", "second@example.com")
        assert get_settings() is first
        reset_settings()
        assert get_settings().authorized_email == "second@example.com"
