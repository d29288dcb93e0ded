from gh_lookup.config import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("GITHUB_TOKEN", "GITHUB_BASE_URL", "GITHUB_PROXY", "REQUEST_TIMEOUT_SECONDS", "USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert str(settings.github_base_url).rstrip("/") == "https://api.github.com"
    assert settings.github_token is None
    assert settings.request_timeout_seconds == 20
    assert settings.user_agent == "gh-lookup"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "abc")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000"]')
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings(_env_file=None)

    assert settings.github_token == "abc"
    assert settings.request_timeout_seconds == 2.5
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.log_level == "debug"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
