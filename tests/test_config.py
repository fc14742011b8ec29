"""Tests for environment-driven settings."""

from attention_index.config import Settings, get_settings, reset_settings_cache


def test_defaults(monkeypatch):
    for name in ("GEMINI_API_KEY", "HUME_API_KEY", "ELEVENLABS_API_KEY", "GEMINI_MIN_INTERVAL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)

    assert s.gemini_api_key == ""
    assert s.gemini_model == "gemini-2.0-flash"
    assert s.gemini_min_interval_seconds == 4.0
    assert s.speech_max_retries == 3
    assert s.speech_retry_base_delay_seconds == 1.0
    assert s.session_cookie_name == "app_session_id"
    assert s.api_port == 8000


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("GEMINI_MIN_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("SPEECH_MAX_RETRIES", "5")
    monkeypatch.setenv("SITE_URL", "https://attention.example")
    s = Settings(_env_file=None)

    assert s.gemini_api_key == "g-key"
    assert s.gemini_min_interval_seconds == 0.5
    assert s.speech_max_retries == 5
    assert s.site_url == "https://attention.example"


def test_get_settings_is_cached_until_reset(monkeypatch):
    reset_settings_cache()
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    first = get_settings()
    assert get_settings() is first
    assert first.log_level == "DEBUG"

    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    reset_settings_cache()
    assert get_settings().log_level == "WARNING"
    reset_settings_cache()
