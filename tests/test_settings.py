from __future__ import annotations

from nysc_extract.settings import get_settings, load_settings


def test_defaults_come_from_app_toml():
    settings = load_settings()
    assert settings.default_provider == "gemini"
    assert settings.gemini_model == "gemini-3-flash-preview"
    assert settings.gemini_api_key == "test-key"


def test_bare_api_key_is_accepted(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY")
    monkeypatch.setenv("API_KEY", "legacy-key")
    assert load_settings().gemini_api_key == "legacy-key"


def test_env_overrides_toml(tmp_path, monkeypatch):
    cfg = tmp_path / "app.toml"
    cfg.write_text('[app]\nlog_level = "DEBUG"\ngemini_model = "gemini-from-toml"\n', encoding="utf-8")

    assert load_settings(cfg).log_level == "DEBUG"
    assert load_settings(cfg).gemini_model == "gemini-from-toml"

    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert load_settings(cfg).log_level == "WARNING"


def test_missing_toml_falls_back_to_field_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.toml")
    assert settings.max_upload_mb == 20
    assert settings.app_title == "NYSC Extract"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_configure_logging_runs_once(monkeypatch):
    import logging

    import nysc_extract.logging as log_setup

    calls = []
    monkeypatch.setattr(log_setup, "_LOGGING_CONFIGURED", False)
    monkeypatch.setattr(log_setup.logging, "basicConfig", lambda **kw: calls.append(kw))

    log_setup.configure_logging("debug")
    log_setup.configure_logging("info")

    assert len(calls) == 1
    assert calls[0]["level"] == logging.DEBUG
    assert calls[0]["format"] == log_setup.LOG_FORMAT
