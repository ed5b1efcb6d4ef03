from pathlib import Path

import pytest

from ffcompanion.config import Settings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch):
    for name in ("OPENAI_API_KEY", "FFC_MAX_OUTPUT_TOKENS", "FFC_TEMPERATURE", "FFC_ENV", "SUPABASE_URL", "SUPABASE_KEY"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.openai_api_key is None
    assert settings.max_output_tokens == 500
    assert settings.temperature == pytest.approx(0.7)
    assert settings.model_standard == "gpt-3.5-turbo"
    assert settings.model_advanced == "gpt-4"
    assert not settings.is_development
    assert not settings.uses_supabase


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
    monkeypatch.setenv("FFC_MAX_OUTPUT_TOKENS", "800")
    monkeypatch.setenv("FFC_TEMPERATURE", "5")
    monkeypatch.setenv("FFC_ENV", "development")
    monkeypatch.setenv("FFC_DB_PATH", "/tmp/players.sqlite")
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon")
    settings = Settings.from_env()
    assert settings.openai_api_key == "sk-live"
    assert settings.max_output_tokens == 800
    assert settings.temperature == pytest.approx(2.0)
    assert settings.is_development
    assert settings.db_path == Path("/tmp/players.sqlite")
    assert settings.uses_supabase


def test_malformed_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FFC_MAX_OUTPUT_TOKENS", "lots")
    monkeypatch.setenv("FFC_REQUEST_TIMEOUT", "soon")
    settings = Settings.from_env()
    assert settings.max_output_tokens == 500
    assert settings.request_timeout == pytest.approx(60.0)
