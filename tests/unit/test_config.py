# tests/unit/test_config.py
import pytest
from ai_feedback.config import Settings


@pytest.mark.unit
def test_settings_loads_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")
    monkeypatch.setenv("DEFAULT_PROVIDER", "gemini")
    monkeypatch.setenv("MAX_RETRIES", "4")

    settings = Settings()

    assert settings.openai_api_key == "test-openai-key"
    assert settings.default_provider == "gemini"
    assert settings.max_retries == 4


@pytest.mark.unit
def test_settings_defaults():
    settings = Settings(openai_api_key="x")

    assert settings.quick_model == "gpt-4o-mini"
    assert settings.report_model == "gpt-4o"
    assert settings.quick_timeout == 25.0
    assert settings.report_timeout == 40.0
    assert settings.quick_max_prompt == 8192
    assert settings.report_max_prompt == 16384
    assert settings.max_file_chars == 2048
    assert settings.max_retries == 2


@pytest.mark.unit
def test_supported_extensions():
    settings = Settings()

    assert ".py" in settings.supported_extensions
    assert ".md" in settings.supported_extensions
    assert ".txt" not in settings.supported_extensions
