"""Tests for settings."""

from nutrition_macros.config import Settings, widget_domain


def test_settings_default_to_deferred_analysis(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    settings = Settings(_env_file=None)

    assert settings.openai_api_key is None
    assert settings.live_analysis_enabled is False


def test_settings_read_credential_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("BASE_URL", "https://macros.example.com")

    settings = Settings(_env_file=None)

    assert settings.live_analysis_enabled is True
    assert settings.base_url == "https://macros.example.com"


def test_widget_domain_strips_trailing_slash() -> None:
    assert widget_domain(" https://macros.example.com/ ") == (
        "https://macros.example.com"
    )
