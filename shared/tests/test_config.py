"""
Tests for configuration management.
"""

import pytest

from shared.config import ConfigError, Settings, get_settings, settings


def test_settings_loads_from_env_file(tmp_path):
    """Settings load from a .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        "HUGGINGFACE_TOKEN=hf_test_token_1234\n"
        "ESTIMATION_MODE=local\n"
        "INTAKE_DELAY_SECONDS=0.5\n"
        "DEFAULT_RENDER_STYLE=anime\n"
        "LOG_LEVEL=DEBUG\n"
    )

    loaded = Settings(_env_file=str(env_file))

    assert loaded.huggingface_token == "hf_test_token_1234"
    assert loaded.estimation_mode == "local"
    assert loaded.intake_delay_seconds == 0.5
    assert loaded.default_render_style == "anime"
    assert loaded.log_level == "DEBUG"
    assert loaded.has_credential is True


def test_settings_env_vars_are_case_insensitive(monkeypatch):
    monkeypatch.setenv("huggingface_token", "hf_lower_case_token")
    monkeypatch.setenv("Render_Model", "acme/toonify")

    loaded = Settings(_env_file=None)

    assert loaded.huggingface_token == "hf_lower_case_token"
    assert loaded.render_model == "acme/toonify"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("HUGGINGFACE_TOKEN", raising=False)
    monkeypatch.delenv("ESTIMATION_MODE", raising=False)

    loaded = Settings(_env_file=None)

    assert loaded.huggingface_token is None
    assert loaded.has_credential is False
    assert loaded.estimation_mode == "remote"
    assert loaded.intake_delay_seconds == 2.0
    assert loaded.max_photo_size_mb == 10
    assert loaded.default_render_style == "cute"


def test_blank_token_is_treated_as_missing():
    loaded = Settings(_env_file=None, huggingface_token="   ")
    assert loaded.huggingface_token is None
    assert loaded.has_credential is False


def test_truncated_token_raises_config_error():
    with pytest.raises(ConfigError, match="HUGGINGFACE_TOKEN appears to be invalid"):
        Settings(_env_file=None, huggingface_token="hf_x")


def test_api_url_must_be_http():
    with pytest.raises(ConfigError, match="HF_API_URL must be a valid HTTP/HTTPS URL"):
        Settings(_env_file=None, hf_api_url="ftp://models.example.com")


def test_api_url_trailing_slash_is_stripped():
    loaded = Settings(_env_file=None, hf_api_url="https://inference.example.com/models/")
    assert loaded.hf_api_url == "https://inference.example.com/models"


def test_negative_durations_are_rejected():
    with pytest.raises(ConfigError, match="non-negative"):
        Settings(_env_file=None, intake_delay_seconds=-1)


def test_size_limits_must_be_positive():
    with pytest.raises(ConfigError, match="positive"):
        Settings(_env_file=None, max_photo_size_mb=0)


def test_get_settings_returns_singleton():
    assert get_settings() is settings
