import pytest

from app.config import AppConfig, is_placeholder_credential, validate_ai_config


@pytest.fixture()
def clean_env(monkeypatch):
    for name in (
        "VATIKA_ENV",
        "VATIKA_SECONDARY_PROVIDER",
        "OPENAI_API_KEY",
        "GEMINI_API_KEY",
        "ANTHROPIC_API_KEY",
        "LLM_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = AppConfig()

    assert config.environment == "production"
    assert config.is_development is False
    assert config.secondary_provider == "gemini"
    assert config.openai_model == "gpt-4o-mini"
    assert config.gemini_model == "gemini-2.0-flash"
    assert config.catalog_url == "http://localhost:3000/api/plants"
    assert config.state_dir == "var"


def test_environment_is_normalised(clean_env):
    clean_env.setenv("VATIKA_ENV", " Production ")
    clean_env.setenv("VATIKA_SECONDARY_PROVIDER", "ANTHROPIC")

    config = AppConfig()

    assert config.environment == "production"
    assert config.is_development is False
    assert config.secondary_provider == "anthropic"


def test_integer_env_must_parse(clean_env):
    clean_env.setenv("LLM_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="LLM_TIMEOUT"):
        AppConfig()


@pytest.mark.parametrize(
    "value, expected",
    [(None, True), ("", True), ("  ", True), ("sk-REAL_OPENAI_API_KEY_HERE", True), ("sk-live", False)],
)
def test_placeholder_detection(value, expected):
    assert is_placeholder_credential(value, ("sk-REAL_OPENAI_API_KEY_HERE",)) is expected


def test_validation_warns_about_placeholders(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-REAL_OPENAI_API_KEY_HERE")
    clean_env.setenv("GEMINI_API_KEY", "live-google-key")

    warnings = validate_ai_config(AppConfig())

    assert warnings == ["OPENAI_API_KEY is missing or still set to a placeholder value"]


def test_validation_warns_about_unknown_secondary(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-live")
    clean_env.setenv("VATIKA_SECONDARY_PROVIDER", "llama")

    warnings = validate_ai_config(AppConfig())

    assert len(warnings) == 1
    assert "Unknown secondary provider 'llama'" in warnings[0]


def test_development_must_be_requested_explicitly(clean_env):
    clean_env.setenv("VATIKA_ENV", "development")
    assert AppConfig().is_development is True

    clean_env.setenv("VATIKA_ENV", "")
    assert AppConfig().is_development is False
