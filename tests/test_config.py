import pytest

from clario.config import ConfigurationError, Settings


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://user:pw@db/clario")
    monkeypatch.setenv("SECRET_KEY", "a-long-enough-secret")
    return monkeypatch


def test_from_env_reads_and_normalizes(env):
    env.setenv("CORS_ORIGINS", "https://app.example.com, https://admin.example.com")
    env.setenv("MAX_FILE_SIZE", "2048")
    env.setenv("CLEAR_ANALYSIS_ON_CONTENT_EDIT", "true")
    env.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.database_url == "postgresql://user:pw@db/clario"
    assert settings.cors_origins == ["https://app.example.com", "https://admin.example.com"]
    assert settings.max_file_size == 2048
    assert settings.clear_analysis_on_content_edit is True
    assert settings.log_level == "DEBUG"
    assert settings.openai_model == "gpt-4o-mini"


def test_missing_secret_key_fails_fast(env):
    env.delenv("SECRET_KEY")
    with pytest.raises(ConfigurationError):
        Settings.from_env()


@pytest.mark.parametrize("name,value", [
    ("MAX_FILE_SIZE", "0"),
    ("MAX_FILE_SIZE", "lots"),
    ("LOG_LEVEL", "chatty"),
    ("AI_TIMEOUT_SECONDS", "-5"),
])
def test_invalid_values_fail_fast(env, name, value):
    env.setenv(name, value)
    with pytest.raises(ConfigurationError):
        Settings.from_env()
