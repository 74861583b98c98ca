import pytest
from config.settings import DEFAULT_COUNTRIES_URL, FormConfig

ENV_VARS = ("COUNTRIES_API_URL", "COUNTRIES_TIMEOUT", "ENCRYPTION_KEY", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_from_env_defaults(clean_env):
    cfg = FormConfig.from_env()

    assert cfg.countries_url == DEFAULT_COUNTRIES_URL
    assert cfg.countries_timeout is None
    assert cfg.encryption_key is None
    assert cfg.log_level == "INFO"


def test_from_env_reads_values(clean_env):
    clean_env.setenv("COUNTRIES_API_URL", "https://countries.test/all")
    clean_env.setenv("COUNTRIES_TIMEOUT", "2.5")
    clean_env.setenv("ENCRYPTION_KEY", "a2V5")
    clean_env.setenv("LOG_LEVEL", "debug")

    cfg = FormConfig.from_env()

    assert cfg.countries_url == "https://countries.test/all"
    assert cfg.countries_timeout == 2.5
    assert cfg.encryption_key == "a2V5"
    assert cfg.log_level == "DEBUG"


def test_from_env_empty_values_fall_back(clean_env):
    clean_env.setenv("COUNTRIES_TIMEOUT", "")
    clean_env.setenv("ENCRYPTION_KEY", "")

    cfg = FormConfig.from_env()

    assert cfg.countries_timeout is None
    assert cfg.encryption_key is None
