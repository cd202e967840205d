"""Tests for config loading."""

import pytest

from github_mcp.config import ConfigError, ServerConfig, check_log_level, load_config


def test_load_config_defaults():
    """Only the token is required; everything else has defaults."""
    config = load_config({"GH_PERSONAL_ACCESS_TOKEN": "ghp_abc"})

    assert config == ServerConfig(github_token="ghp_abc")
    assert config.port == 3333
    assert config.host == "0.0.0.0"
    assert config.api_base_url == "https://api.github.com"
    assert config.log_level == "INFO"


def test_load_config_from_environment():
    """Values are read from the given mapping."""
    config = load_config({
        "GH_PERSONAL_ACCESS_TOKEN": " ghp_abc ",
        "PORT": "8080",
        "HOST": "127.0.0.1",
        "GITHUB_API_URL": "https://github.example.com/api/v3",
        "GITHUB_REQUEST_TIMEOUT": "2.5",
        "LOG_LEVEL": "debug",
    })

    assert config.github_token == "ghp_abc"
    assert config.port == 8080
    assert config.host == "127.0.0.1"
    assert config.api_base_url == "https://github.example.com/api/v3"
    assert config.request_timeout == 2.5
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("environ", [{}, {"GH_PERSONAL_ACCESS_TOKEN": "   "}])
def test_load_config_missing_token(environ):
    """Missing or blank token is rejected."""
    with pytest.raises(ConfigError, match="GH_PERSONAL_ACCESS_TOKEN"):
        load_config(environ)


def test_load_config_invalid_port():
    """Non-numeric PORT is rejected."""
    with pytest.raises(ConfigError, match="PORT"):
        load_config({"GH_PERSONAL_ACCESS_TOKEN": "t", "PORT": "abc"})


def test_load_config_number_types():
    """PORT parses to an int and the timeout to a float."""
    config = load_config(
        {"GH_PERSONAL_ACCESS_TOKEN": "t", "PORT": "8080", "GITHUB_REQUEST_TIMEOUT": "5"}
    )

    assert config.port == 8080 and type(config.port) is int
    assert config.request_timeout == 5.0 and type(config.request_timeout) is float


def test_load_config_invalid_log_level():
    """LOG_LEVEL must name a logging level."""
    with pytest.raises(ConfigError, match="log level"):
        load_config({"GH_PERSONAL_ACCESS_TOKEN": "t", "LOG_LEVEL": "verbose"})


def test_check_log_level_normalizes_case():
    assert check_log_level(" warning ") == "WARNING"


def test_load_config_reads_os_environ(monkeypatch):
    """Without a mapping, os.environ is used."""
    monkeypatch.setenv("GH_PERSONAL_ACCESS_TOKEN", "ghp_env")
    monkeypatch.delenv("PORT", raising=False)

    assert load_config().github_token == "ghp_env"
