"""Configuration loading for the GitHub MCP server."""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TypeVar

TOKEN_ENV_VAR = "GH_PERSONAL_ACCESS_TOKEN"
DEFAULT_PORT = 3333
DEFAULT_API_BASE_URL = "https://api.github.com"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

T = TypeVar("T", int, float)


class ConfigError(ValueError):
    """Raised when the environment does not describe a usable server."""


@dataclass(frozen=True)
class ServerConfig:
    """Process-wide settings, built once at startup and passed down explicitly."""

    github_token: str
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 30.0
    log_level: str = "INFO"


def _parse_number(
    environ: Mapping[str, str], name: str, default: T, kind: Callable[[str], T]
) -> T:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def check_log_level(value: str) -> str:
    """Normalize a logging level name.

    Raises:
        ConfigError: If ``value`` is not one of LOG_LEVELS.
    """
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"log level must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
        )
    return level


def load_config(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Build a ServerConfig from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The loaded configuration.

    Raises:
        ConfigError: If the GitHub token is missing, a numeric value is invalid
            or LOG_LEVEL is not a known level.
    """
    if environ is None:
        environ = os.environ

    token = environ.get(TOKEN_ENV_VAR, "").strip()
    if not token:
        raise ConfigError(f"{TOKEN_ENV_VAR} environment variable required")

    return ServerConfig(
        github_token=token,
        host=environ.get("HOST", "").strip() or "0.0.0.0",
        port=_parse_number(environ, "PORT", DEFAULT_PORT, int),
        api_base_url=environ.get("GITHUB_API_URL", "").strip() or DEFAULT_API_BASE_URL,
        request_timeout=_parse_number(environ, "GITHUB_REQUEST_TIMEOUT", 30.0, float),
        log_level=check_log_level(environ.get("LOG_LEVEL", "").strip() or "INFO"),
    )
