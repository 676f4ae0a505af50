"""Runtime configuration for the GitHub Enterprise MCP server.

Values resolve as CLI override > process environment > ``.env`` file > default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping
from urllib.parse import urlparse

from dotenv import dotenv_values

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "mcp-github-enterprise"
DEFAULT_TIMEOUT = 30.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_PORT_ATTEMPTS = 10
DEFAULT_KEEPALIVE = 15.0

BASE_URL_VARS = ("GITHUB_ENTERPRISE_URL", "GITHUB_API_URL", "GHE_API_URL", "GITHUB_URL")
TOKEN_VARS = ("GITHUB_TOKEN", "GH_TOKEN")
LANGUAGE_VARS = ("MCP_LANGUAGE", "LANGUAGE")
TRANSPORTS = ("stdio", "http")
LANGUAGES = ("en", "ko")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Config:
    base_url: str = DEFAULT_BASE_URL
    token: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False
    language: str = "en"
    transport: str = "stdio"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    port_attempts: int = DEFAULT_PORT_ATTEMPTS
    keepalive: float = DEFAULT_KEEPALIVE

    @property
    def is_enterprise(self) -> bool:
        return bool(self.base_url) and "github.com" not in self.base_url

    def redacted(self) -> dict[str, Any]:
        return {
            "base_url": self.base_url,
            "token": "(set)" if self.token else "(none)",
            "transport": self.transport,
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "language": self.language,
        }


def _is_truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _first(env: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def _merged_environ(environ: Mapping[str, str] | None, dotenv_path: str | None) -> dict[str, str]:
    if environ is not None:
        return dict(environ)
    merged = {k: v for k, v in dotenv_values(dotenv_path or ".env").items() if v is not None}
    merged.update(os.environ)
    return merged


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    base_url = _first(env, BASE_URL_VARS)
    if base_url:
        values["base_url"] = base_url
    token = _first(env, TOKEN_VARS)
    if token:
        values["token"] = token
    if env.get("GITHUB_USER_AGENT"):
        values["user_agent"] = env["GITHUB_USER_AGENT"]
    if env.get("GITHUB_TIMEOUT"):
        # milliseconds, matching the GitHub client conventions
        values["timeout"] = _parse_int("GITHUB_TIMEOUT", env["GITHUB_TIMEOUT"]) / 1000.0
    if env.get("DEBUG"):
        values["debug"] = _is_truthy(env["DEBUG"])
    language = _first(env, LANGUAGE_VARS)
    if language:
        values["language"] = language
    if env.get("MCP_TRANSPORT"):
        values["transport"] = env["MCP_TRANSPORT"]
    if env.get("HOST"):
        values["host"] = env["HOST"]
    if env.get("PORT"):
        values["port"] = _parse_int("PORT", env["PORT"])
    if env.get("MCP_PORT_ATTEMPTS"):
        values["port_attempts"] = _parse_int("MCP_PORT_ATTEMPTS", env["MCP_PORT_ATTEMPTS"])
    if env.get("MCP_KEEPALIVE_INTERVAL"):
        values["keepalive"] = _parse_float("MCP_KEEPALIVE_INTERVAL", env["MCP_KEEPALIVE_INTERVAL"])
    return values


def _validate(config: Config) -> Config:
    parsed = urlparse(config.base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"GitHub API URL must be an http(s) URL, got {config.base_url!r}")
    if config.timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {config.timeout}")
    if config.transport not in TRANSPORTS:
        raise ConfigError(f"Unsupported transport {config.transport!r}; expected one of {TRANSPORTS}")
    if not 0 < config.port < 65536:
        raise ConfigError(f"port must be between 1 and 65535, got {config.port}")
    if config.port_attempts < 1:
        raise ConfigError(f"port attempts must be at least 1, got {config.port_attempts}")
    if config.keepalive <= 0:
        raise ConfigError(f"keepalive interval must be positive, got {config.keepalive}")
    language = config.language if config.language in LANGUAGES else "en"
    return replace(config, base_url=config.base_url.rstrip("/"), language=language)


def load_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    dotenv_path: str | None = None,
) -> Config:
    """Resolve the effective configuration.

    ``overrides`` carries CLI values; ``None`` entries are ignored so argparse
    defaults never mask the environment. Passing ``environ`` skips the ``.env``
    lookup entirely, which keeps tests hermetic.
    """

    values = _from_env(_merged_environ(environ, dotenv_path))
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    try:
        config = Config(**values)
    except TypeError as exc:
        raise ConfigError(str(exc)) from exc
    return _validate(config)


def build_api_url(config: Config, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return f"{config.base_url.rstrip('/')}/{path.lstrip('/')}"
