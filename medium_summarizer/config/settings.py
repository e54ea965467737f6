"""Application settings management for the Medium summarizer."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from medium_summarizer.errors import ConfigError


DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "settings.yaml"
ENV_SETTINGS_PATH = "MEDIUM_SUMMARIZER_SETTINGS"

ENV_MEDIUM_COOKIE = "MEDIUM_COOKIE"
ENV_API_KEY = "CLAUDE_API"
ENV_API_URL = "CLAUDE_URL"

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:124.0) Gecko/20100101 Firefox/124.0"


@dataclass(frozen=True)
class HttpSettings:
    """Transport level options shared by both clients."""

    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class MediumSettings:
    """Headers used when retrieving article pages."""

    user_agent: str = DEFAULT_USER_AGENT
    origin: str = "https://medium.com"
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


@dataclass(frozen=True)
class LLMSettings:
    """Configuration for the hosted summarisation model."""

    model: str = "claude-3-haiku-20240307"
    api_version: str = "2023-06-01"
    max_output_tokens: int = 1024
    temperature: float = 0.2
    max_content_chars: int = 60000
    debug_payloads: bool = False


@dataclass(frozen=True)
class AppSettings:
    """Top-level application settings loaded from YAML."""

    http: HttpSettings = field(default_factory=HttpSettings)
    medium: MediumSettings = field(default_factory=MediumSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)


@dataclass(frozen=True)
class Credentials:
    """Secrets sourced from the environment, never from the settings file."""

    medium_cookie: Optional[str]
    api_key: Optional[str]
    api_url: Optional[str]


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Settings file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Settings file must define a mapping at the root level")
    return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    entry = data.get(name) or {}
    if not isinstance(entry, dict):
        raise ConfigError(f"'{name}' must be a mapping of configuration values")
    return entry


def _parse_http(entry: Dict[str, Any]) -> HttpSettings:
    timeout = float(entry.get("timeout_seconds", 30.0))
    if timeout <= 0:
        raise ConfigError("'http.timeout_seconds' must be positive")
    return HttpSettings(timeout_seconds=timeout)


def _parse_medium(entry: Dict[str, Any]) -> MediumSettings:
    defaults = MediumSettings()
    return MediumSettings(
        user_agent=str(entry.get("user_agent", defaults.user_agent)),
        origin=str(entry.get("origin", defaults.origin)),
        accept=str(entry.get("accept", defaults.accept)),
    )


def _parse_llm(entry: Dict[str, Any]) -> LLMSettings:
    defaults = LLMSettings()
    return LLMSettings(
        model=str(entry.get("model", defaults.model)),
        api_version=str(entry.get("api_version", defaults.api_version)),
        max_output_tokens=max(1, int(entry.get("max_output_tokens", defaults.max_output_tokens))),
        temperature=float(entry.get("temperature", defaults.temperature)),
        max_content_chars=max(1, int(entry.get("max_content_chars", defaults.max_content_chars))),
        debug_payloads=bool(entry.get("debug_payloads", defaults.debug_payloads)),
    )


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """Load application settings from YAML into ``AppSettings``.

    ``path`` defaults to the value of the ``MEDIUM_SUMMARIZER_SETTINGS`` environment
    variable and falls back to ``config/settings.yaml`` relative to the project root.
    Only an explicitly requested file is required to exist.
    """

    if path is None:
        env_path = os.environ.get(ENV_SETTINGS_PATH)
        if env_path:
            path = Path(env_path)
        elif DEFAULT_SETTINGS_PATH.exists():
            path = DEFAULT_SETTINGS_PATH
        else:
            return AppSettings()

    data = _load_yaml(Path(path))

    try:
        return AppSettings(
            http=_parse_http(_section(data, "http")),
            medium=_parse_medium(_section(data, "medium")),
            llm=_parse_llm(_section(data, "llm")),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value in settings file {path}: {exc}") from exc


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read the cookie and API credentials from ``environ`` (default ``os.environ``)."""

    env = os.environ if environ is None else environ
    return Credentials(
        medium_cookie=env.get(ENV_MEDIUM_COOKIE),
        api_key=env.get(ENV_API_KEY),
        api_url=env.get(ENV_API_URL),
    )


__all__ = [
    "AppSettings",
    "Credentials",
    "HttpSettings",
    "LLMSettings",
    "MediumSettings",
    "load_credentials",
    "load_settings",
]
