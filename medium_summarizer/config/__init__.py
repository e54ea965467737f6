"""Settings and credential loading."""

from .settings import (
    AppSettings,
    Credentials,
    HttpSettings,
    LLMSettings,
    MediumSettings,
    load_credentials,
    load_settings,
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
