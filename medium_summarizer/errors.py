"""Exception hierarchy shared by the fetch and summarisation stages."""
from __future__ import annotations

from typing import Any, Dict, Optional


class SummarizerError(RuntimeError):
    """Base class for every failure raised by the summarizer core."""


class ConfigError(SummarizerError):
    """Raised when credentials or settings are missing or invalid."""


class InvalidUrlError(SummarizerError):
    """Raised when an article URL is not an absolute HTTP(S) URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid article URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class TransportError(SummarizerError):
    """Raised when a network round trip fails or returns a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[str] = None,
        response_body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause or message
        self.response_body = response_body


class ExtractionError(SummarizerError):
    """Raised when input cannot be parsed as markup at all."""


class _DebuggableError(SummarizerError):
    def __init__(self, message: str, debug_info: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.debug_info = debug_info


class ResponseParseError(_DebuggableError):
    """Raised when the provider envelope is malformed."""


class SummaryFormatError(_DebuggableError):
    """Raised when the generated text does not have the requested summary shape."""


__all__ = [
    "SummarizerError",
    "ConfigError",
    "InvalidUrlError",
    "TransportError",
    "ExtractionError",
    "ResponseParseError",
    "SummaryFormatError",
]
