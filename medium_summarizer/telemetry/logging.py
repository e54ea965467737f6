"""Logging setup for the command-line run.

Plain text goes to stderr by default. ``MEDIUM_SUMMARIZER_LOG_FORMAT=json``
switches to one JSON object per line, built from the ``extra`` fields the
modules attach (``event``, ``url``, ``status_code`` ...).
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

ENV_LOG_LEVEL = "MEDIUM_SUMMARIZER_LOG_LEVEL"
ENV_LOG_FORMAT = "MEDIUM_SUMMARIZER_LOG_FORMAT"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}

_SENSITIVE_EXTRA_TOKENS = ("cookie", "api_key", "api-key", "authorization", "secret")

# urllib3 logs every request line at DEBUG, query strings included.
_CHATTY_LOGGERS = ("urllib3",)


def _scrub_url(value: Any) -> Any:
    """Drop query and fragment; Medium links carry tracking and session parameters."""

    if not isinstance(value, str):
        return value
    parts = urlsplit(value)
    if not parts.query and not parts.fragment:
        return value
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def _scrub_extra(key: str, value: Any) -> Any:
    lowered = key.lower()
    if any(token in lowered for token in _SENSITIVE_EXTRA_TOKENS):
        return "***"
    if lowered == "url" or lowered.endswith("_url"):
        return _scrub_url(value)
    return value


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON, scrubbing secrets and URL parameters from extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RECORD_FIELDS or key.startswith("_"):
                continue
            payload[key] = _scrub_extra(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level_name: Optional[str] = None) -> None:
    """Configure process logging on stderr.

    ``level_name`` overrides ``MEDIUM_SUMMARIZER_LOG_LEVEL``; unknown names
    fall back to WARNING so a one-shot run stays quiet.
    """

    level_name = (level_name or os.getenv(ENV_LOG_LEVEL, "WARNING")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING

    handler = logging.StreamHandler()
    if os.getenv(ENV_LOG_FORMAT, "plain").lower() in {"json", "structured"}:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


__all__ = ["configure_logging", "StructuredFormatter"]
