"""Telemetry helpers for the Medium summarizer."""

from .logging import configure_logging

__all__ = ["configure_logging"]
