"""Outbound HTTP helpers."""

from .transport import HttpTransport

__all__ = ["HttpTransport"]
