"""Fetch a Medium article and summarise it with a hosted language model."""

from .errors import (
    ConfigError,
    ExtractionError,
    InvalidUrlError,
    ResponseParseError,
    SummarizerError,
    SummaryFormatError,
    TransportError,
)
from .ingestion import ContentDocument, ContentExtractor, FetchedPage, MediumClient
from .llm import SummarizationClient, SummaryResult

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ContentDocument",
    "ContentExtractor",
    "ExtractionError",
    "FetchedPage",
    "InvalidUrlError",
    "MediumClient",
    "ResponseParseError",
    "SummarizationClient",
    "SummarizerError",
    "SummaryFormatError",
    "SummaryResult",
    "TransportError",
]
