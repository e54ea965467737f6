"""Large language model utilities for article summarisation."""

from .client import SummarizationClient, SummaryResult

__all__ = [
    "SummarizationClient",
    "SummaryResult",
]
