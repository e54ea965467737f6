"""Page retrieval and article extraction."""

from .extractor import ContentDocument, ContentExtractor
from .medium import FetchedPage, MediumClient

__all__ = ["ContentDocument", "ContentExtractor", "FetchedPage", "MediumClient"]
