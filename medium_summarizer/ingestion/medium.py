"""Authenticated retrieval of Medium article pages."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union
from urllib.parse import urlsplit

from medium_summarizer.config.settings import AppSettings
from medium_summarizer.errors import ConfigError, InvalidUrlError
from medium_summarizer.http.transport import HttpTransport
from medium_summarizer.ingestion.extractor import ContentDocument, ContentExtractor

logger = logging.getLogger(__name__)

_EXTRACTOR = ContentExtractor()


@dataclass(frozen=True)
class FetchedPage:
    """Raw page body as returned by the content host."""

    url: str
    body: str


def _validate_cookie(cookie: object) -> str:
    if not isinstance(cookie, str):
        raise ConfigError("Medium session cookie must be a string")
    if not cookie.strip():
        raise ConfigError("Medium session cookie is empty")
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in cookie):
        raise ConfigError("Medium session cookie contains control characters")
    return cookie


def _validate_url(url: object) -> str:
    if not isinstance(url, str) or not url:
        raise InvalidUrlError(str(url), "URL must be a non-empty string")
    if any(char.isspace() for char in url):
        raise InvalidUrlError(url, "URL must not contain whitespace")
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    if parts.scheme.lower() not in {"http", "https"}:
        raise InvalidUrlError(url, "scheme must be http or https")
    if not hostname:
        raise InvalidUrlError(url, "URL has no host")
    return url


def _page_markup(page: Union[FetchedPage, str, bytes]) -> Union[str, bytes]:
    return page.body if isinstance(page, FetchedPage) else page


class MediumClient:
    """Fetch Medium pages with a session cookie and turn them into clean text."""

    def __init__(
        self,
        cookie: str,
        *,
        settings: Optional[AppSettings] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._cookie = _validate_cookie(cookie)
        self._settings = settings or AppSettings()
        self._transport = transport or HttpTransport(timeout=self._settings.http.timeout_seconds)

    def _build_headers(self) -> Dict[str, str]:
        medium = self._settings.medium
        return {
            "Cookie": self._cookie,
            "User-Agent": medium.user_agent,
            "Origin": medium.origin,
            "Accept": medium.accept,
        }

    def fetch(self, url: str) -> FetchedPage:
        """Download ``url`` with the stored cookie attached."""

        url = _validate_url(url)
        logger.info("Fetching article %s", url, extra={"event": "medium.fetch", "url": url})
        body = self._transport.request(url, self._build_headers())
        logger.info(
            "Fetched %d characters from %s",
            len(body),
            url,
            extra={"event": "medium.fetched", "url": url, "size": len(body)},
        )
        return FetchedPage(url=url, body=body)

    @staticmethod
    def get_content(page: Union[FetchedPage, str, bytes]) -> ContentDocument:
        """Extract title and paragraph text from a fetched page or raw HTML."""

        return _EXTRACTOR.extract(_page_markup(page))

    @staticmethod
    def get_embedded_content(page: Union[FetchedPage, str, bytes]) -> ContentDocument:
        """Like :meth:`get_content` but read paragraphs from the embedded page state.

        Client-rendered articles carry their text only in serialized script data.
        """

        markup = _page_markup(page)
        document = _EXTRACTOR.extract(markup)
        return ContentDocument(title=document.title, body=_EXTRACTOR.extract_embedded_text(markup))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cookie='***')"


__all__ = ["FetchedPage", "MediumClient"]
