"""Thin HTTP transport shared by the Medium and summarisation clients."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from medium_summarizer.errors import TransportError

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 500


class HttpTransport:
    """Perform single HTTP round trips and return the body as text.

    No retries happen here; one call is one attempt.
    """

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        """Release pooled connections held by the underlying session."""

        self._session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(
        self,
        url: str,
        headers: Mapping[str, str],
        *,
        method: str = "GET",
        json_body: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send ``method`` to ``url`` and return the decoded response body."""

        logger.debug(
            "HTTP %s %s",
            method,
            url,
            extra={"event": "http.request", "method": method, "url": url},
        )
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers),
                json=json_body,
                timeout=self._timeout,
            )
        except requests.Timeout as exc:
            raise TransportError(
                f"{method} {url} timed out after {self._timeout}s",
                cause=str(exc),
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}", cause=str(exc)) from exc

        status = response.status_code
        if not 200 <= status < 300:
            reason = getattr(response, "reason", None) or "error"
            body = (response.text or "")[:_ERROR_BODY_LIMIT]
            raise TransportError(
                f"{method} {url} returned HTTP {status} ({reason})",
                status_code=status,
                cause=reason,
                response_body=body,
            )

        logger.debug(
            "HTTP %s %s -> %d (%d chars)",
            method,
            url,
            status,
            len(response.text),
            extra={"event": "http.response", "status_code": status},
        )
        return response.text


__all__ = ["HttpTransport"]
