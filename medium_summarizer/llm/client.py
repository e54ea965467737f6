"""Client for summarising articles through the Anthropic Messages API."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from medium_summarizer.config.settings import AppSettings, LLMSettings, load_credentials
from medium_summarizer.errors import (
    ConfigError,
    ResponseParseError,
    SummarizerError,
    SummaryFormatError,
)
from medium_summarizer.http.transport import HttpTransport
from medium_summarizer.ingestion.extractor import ContentDocument
from medium_summarizer.llm.prompts import ARTICLE_SUMMARY_PROMPT, JsonPromptTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryResult:
    """Structured summary parsed from the model's answer."""

    title: str
    bullet_points: Tuple[str, ...]
    tags: FrozenSet[str]
    model: Optional[str] = None
    response_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "bullet_points": list(self.bullet_points),
            "tags": sorted(self.tags),
            "model": self.model,
            "response_id": self.response_id,
        }


class SummarizationClient:
    """Send article text to a hosted model and parse a structured summary."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: Optional[str],
        *,
        settings: Optional[LLMSettings] = None,
        transport: Optional[HttpTransport] = None,
        template: JsonPromptTemplate = ARTICLE_SUMMARY_PROMPT,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ConfigError("API key for the summarisation endpoint is missing")
        if not api_url or not api_url.strip():
            raise ConfigError("API URL for the summarisation endpoint is missing")
        self._api_key = api_key.strip()
        self._api_url = api_url.strip()
        self._settings = settings or LLMSettings()
        self._transport = transport or HttpTransport()
        self._template = template

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        settings: Optional[AppSettings] = None,
        transport: Optional[HttpTransport] = None,
    ) -> "SummarizationClient":
        """Build a client from ``CLAUDE_API`` and ``CLAUDE_URL``."""

        credentials = load_credentials(environ)
        app_settings = settings or AppSettings()
        return cls(
            credentials.api_key,
            credentials.api_url,
            settings=app_settings.llm,
            transport=transport or HttpTransport(timeout=app_settings.http.timeout_seconds),
        )

    @property
    def settings(self) -> LLMSettings:
        return self._settings

    @property
    def api_url(self) -> str:
        return self._api_url

    def fetch(self, document: ContentDocument) -> SummaryResult:
        """Summarise ``document`` with a single API call."""

        payload = self.build_body(document)
        headers = self._build_headers()
        debug_info: Dict[str, Any] = {
            "method": "POST",
            "url": self._api_url,
            "headers": self._redact_sensitive(headers),
            "payload": payload,
        }

        logger.info(
            "Requesting summary for %r from %s (%d chars)",
            document.title,
            self._settings.model,
            len(document.body),
            extra={"event": "summary.request", "model": self._settings.model},
        )

        try:
            raw = self._transport.request(
                self._api_url, headers, method="POST", json_body=payload
            )
            debug_info["response_body"] = raw
            envelope, text = self._unwrap_envelope(raw, debug_info)
            result = self._parse_summary(text, document, envelope, debug_info)
        except SummarizerError as exc:
            debug_info.setdefault("error", str(exc))
            self._log_debug_payload(debug_info)
            raise

        self._log_debug_payload(debug_info)
        usage = envelope.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        logger.info(
            "Received summary with %d bullet points",
            len(result.bullet_points),
            extra={
                "event": "summary.received",
                "input_tokens": usage.get("input_tokens"),
                "output_tokens": usage.get("output_tokens"),
            },
        )
        return result

    def build_body(self, document: ContentDocument) -> Dict[str, Any]:
        """Return the Messages API request body for ``document``."""

        limit = self._settings.max_content_chars
        content = document.body
        if len(content) > limit:
            logger.warning(
                "Article body truncated from %d to %d characters",
                len(content),
                limit,
                extra={"event": "summary.truncated", "original_chars": len(content)},
            )
            content = content[:limit]

        user_prompt = self._template.render_user_prompt(title=document.title, content=content)
        return {
            "model": self._settings.model,
            "system": self._template.system_prompt,
            "max_tokens": self._settings.max_output_tokens,
            "temperature": self._settings.temperature,
            "messages": [{"role": "user", "content": user_prompt}],
        }

    def _build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": self._settings.api_version,
            "content-type": "application/json",
        }

    @staticmethod
    def _unwrap_envelope(
        raw: str, debug_info: Dict[str, Any]
    ) -> Tuple[Dict[str, Any], str]:
        try:
            envelope = json.loads(raw)
        except json.JSONDecodeError as exc:
            debug_info["error"] = f"Provider response was not JSON: {exc}"
            raise ResponseParseError("Provider response was not valid JSON", debug_info) from exc
        if not isinstance(envelope, dict):
            debug_info["error"] = "Provider response was not a JSON object"
            raise ResponseParseError("Provider response was not a JSON object", debug_info)

        if envelope.get("type") == "error":
            error = envelope.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else str(error)
            debug_info["error"] = f"Provider reported an error: {message}"
            raise ResponseParseError(f"Provider reported an error: {message}", debug_info)

        blocks = envelope.get("content")
        if not isinstance(blocks, list):
            debug_info["error"] = "Provider response has no content list"
            raise ResponseParseError("Provider response has no content list", debug_info)

        texts: List[str] = [
            block["text"]
            for block in blocks
            if isinstance(block, dict)
            and block.get("type", "text") == "text"
            and isinstance(block.get("text"), str)
        ]
        if not texts:
            debug_info["error"] = "Provider response has no text content"
            raise ResponseParseError("Provider response has no text content", debug_info)

        return envelope, "".join(texts)

    def _parse_summary(
        self,
        text: str,
        document: ContentDocument,
        envelope: Dict[str, Any],
        debug_info: Dict[str, Any],
    ) -> SummaryResult:
        content = text.strip()
        if not content:
            raise SummaryFormatError("Model returned an empty answer", debug_info)

        try:
            parsed = self._parse_json(content)
        except json.JSONDecodeError as exc:
            raise SummaryFormatError("Model answer was not a JSON summary", debug_info) from exc
        if not isinstance(parsed, dict):
            raise SummaryFormatError("Model answer was not a JSON object", debug_info)

        try:
            self._template.validate(parsed)
        except ValueError as exc:
            raise SummaryFormatError(str(exc), debug_info) from exc

        bullets = parsed["bullet_points"]
        if not isinstance(bullets, list) or not all(isinstance(item, str) for item in bullets):
            raise SummaryFormatError("'bullet_points' must be a list of strings", debug_info)
        bullet_points = tuple(item.strip() for item in bullets if item.strip())

        tags_value = parsed.get("tags") or []
        if isinstance(tags_value, str):
            tags_value = tags_value.split(",")
        if not isinstance(tags_value, list) or not all(isinstance(tag, str) for tag in tags_value):
            raise SummaryFormatError("'tags' must be a list of strings", debug_info)
        tags = frozenset(tag.strip() for tag in tags_value if tag.strip())

        title = parsed.get("title")
        if not isinstance(title, str) or not title.strip():
            title = document.title
        return SummaryResult(
            title=title.strip(),
            bullet_points=bullet_points,
            tags=tags,
            model=envelope.get("model"),
            response_id=envelope.get("id"),
        )

    @staticmethod
    def _parse_json(raw_text: str) -> Any:
        try:
            return json.loads(raw_text)
        except json.JSONDecodeError as exc:
            failure = exc

        # First decodable object wins; braces in surrounding prose are skipped.
        decoder = json.JSONDecoder()
        for match in re.finditer(r"\{", raw_text):
            try:
                parsed, _ = decoder.raw_decode(raw_text, match.start())
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, dict):
                return parsed
        raise failure

    def _log_debug_payload(self, debug_info: Optional[Dict[str, Any]]) -> bool:
        """Emit redacted debug information when enabled."""

        if not self._settings.debug_payloads or not debug_info:
            return False

        redacted = self._redact_sensitive(debug_info)
        try:
            serialised = json.dumps(redacted, ensure_ascii=False, sort_keys=True)
        except TypeError:
            serialised = str(redacted)

        logger.debug("LLM debug payload for %s: %s", self._template.name, serialised)
        return True

    @classmethod
    def _redact_sensitive(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: ("***" if cls._is_sensitive_key(key) else cls._redact_sensitive(val))
                for key, val in value.items()
            }
        if isinstance(value, list):
            return [cls._redact_sensitive(item) for item in value]
        if isinstance(value, tuple):
            return tuple(cls._redact_sensitive(item) for item in value)
        return value

    @staticmethod
    def _is_sensitive_key(key: str) -> bool:
        lowered = key.lower()
        sensitive_tokens = (
            "authorization",
            "api_key",
            "api-key",
            "apikey",
            "access_token",
            "auth_token",
            "secret",
            "password",
            "cookie",
        )
        return any(token in lowered for token in sensitive_tokens)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_url={self._api_url!r}, model={self._settings.model!r})"


__all__ = ["SummarizationClient", "SummaryResult"]
