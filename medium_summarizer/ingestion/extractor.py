"""Article extraction utilities."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from lxml import etree, html

from medium_summarizer.errors import ExtractionError

logger = logging.getLogger(__name__)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
PARAGRAPH_TAGS = frozenset({"p", "blockquote", "pre", "li", "figcaption"})
NOISE_TAGS = frozenset(
    {
        "script",
        "style",
        "noscript",
        "template",
        "nav",
        "header",
        "footer",
        "aside",
        "form",
        "button",
        "svg",
        "iframe",
        "select",
    }
)
NOISE_ROLES = frozenset({"navigation", "banner", "contentinfo", "complementary", "search"})
# Elements whose boundaries separate words inside a collected fragment.
BREAKING_TAGS = HEADING_TAGS | PARAGRAPH_TAGS | frozenset(
    {"br", "div", "section", "article", "ul", "ol", "table", "tr", "td", "th", "dd", "dt", "figure"}
)

XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")

# Paragraph text embedded in the page's serialized client state.
EMBEDDED_TEXT_RE = re.compile(r'"text":\s*"((?:[^"\\]|\\.)*)"')


@dataclass(frozen=True)
class ContentDocument:
    """Readable article content extracted from a page."""

    title: str
    body: str

    @property
    def is_empty(self) -> bool:
        return not self.body


def _normalize(text: str) -> str:
    return " ".join(text.split())


def _as_text(markup: Union[str, bytes]) -> str:
    if isinstance(markup, bytes):
        return markup.decode("utf-8", errors="replace")
    if not isinstance(markup, str):
        raise ExtractionError(f"Expected page markup as text, got {type(markup).__name__}")
    return markup


def _is_noise(element: html.HtmlElement) -> bool:
    if element.tag in NOISE_TAGS:
        return True
    role = (element.get("role") or "").strip().lower()
    if role in NOISE_ROLES:
        return True
    if (element.get("aria-hidden") or "").strip().lower() == "true":
        return True
    return element.get("hidden") is not None


def _gather_text(element: html.HtmlElement, parts: List[str]) -> None:
    if element.text:
        parts.append(element.text)
    for child in element:
        # Comments and processing instructions only contribute their tail.
        if isinstance(child.tag, str) and not _is_noise(child):
            breaking = child.tag in BREAKING_TAGS
            if breaking:
                parts.append(" ")
            _gather_text(child, parts)
            if breaking:
                parts.append(" ")
        if child.tail:
            parts.append(child.tail)


def _element_text(element: html.HtmlElement) -> str:
    parts: List[str] = []
    _gather_text(element, parts)
    return _normalize("".join(parts))


class ContentExtractor:
    """Extract the title and paragraph text of an article from raw HTML."""

    def extract(self, markup: Union[str, bytes]) -> ContentDocument:
        """Parse ``markup`` and return its title and body.

        A page without recognizable paragraphs yields an empty ``body``;
        only unparseable input raises :class:`ExtractionError`.
        """

        root = self._parse(markup)

        title: Optional[str] = None
        fragments: List[str] = []

        # Iterative walk in document order; headings and paragraphs are not descended.
        stack = [root]
        while stack:
            element = stack.pop()
            if element.tag in HEADING_TAGS:
                if title is None:
                    title = _element_text(element) or None
                continue
            if element.tag in PARAGRAPH_TAGS:
                text = _element_text(element)
                if text:
                    fragments.append(text)
                continue
            stack.extend(
                child
                for child in reversed(element)
                if isinstance(child.tag, str) and not _is_noise(child)
            )

        if title is None:
            title_element = root.find("head/title")
            title = _element_text(title_element) if title_element is not None else ""

        body = "\n".join(fragments).strip()
        logger.debug(
            "Extracted %d paragraphs (%d chars)",
            len(fragments),
            len(body),
            extra={"event": "extract.done", "paragraphs": len(fragments)},
        )
        return ContentDocument(title=title, body=body)

    def extract_embedded_text(self, markup: Union[str, bytes]) -> str:
        """Return paragraph text serialized as ``"text": "..."`` fields in page scripts."""

        fragments = []
        for match in EMBEDDED_TEXT_RE.finditer(_as_text(markup)):
            raw = match.group(1)
            try:
                decoded = json.loads(f'"{raw}"')
            except json.JSONDecodeError:
                decoded = raw
            text = _normalize(decoded)
            if text:
                fragments.append(text)
        return "\n".join(fragments)

    @staticmethod
    def _parse(markup: Union[str, bytes]) -> html.HtmlElement:
        text = _as_text(markup)
        # lxml refuses str input carrying an XML encoding declaration.
        text = XML_DECLARATION_RE.sub("", text, count=1)
        if not text.strip():
            raise ExtractionError("Cannot extract content from an empty document")

        try:
            return html.document_fromstring(text)
        except (etree.LxmlError, ValueError) as exc:
            raise ExtractionError(f"Failed to parse markup: {exc}") from exc


__all__ = ["ContentDocument", "ContentExtractor"]
