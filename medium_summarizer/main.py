"""Command-line entrypoint that summarises a single Medium article."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence, TextIO, Tuple

from medium_summarizer.config.settings import load_credentials, load_settings
from medium_summarizer.errors import SummarizerError
from medium_summarizer.http.transport import HttpTransport
from medium_summarizer.ingestion.extractor import ContentDocument
from medium_summarizer.ingestion.medium import MediumClient
from medium_summarizer.llm.client import SummarizationClient, SummaryResult
from medium_summarizer.telemetry import configure_logging

logger = logging.getLogger(__name__)


class EmptyArticleError(SummarizerError):
    """Raised when neither extraction strategy finds article text."""


def summarize_url(
    url: str,
    medium_client: MediumClient,
    summarizer: SummarizationClient,
    *,
    embedded: bool = False,
) -> Tuple[ContentDocument, SummaryResult]:
    """Fetch ``url``, extract its text and summarise it."""

    page = medium_client.fetch(url)
    document = (
        MediumClient.get_embedded_content(page) if embedded else MediumClient.get_content(page)
    )
    if document.is_empty and not embedded:
        logger.info(
            "No paragraphs in rendered markup, falling back to embedded page state",
            extra={"event": "extract.fallback", "url": url},
        )
        document = MediumClient.get_embedded_content(page)
    if document.is_empty:
        raise EmptyArticleError(f"No article text found at {url}")

    logger.info(
        "Extracted %r (%d chars)",
        document.title,
        len(document.body),
        extra={"event": "extract.result", "size": len(document.body)},
    )
    return document, summarizer.fetch(document)


def render_summary(result: SummaryResult) -> str:
    lines = [f"# {result.title}" if result.title else "# Summary", ""]
    lines.extend(f"- {point}" for point in result.bullet_points)
    if result.tags:
        lines.extend(["", "Tags: " + ", ".join(sorted(result.tags))])
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="medium-summarizer",
        description="Summarise a Medium article with a hosted language model.",
    )
    parser.add_argument("url", help="Absolute URL of the article")
    parser.add_argument("--settings", type=Path, help="Path to a YAML settings file")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument(
        "--embedded",
        action="store_true",
        help="Read article text from the embedded page state instead of the markup",
    )
    parser.add_argument("--log-level", help="Override MEDIUM_SUMMARIZER_LOG_LEVEL")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    out = stdout or sys.stdout
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(args.settings)
        credentials = load_credentials(environ)
        timeout = settings.http.timeout_seconds
        # Each client owns its session so cookies set by Medium never reach the API.
        with HttpTransport(timeout=timeout) as page_transport, HttpTransport(
            timeout=timeout
        ) as api_transport:
            medium_client = MediumClient(
                credentials.medium_cookie, settings=settings, transport=page_transport
            )
            summarizer = SummarizationClient(
                credentials.api_key,
                credentials.api_url,
                settings=settings.llm,
                transport=api_transport,
            )
            _, result = summarize_url(args.url, medium_client, summarizer, embedded=args.embedded)
    except SummarizerError as exc:
        logger.error("%s: %s", type(exc).__name__, exc, extra={"event": "run.failed"})
        return 1

    if args.json:
        out.write(json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n")
    else:
        out.write(render_summary(result) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
