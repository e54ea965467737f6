from __future__ import annotations

import pytest

from medium_summarizer.config.settings import AppSettings, MediumSettings
from medium_summarizer.errors import ConfigError, InvalidUrlError, TransportError
from medium_summarizer.ingestion.extractor import ContentDocument
from medium_summarizer.ingestion.medium import FetchedPage, MediumClient

ARTICLE_URL = "https://medium.com/odds-team/unit-tests-executable-document-7fe9e55da4e1"


def test_new_rejects_empty_cookie() -> None:
    with pytest.raises(ConfigError):
        MediumClient("")


@pytest.mark.parametrize("cookie", ["   ", "sid=abc\n123", "sid=\x00abc", "sid=\x7f", None, 12])
def test_new_rejects_invalid_cookie(cookie) -> None:
    with pytest.raises(ConfigError):
        MediumClient(cookie)


def test_new_accepts_valid_cookie(recording_transport) -> None:
    client = MediumClient("sid=abc123", transport=recording_transport())

    assert "abc123" not in repr(client)


def test_fetch_attaches_cookie_and_browser_headers(recording_transport) -> None:
    transport = recording_transport("<html><body><p>Hi</p></body></html>")
    settings = AppSettings(medium=MediumSettings(user_agent="TestBrowser/1.0"))
    client = MediumClient("sid=abc123; uid=42", settings=settings, transport=transport)

    page = client.fetch(ARTICLE_URL)

    assert page == FetchedPage(url=ARTICLE_URL, body="<html><body><p>Hi</p></body></html>")
    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["url"] == ARTICLE_URL
    assert call["method"] == "GET"
    assert call["json_body"] is None
    assert call["headers"]["Cookie"] == "sid=abc123; uid=42"
    assert call["headers"]["User-Agent"] == "TestBrowser/1.0"
    assert call["headers"]["Origin"] == "https://medium.com"


def test_fetch_reuses_cookie_for_every_call(recording_transport) -> None:
    transport = recording_transport("<p>one</p>", "<p>two</p>")
    client = MediumClient("sid=abc123", transport=transport)

    client.fetch(ARTICLE_URL)
    client.fetch("http://medium.com/another")

    assert [call["headers"]["Cookie"] for call in transport.calls] == ["sid=abc123", "sid=abc123"]


@pytest.mark.parametrize(
    "url",
    [
        "",
        "medium.com/article",
        "/relative/path",
        "ftp://medium.com/article",
        "mailto:someone@example.com",
        "https://",
        "https:///missing-host",
        "https://medium.com/with space",
        None,
    ],
)
def test_fetch_rejects_invalid_url_without_network(recording_transport, url) -> None:
    transport = recording_transport()
    client = MediumClient("sid=abc123", transport=transport)

    with pytest.raises(InvalidUrlError):
        client.fetch(url)

    assert transport.calls == []


def test_fetch_propagates_transport_error_and_stays_usable(recording_transport) -> None:
    failure = TransportError("GET failed", status_code=403, cause="Forbidden")
    transport = recording_transport(failure, "<p>ok</p>")
    client = MediumClient("sid=abc123", transport=transport)

    with pytest.raises(TransportError) as excinfo:
        client.fetch(ARTICLE_URL)
    assert excinfo.value.status_code == 403

    assert client.fetch(ARTICLE_URL).body == "<p>ok</p>"


def test_get_content_accepts_fetched_page_and_raw_html() -> None:
    markup = "<html><body><nav>Home</nav><h1>Title A</h1><p>Hello</p><p>World</p></body></html>"
    expected = ContentDocument(title="Title A", body="Hello\nWorld")

    assert MediumClient.get_content(FetchedPage(url=ARTICLE_URL, body=markup)) == expected
    assert MediumClient.get_content(markup) == expected


def test_get_embedded_content_reads_serialized_paragraphs() -> None:
    markup = (
        "<html><head><title>Unit tests | Medium</title></head><body>"
        '<script>window.__APOLLO_STATE__ = {"a": {"text": "First"}, "b": {"text": "Second"}}</script>'
        "</body></html>"
    )
    page = FetchedPage(url=ARTICLE_URL, body=markup)

    assert MediumClient.get_content(page).is_empty
    document = MediumClient.get_embedded_content(page)
    assert document == ContentDocument(title="Unit tests | Medium", body="First\nSecond")
