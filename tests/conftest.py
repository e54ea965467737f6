from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from medium_summarizer.config.settings import ENV_SETTINGS_PATH


class RecordingTransport:
    """Transport stub that records calls and replays canned bodies or errors."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def request(self, url, headers, *, method="GET", json_body=None):  # type: ignore[override]
        self.calls.append(
            {"url": url, "headers": dict(headers), "method": method, "json_body": json_body}
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def recording_transport():
    def _factory(*responses: Any) -> RecordingTransport:
        return RecordingTransport(list(responses))

    return _factory


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch) -> None:
    monkeypatch.delenv(ENV_SETTINGS_PATH, raising=False)
