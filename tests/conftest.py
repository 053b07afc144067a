"""Shared fixtures: the listing fixture and stand-ins for requests sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import requests

FIXTURES = Path(__file__).parent / "fixtures"


class DummyResponse:
    def __init__(
        self,
        body: bytes = b"",
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        fail_after: Optional[int] = None,
        chunk: int = 4,
    ) -> None:
        self.status_code = status_code
        self.headers: Dict[str, str] = dict(headers or {})
        self._body = body
        self._fail_after = fail_after
        self._chunk = chunk
        self.closed = False

    @property
    def content(self) -> bytes:
        return self._body

    @property
    def text(self) -> str:
        return self._body.decode("utf-8")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size: int = 1):
        limit = len(self._body) if self._fail_after is None else self._fail_after
        for i in range(0, limit, self._chunk):
            yield self._body[i:min(i + self._chunk, limit)]
        if self._fail_after is not None:
            raise requests.exceptions.ChunkedEncodingError("simulated failure")

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "DummyResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class DummySession:
    """Answers GETs from a url -> response (or exception) table."""

    def __init__(self, routes: Dict[str, Union[DummyResponse, Exception]]) -> None:
        self.routes = routes
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append((url, kwargs))
        answer = self.routes.get(url)
        if answer is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def listing_html() -> str:
    return (FIXTURES / "dl.html").read_text(encoding="utf-8")


@pytest.fixture
def isolated_config(tmp_path, monkeypatch) -> Path:
    path = tmp_path / "cfg" / "config.json"
    monkeypatch.setenv("GODIST_CONFIG", str(path))
    return path
