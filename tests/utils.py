"""Test helpers shared across test modules."""

from __future__ import annotations

import httpx

CATALOG_BASE_URL = "http://catalog.test/index.php?"
CATALOG_URL = CATALOG_BASE_URL + "sort=posted&page=1"


class RecordingHandler:
    """httpx MockTransport handler serving one fixed page.

    Every request is kept in ``requests`` so tests can count upstream
    fetches and inspect the query that was sent. ``body`` and
    ``status_code`` may be changed between requests.
    """

    def __init__(self, body: str = "", status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            text=self.body,
            headers={"Content-Type": "text/html; charset=utf-8"},
        )

    @property
    def hits(self) -> int:
        return len(self.requests)


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
