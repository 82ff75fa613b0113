"""Shared fixtures for the catalog tests."""

import asyncio
import socket
import threading
import time
from collections.abc import Callable, Generator
from contextlib import closing

import httpx
import pytest
from aiohttp import web
from lxml import html

from auboutdufil.common.checked_html import CheckedHtmlElement
from auboutdufil.common.config import ServiceConfig
from auboutdufil.common.request_manager import SyncRequestManager
from tests.mock_server import create_app, generate_catalog_html
from tests.utils import CATALOG_BASE_URL, CATALOG_URL, FakeClock, RecordingHandler


@pytest.fixture
def catalog_html() -> str:
    """HTML of a catalog page listing every mock track."""
    return generate_catalog_html()


@pytest.fixture
def catalog_document(catalog_html: str) -> CheckedHtmlElement:
    return CheckedHtmlElement(html.document_fromstring(catalog_html), CATALOG_URL)


@pytest.fixture
def catalog_handler(catalog_html: str) -> RecordingHandler:
    """MockTransport handler answering every request with the full catalog."""
    return RecordingHandler(catalog_html)


@pytest.fixture
def make_request_manager() -> Generator[
    Callable[[Callable[[httpx.Request], httpx.Response]], SyncRequestManager],
    None,
    None,
]:
    """Factory for request managers backed by an httpx MockTransport."""
    managers: list[SyncRequestManager] = []

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> SyncRequestManager:
        manager = SyncRequestManager(
            timeout=5.0, transport=httpx.MockTransport(handler)
        )
        managers.append(manager)
        return manager

    yield factory

    for manager in managers:
        manager.close()


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(base_url=CATALOG_BASE_URL, fetch_timeout=5.0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# aiohttp mock catalog server
# =============================================================================


def find_free_port() -> int:
    """Find a free port on localhost."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


class AioHttpTestServer:
    """Wrapper to run an aiohttp server in a background thread."""

    def __init__(self, app: web.Application, port: int) -> None:
        self.app = app
        self.port = port
        self.host = "127.0.0.1"
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()

    @property
    def url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.host}:{self.port}"

    def start(self) -> None:
        """Start the server in a background thread."""
        self._thread = threading.Thread(target=self._run_server, daemon=True)
        self._thread.start()
        if not self._started.wait(timeout=5.0):
            raise RuntimeError("mock catalog server did not start")

    def _run_server(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        async def start() -> None:
            self._runner = web.AppRunner(self.app)
            await self._runner.setup()
            site = web.TCPSite(self._runner, self.host, self.port)
            await site.start()

        self._loop.run_until_complete(start())
        self._started.set()
        self._loop.run_forever()

    def stop(self) -> None:
        """Stop the server and clean up resources."""
        if self._loop and self._runner:
            future = asyncio.run_coroutine_threadsafe(
                self._runner.cleanup(), self._loop
            )
            future.result(timeout=2.0)

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread:
            self._thread.join(timeout=2.0)


@pytest.fixture
def catalog_server() -> Generator[AioHttpTestServer, None, None]:
    """Start the mock catalog on a random local port."""
    server = AioHttpTestServer(create_app(), find_free_port())
    server.start()
    # Give the listener a moment before the first connection.
    time.sleep(0.05)
    yield server
    server.stop()


@pytest.fixture
def catalog_base_url(catalog_server: AioHttpTestServer) -> str:
    """Base URL for the mock catalog, in the form the service expects."""
    return f"{catalog_server.url}/index.php?"
