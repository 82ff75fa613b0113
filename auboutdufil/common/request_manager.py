"""Request manager for fetching catalog pages.

SyncRequestManager owns the httpx client and turns one URL into one parsed
lxml document. It never retries: a failure is reported to the caller
immediately through the exception types in ``common.exceptions``.
"""

from __future__ import annotations

import logging
import ssl
from typing import Any

import httpx
from lxml import etree, html
from lxml.html import HtmlElement

from auboutdufil.common.exceptions import (
    HTMLResponseAssumptionException,
    RequestTimeoutException,
    TransientException,
)

logger = logging.getLogger(__name__)


class UnparseableDocumentException(TransientException):
    """Raised when the response body can't be parsed as HTML."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.message = f"Could not parse document from {url}: {detail}"
        super().__init__(self.message)


class SyncRequestManager:
    """Manages blocking HTTP fetches of catalog pages.

    The client is created with a bounded timeout so a stalled upstream can
    never hold a request handler forever.

    Example::

        with SyncRequestManager(timeout=15.0) as manager:
            document = manager.fetch_document(url)
    """

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str | None = None,
        ssl_context: ssl.SSLContext | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the request manager.

        Args:
            timeout: Request timeout in seconds.
            user_agent: Optional User-Agent header value.
            ssl_context: Optional SSL context for HTTPS connections.
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        self.timeout = timeout

        headers = {"User-Agent": user_agent} if user_agent else None
        client_kwargs: dict[str, Any] = {
            "timeout": timeout,
            "headers": headers,
            "follow_redirects": True,
        }
        if ssl_context:
            client_kwargs["verify"] = ssl_context
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.Client(**client_kwargs)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> SyncRequestManager:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def fetch(self, url: str) -> httpx.Response:
        """GET *url* and return the response.

        Raises:
            RequestTimeoutException: If the request exceeds the timeout.
            HTMLResponseAssumptionException: If the status code is 4xx/5xx.
            httpx.HTTPError: For any other transport failure.
        """
        try:
            response = self._client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutException(
                url=url, timeout_seconds=self.timeout
            ) from e

        if response.status_code >= 400:
            raise HTMLResponseAssumptionException(
                status_code=response.status_code,
                expected_codes=[200],
                url=url,
            )

        logger.debug(
            f"Fetched {url} ({response.status_code}, {len(response.content)} bytes)"
        )
        return response

    def fetch_document(self, url: str) -> HtmlElement:
        """Fetch *url* and parse the body into an lxml document.

        Raises:
            UnparseableDocumentException: If the body is empty or not HTML.
            Plus everything fetch() raises.
        """
        response = self.fetch(url)
        if not response.content.strip():
            raise UnparseableDocumentException(url, "empty body")

        try:
            return html.document_fromstring(response.content)
        except (etree.ParserError, ValueError) as e:
            raise UnparseableDocumentException(url, str(e)) from e
