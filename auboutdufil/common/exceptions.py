"""Exception types for catalog scraping and request handling.

Two families live here. Assumption exceptions mean the catalog markup no
longer looks the way the extractor expects; transient exceptions mean the
upstream fetch failed in a way that says nothing about the markup. A third,
small family covers malformed caller input.
"""

from typing import Any


class ScraperAssumptionException(Exception):
    """Base class for scraper assumption violations.

    The extractor assumes a certain structure for catalog pages. When that
    assumption breaks for a whole page (as opposed to a single field), one
    of these is raised with enough context to find the offending markup.
    """

    def __init__(
        self,
        message: str,
        request_url: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the assumption violation.
            request_url: The URL of the page that triggered this error.
            context: Optional dict of additional context (selector, counts, etc).
        """
        self.message = message
        self.request_url = request_url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        parts.append(f"URL: {self.request_url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class HTMLStructuralAssumptionException(ScraperAssumptionException):
    """Raised when the catalog markup doesn't match the expected shape.

    Attributes:
        selector: The XPath or CSS selector that was used.
        selector_type: Type of selector ("xpath" or "css").
        description: What was being selected.
        expected_min: Minimum number of matches expected.
        expected_max: Maximum number of matches expected (None = unlimited).
        actual_count: Number of matches found.
    """

    def __init__(
        self,
        selector: str,
        selector_type: str,
        description: str,
        expected_min: int,
        expected_max: int | None,
        actual_count: int,
        request_url: str,
    ) -> None:
        self.selector = selector
        self.selector_type = selector_type
        self.description = description
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.actual_count = actual_count

        if expected_max is None:
            expected_str = f"at least {expected_min}"
        elif expected_min == expected_max:
            expected_str = f"exactly {expected_min}"
        else:
            expected_str = f"between {expected_min} and {expected_max}"

        message = (
            f"HTML structure mismatch: Expected {expected_str} "
            f"elements for '{description}', but found {actual_count}"
        )

        context = {
            "selector": selector,
            "selector_type": selector_type,
            "expected_min": expected_min,
            "expected_max": expected_max
            if expected_max is not None
            else "unlimited",
            "actual_count": actual_count,
        }

        super().__init__(message, request_url, context)


# =============================================================================
# Transport failures
# =============================================================================


class TransientException(Exception):
    """Base class for upstream failures that are not about the markup.

    The catalog service never retries; these only exist so the pipeline can
    tell transport problems apart from structural ones when it reports them.
    """

    pass


class HTMLResponseAssumptionException(TransientException):
    """Raised when the upstream answers with an unexpected status code.

    Attributes:
        status_code: The actual HTTP status code received.
        expected_codes: List of status codes that were expected.
        url: The URL that returned the unexpected status.
        message: Human-readable error message.
    """

    def __init__(
        self,
        status_code: int,
        expected_codes: list[int],
        url: str,
    ) -> None:
        self.status_code = status_code
        self.expected_codes = expected_codes
        self.url = url

        expected_str = ", ".join(str(code) for code in expected_codes)
        self.message = (
            f"HTTP {status_code} from {url} (expected one of: {expected_str})"
        )
        super().__init__(self.message)


class RequestTimeoutException(TransientException):
    """Raised when fetching a catalog page exceeds the configured timeout.

    Attributes:
        url: The URL that timed out.
        timeout_seconds: The timeout duration in seconds.
        message: Human-readable error message.
    """

    def __init__(self, url: str, timeout_seconds: float) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.message = f"Request to {url} timed out after {timeout_seconds}s"
        super().__init__(self.message)


class FetchFailedException(Exception):
    """Raised by the pipeline when a catalog page could not be obtained.

    Wraps whatever went wrong underneath (transport error, bad status,
    unparseable body or a page-level structural mismatch) so callers only
    need to distinguish "failed" from "zero tracks".

    Attributes:
        url: The catalog page URL.
        reason: Short description of the failure.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch catalog page {url}: {reason}")


# =============================================================================
# Caller input
# =============================================================================


class FilterNormalizationException(Exception):
    """Raised when request path or query input can't be turned into filters.

    This is a client error: it is reported as a bad request and never
    retried.

    Attributes:
        message: Human-readable description of the problem.
        segments: The path segments that were being normalized.
    """

    def __init__(self, message: str, segments: list[str] | None = None) -> None:
        self.message = message
        self.segments = list(segments or [])
        super().__init__(message)
