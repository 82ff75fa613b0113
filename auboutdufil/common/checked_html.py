"""Checked HTML element wrapper for catalog markup queries.

CheckedHtmlElement wraps an lxml HtmlElement and validates selector results
against expected counts, so that a change in the catalog markup shows up as
an HTMLStructuralAssumptionException with the selector and counts attached
instead of an IndexError three calls later.
"""

from __future__ import annotations

from lxml.html import HtmlElement

from auboutdufil.common.exceptions import (
    HTMLStructuralAssumptionException,
)


def class_token_xpath(token: str) -> str:
    """Return an XPath predicate body matching one whole class token.

    ``contains(@class, 'x')`` would also match ``x-large``; padding the
    normalized class list with spaces makes the match token-exact.

    Example::

        >>> class_token_xpath("legenddata")
        "contains(concat(' ', normalize-space(@class), ' '), ' legenddata ')"
    """
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {token} ')"


class CheckedHtmlElement:
    """Wrapper around HtmlElement with validated selectors.

    checked_xpath() raises HTMLStructuralAssumptionException when the number
    of matching elements falls outside [min_count, max_count]. first_xpath()
    is the lenient counterpart used by field extractors, which must never
    raise.
    """

    def __init__(self, element: HtmlElement, request_url: str = "") -> None:
        """Initialize the checked element wrapper.

        Args:
            element: The lxml HtmlElement to wrap.
            request_url: Optional URL for error context.
        """
        self._element = element
        self._request_url = request_url

    @property
    def element(self) -> HtmlElement:
        return self._element

    @property
    def request_url(self) -> str:
        return self._request_url

    def checked_xpath(
        self,
        xpath: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[CheckedHtmlElement]:
        """Execute XPath query with count validation.

        Non-element results (text nodes, attribute values) are ignored.

        Args:
            xpath: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            Matching elements, each wrapped for nested checked queries.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.

        Example::

            tree = CheckedHtmlElement(lxml.html.fromstring(html))
            legend = tree.checked_xpath(
                ".//div[@class='legenddata']", "legend", max_count=1
            )
        """
        wrapped = [
            CheckedHtmlElement(result, self._request_url)
            for result in self._element.xpath(xpath)
            if isinstance(result, HtmlElement)
        ]

        actual_count = len(wrapped)
        if actual_count < min_count or (
            max_count is not None and actual_count > max_count
        ):
            raise HTMLStructuralAssumptionException(
                selector=xpath,
                selector_type="xpath",
                description=description,
                expected_min=min_count,
                expected_max=max_count,
                actual_count=actual_count,
                request_url=self._request_url,
            )
        return wrapped

    def first_xpath(self, xpath: str) -> CheckedHtmlElement | None:
        """Return the first element matched by *xpath*, or None."""
        for result in self._element.xpath(xpath):
            if isinstance(result, HtmlElement):
                return CheckedHtmlElement(result, self._request_url)
        return None

    def parent(self) -> CheckedHtmlElement | None:
        parent = self._element.getparent()
        if parent is None:
            return None
        return CheckedHtmlElement(parent, self._request_url)

    def text(self) -> str:
        """Visible text of the element and its descendants, stripped."""
        return self._element.text_content().strip()

    def attr(self, name: str) -> str | None:
        return self._element.get(name)

    def __getattr__(self, name: str):
        """Delegate all other attributes to the wrapped element.

        This keeps the wrapper usable wherever an HtmlElement is expected.
        """
        return getattr(self._element, name)
