"""Tests for checked markup queries and the structural exception types."""

import pytest
from lxml.html import fromstring

from auboutdufil.common.checked_html import (
    CheckedHtmlElement,
    class_token_xpath,
)
from auboutdufil.common.exceptions import (
    HTMLStructuralAssumptionException,
    ScraperAssumptionException,
)


class TestScraperAssumptionException:
    """Tests for ScraperAssumptionException base class."""

    def test_exception_formats_message_with_url(self):
        """The formatted message shall include the request URL."""
        exc = ScraperAssumptionException(
            message="Test error",
            request_url="http://example.com/test",
        )

        formatted = str(exc)
        assert "Test error" in formatted
        assert "URL: http://example.com/test" in formatted
        assert exc.context == {}

    def test_exception_formats_message_with_context(self):
        """The formatted message shall list every context entry."""
        exc = ScraperAssumptionException(
            message="Test error",
            request_url="http://example.com/test",
            context={"selector": "//div", "count": 0},
        )

        formatted = str(exc)
        assert "Context:" in formatted
        assert "selector: //div" in formatted
        assert "count: 0" in formatted


class TestHTMLStructuralAssumptionException:
    """Tests for HTMLStructuralAssumptionException."""

    def test_formats_at_least(self):
        exc = HTMLStructuralAssumptionException(
            selector="//div",
            selector_type="xpath",
            description="track containers",
            expected_min=1,
            expected_max=None,
            actual_count=0,
            request_url="http://example.com/test",
        )

        assert "at least 1" in str(exc)
        assert "found 0" in str(exc)
        assert exc.context["expected_max"] == "unlimited"

    def test_formats_exactly(self):
        exc = HTMLStructuralAssumptionException(
            selector="//div",
            selector_type="xpath",
            description="legend",
            expected_min=1,
            expected_max=1,
            actual_count=2,
            request_url="http://example.com/test",
        )

        assert "exactly 1" in str(exc)

    def test_formats_between(self):
        exc = HTMLStructuralAssumptionException(
            selector="//span",
            selector_type="xpath",
            description="legend spans",
            expected_min=4,
            expected_max=5,
            actual_count=3,
            request_url="http://example.com/test",
        )

        assert "between 4 and 5" in str(exc)
        assert exc.context["actual_count"] == 3


class TestCheckedHtmlElement:
    """Tests for the CheckedHtmlElement wrapper."""

    def test_checked_xpath_returns_wrapped_elements(self):
        tree = CheckedHtmlElement(
            fromstring("<html><body><div>1</div><div>2</div></body></html>")
        )

        results = tree.checked_xpath("//div", "divs", min_count=2, max_count=2)

        assert [r.text() for r in results] == ["1", "2"]
        assert all(isinstance(r, CheckedHtmlElement) for r in results)

    def test_checked_xpath_raises_below_min(self):
        tree = CheckedHtmlElement(
            fromstring("<html><body><div>1</div></body></html>"),
            request_url="http://example.com/test",
        )

        with pytest.raises(HTMLStructuralAssumptionException) as exc_info:
            tree.checked_xpath("//div", "divs", min_count=3)

        assert exc_info.value.actual_count == 1
        assert exc_info.value.request_url == "http://example.com/test"

    def test_checked_xpath_raises_above_max(self):
        tree = CheckedHtmlElement(
            fromstring("<html><body><p>a</p><p>b</p><p>c</p></body></html>")
        )

        with pytest.raises(HTMLStructuralAssumptionException) as exc_info:
            tree.checked_xpath("//p", "paragraphs", max_count=2)

        assert exc_info.value.expected_max == 2

    def test_checked_xpath_ignores_string_results(self):
        tree = CheckedHtmlElement(
            fromstring('<html><body><a href="/x">x</a></body></html>')
        )

        assert tree.checked_xpath("//a/@href", "hrefs", min_count=0) == []

    def test_first_xpath_returns_none_when_missing(self):
        tree = CheckedHtmlElement(fromstring("<html><body></body></html>"))

        assert tree.first_xpath("//b") is None

    def test_parent_and_attr(self):
        tree = CheckedHtmlElement(
            fromstring('<div id="outer"><a href="/x">  x  </a></div>')
        )
        link = tree.first_xpath("//a")

        assert link is not None
        assert link.attr("href") == "/x"
        assert link.attr("title") is None
        assert link.text() == "x"
        assert link.parent().attr("id") == "outer"

    def test_class_token_xpath_matches_whole_tokens(self):
        tree = CheckedHtmlElement(
            fromstring(
                "<html><body>"
                '<div class="audio-wrapper pure-g">a</div>'
                '<div class="audio-wrapper-large">b</div>'
                '<div class="  pure-g   audio-wrapper ">c</div>'
                "</body></html>"
            )
        )

        matches = tree.checked_xpath(
            f"//div[{class_token_xpath('audio-wrapper')}]", "wrappers"
        )

        assert [m.text() for m in matches] == ["a", "c"]
