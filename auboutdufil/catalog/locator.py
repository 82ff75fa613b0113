"""Structural locator for per-track containers.

A container is recognised by its structural signature rather than its exact
position in the tree: it carries the item marker class token and holds
exactly one of each content region declared in markup.py. Markup can move
around it without breaking the lookup.
"""

from __future__ import annotations

import logging

from lxml.html import HtmlElement

from auboutdufil.catalog import markup
from auboutdufil.common.checked_html import CheckedHtmlElement
from auboutdufil.common.exceptions import (
    HTMLStructuralAssumptionException,
)

logger = logging.getLogger(__name__)


def region_counts(container: CheckedHtmlElement) -> dict[str, int]:
    """Count each content region under *container*.

    The container itself is not counted even if it also carries a region
    class.
    """
    return {
        region: len(container.xpath(markup.region_xpath(region)))
        for region in markup.CONTENT_REGION_CLASSES
    }


def matches_signature(container: CheckedHtmlElement) -> bool:
    counts = region_counts(container)
    return sum(counts.values()) == markup.EXPECTED_REGION_COUNT and all(
        count == 1 for count in counts.values()
    )


def locate(
    document: HtmlElement | CheckedHtmlElement, request_url: str = ""
) -> list[CheckedHtmlElement]:
    """Find every track container in *document*, in document order.

    Args:
        document: Parsed catalog page.
        request_url: URL of the page, for error context.

    Returns:
        Containers matching the structural signature. Empty when the page
        lists no tracks at all.

    Raises:
        HTMLStructuralAssumptionException: If marker nodes exist but none of
            them has the expected shape, meaning the markup has drifted.
    """
    if not isinstance(document, CheckedHtmlElement):
        document = CheckedHtmlElement(document, request_url)

    candidates = document.checked_xpath(
        markup.ITEM_XPATH, "track containers", min_count=0
    )
    if not candidates:
        logger.info(f"No track containers on {document.request_url or 'page'}")
        return []

    containers = []
    for index, candidate in enumerate(candidates):
        if matches_signature(candidate):
            containers.append(candidate)
        else:
            logger.warning(
                f"Skipping track container #{index}: unexpected region layout",
                extra={
                    "request_url": document.request_url,
                    "region_counts": region_counts(candidate),
                },
            )

    if not containers:
        raise HTMLStructuralAssumptionException(
            selector=markup.ITEM_XPATH,
            selector_type="xpath",
            description=(
                f"track containers with {markup.EXPECTED_REGION_COUNT} "
                f"content regions {markup.CONTENT_REGION_CLASSES}"
            ),
            expected_min=1,
            expected_max=None,
            actual_count=0,
            request_url=document.request_url,
        )

    return containers
