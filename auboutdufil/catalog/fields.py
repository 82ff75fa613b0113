"""Field extractors for one track container.

Each extractor takes the sub-tree its field lives in and returns the
decoded value, or None when the target node is missing or its text can't
be parsed. A miss is logged and never raised: one broken field must not
cost the rest of the track.

The parse_* helpers work on plain strings so the decoding rules can be
tested without any markup.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from urllib.parse import unquote

from auboutdufil.catalog import markup
from auboutdufil.common.checked_html import CheckedHtmlElement
from auboutdufil.vocabulary import canonical_license

logger = logging.getLogger(__name__)


def _missing(field: str, detail: str, root: CheckedHtmlElement | None) -> None:
    logger.warning(
        f"Malformed html when looking for {field}: {detail}",
        extra={
            "field": field,
            "request_url": root.request_url if root is not None else "",
        },
    )


# =============================================================================
# Value parsers
# =============================================================================


def parse_date(text: str) -> datetime | None:
    """Parse a ``dd/mm/YYYY`` publication date as UTC midnight."""
    text = text.strip()
    if not text:
        return None
    try:
        parsed = datetime.strptime(text, markup.DATE_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def parse_rating(text: str) -> float | None:
    """Parse a rating such as ``"4,5 / 5"`` into ``4.5``.

    Ratings are out of RATING_MAX; anything outside ``[0, RATING_MAX]`` is
    rejected.
    """
    head = text.split(markup.RATING_SEPARATOR)[0].strip().replace(",", ".")
    if not head:
        return None
    try:
        value = float(head)
    except ValueError:
        return None
    if not math.isfinite(value) or not 0 <= value <= markup.RATING_MAX:
        return None
    return value


def parse_count(text: str) -> int | None:
    """Parse a count with space thousands separators, e.g. ``"12 345"``."""
    for separator in markup.THOUSANDS_SEPARATORS:
        text = text.replace(separator, "")
    text = text.strip()
    # isdecimal() rejects signs and the underscores int() would accept.
    if not text.isdecimal():
        return None
    return int(text)


def license_from_href(href: str) -> str | None:
    """Return the canonical license code carried by a license link target."""
    _, marker, tail = href.partition(markup.LICENSE_MARKER)
    if not marker:
        return None
    code = unquote(re.split(r"[&#]", tail, maxsplit=1)[0]).strip()
    if not code:
        return None
    return canonical_license(code)


# =============================================================================
# Info region
# =============================================================================


def extract_title(info: CheckedHtmlElement | None) -> str | None:
    if info is None:
        _missing("title", "no info region", info)
        return None
    title_tag = info.first_xpath(markup.TITLE_XPATH)
    if title_tag is None:
        _missing("title", "no title tag", info)
        return None
    return title_tag.text() or None


def extract_artist(
    info: CheckedHtmlElement | None,
) -> tuple[str | None, str | None]:
    """Return the artist name and the URL of the artist's page."""
    if info is None:
        _missing("artist", "no info region", info)
        return None, None
    link = info.first_xpath(markup.ARTIST_LINK_XPATH)
    if link is None:
        _missing("artist", "no artist link", info)
        return None, None
    return link.text() or None, (link.attr("href") or "").strip() or None


def extract_genres(info: CheckedHtmlElement | None) -> tuple[str, ...]:
    if info is None:
        _missing("genres", "no info region", info)
        return ()
    tags = info.checked_xpath(markup.GENRE_TAG_XPATH, "genre tags", min_count=0)
    genres = tuple(text for text in (tag.text() for tag in tags) if text)
    if not genres:
        logger.debug("Track has no genre tags")
    return genres


# =============================================================================
# Cover region
# =============================================================================


def extract_cover_art_url(cover: CheckedHtmlElement | None) -> str | None:
    if cover is None:
        _missing("cover URL", "no cover region", cover)
        return None
    image = cover.first_xpath(markup.COVER_IMAGE_XPATH)
    if image is None:
        _missing("cover URL", "no image", cover)
        return None
    return (image.attr("src") or "").strip() or None


# =============================================================================
# Sibling structures (looked up from the container's parent)
# =============================================================================


def extract_download_url(parent: CheckedHtmlElement | None) -> str | None:
    if parent is None:
        _missing("download URL", "container has no parent", parent)
        return None
    link = parent.first_xpath(markup.DOWNLOAD_LINK_XPATH)
    if link is None:
        _missing("download URL", "no player link", parent)
        return None
    return (link.attr("href") or "").strip() or None


def _legend_shape(span: CheckedHtmlElement) -> str | None:
    """Name the kind of value a legend span holds, judging by its content.

    Returns a slot name, ``"count"`` for a bare number, or None.
    """
    link = span.first_xpath(markup.LICENSE_LINK_XPATH)
    if link is not None and markup.LICENSE_MARKER in (link.attr("href") or ""):
        return "license"
    text = span.text()
    if re.fullmatch(markup.DATE_SHAPE, text):
        return "date"
    if markup.RATING_SEPARATOR in text:
        return "rating"
    if parse_count(text) is not None:
        return "count"
    return None


def legend_slots(
    parent: CheckedHtmlElement | None,
) -> dict[str, CheckedHtmlElement]:
    """Map the legend spans next to a container onto their slot names.

    Spans are recognised by content: the license link, the date pattern and
    the rating separator. The bare counts are downloads then plays, and are
    only assigned when both are present. A span that is missing or can't be
    recognised only costs its own slot; absent slots are left out of the
    returned dict.
    """
    if parent is None:
        _missing("additional infos", "container has no parent", parent)
        return {}
    legend = parent.first_xpath(markup.LEGEND_XPATH)
    if legend is None:
        _missing("additional infos", "no legend block", parent)
        return {}
    spans = legend.checked_xpath(
        markup.LEGEND_SPAN_XPATH, "legend spans", min_count=0
    )

    slots: dict[str, CheckedHtmlElement] = {}
    counts: list[CheckedHtmlElement] = []
    for index, span in enumerate(spans):
        shape = _legend_shape(span)
        if shape == "count":
            counts.append(span)
        elif shape is None or shape in slots:
            _missing(
                "additional infos",
                f"unrecognised legend span #{index}: {span.text()!r}",
                parent,
            )
        else:
            slots[shape] = span

    if len(counts) == len(markup.COUNT_SLOTS):
        slots.update(zip(markup.COUNT_SLOTS, counts))
    elif counts:
        _missing(
            "downloads and plays",
            f"expected {len(markup.COUNT_SLOTS)} count spans, found {len(counts)}",
            parent,
        )

    for slot in markup.LEGEND_SLOTS:
        if slot not in slots:
            _missing(slot, "no matching legend span", parent)
    return slots


def extract_published_date(span: CheckedHtmlElement | None) -> datetime | None:
    if span is None:
        return None
    value = parse_date(span.text())
    if value is None:
        _missing("date", f"unparseable {span.text()!r}", span)
    return value


def extract_rating(span: CheckedHtmlElement | None) -> float | None:
    if span is None:
        return None
    value = parse_rating(span.text())
    if value is None:
        _missing("rating", f"unparseable {span.text()!r}", span)
    return value


def extract_count(span: CheckedHtmlElement | None, field: str) -> int | None:
    if span is None:
        return None
    value = parse_count(span.text())
    if value is None:
        _missing(field, f"unparseable {span.text()!r}", span)
    return value


def extract_license(span: CheckedHtmlElement | None) -> str | None:
    if span is None:
        return None
    link = span.first_xpath(markup.LICENSE_LINK_XPATH)
    if link is None:
        _missing("license", "no license link", span)
        return None
    code = license_from_href(link.attr("href") or "")
    if code is None:
        _missing("license", f"no {markup.LICENSE_MARKER!r} in link", span)
    return code
