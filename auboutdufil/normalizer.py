"""Request normalization.

Turns the raw path segments and query parameters of an API request into a
FilterSet. The first path segment picks the sort mode; the rest are
alternating key/value filter pairs. The same filters may also come in as
query parameters, in which case the path wins.

Example::

    >>> normalize(["latest", "genre", "acoustic"], {"page": "2"})
    FilterSet(sort=<SortMode.NEWEST: 'newest'>, genre='acoustic', mood=None,
              license=None, page=2)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from auboutdufil.common.exceptions import FilterNormalizationException
from auboutdufil.data_types import FilterSet, SortMode
from auboutdufil.vocabulary import canonical_license, canonical_mood

logger = logging.getLogger(__name__)

FILTER_KEYS = ("license", "mood", "genre")


def split_path(path: str) -> list[str]:
    """Split a request path into segments.

    Only the leading and trailing slash are dropped; an empty segment in
    the middle is kept so that filter pairs stay aligned.

    Example::

        >>> split_path("/license//mood/calm/")
        ['license', '', 'mood', 'calm']
    """
    path = path.strip("/")
    if not path:
        return []
    return path.split("/")


def parse_page(value: str | None) -> int:
    """Parse a 1-based page number, falling back to 1."""
    if value is None:
        return 1
    try:
        page = int(value)
    except ValueError:
        return 1
    return page if page >= 1 else 1


def _path_filters(segments: list[str]) -> dict[str, str]:
    if len(segments) % 2:
        raise FilterNormalizationException(
            f"Unsupported operation: filters must come in key/value pairs, "
            f"got {len(segments)} segments",
            segments,
        )

    filters: dict[str, str] = {}
    for key, value in zip(segments[::2], segments[1::2]):
        if not key:
            raise FilterNormalizationException(
                "Unsupported operation: empty filter key", segments
            )
        if key not in FILTER_KEYS:
            raise FilterNormalizationException(
                f"Unsupported operation: unknown filter {key!r}, "
                f"expected one of {', '.join(FILTER_KEYS)}",
                segments,
            )
        filters[key] = value
    return filters


def normalize(
    path_segments: Sequence[str], query_params: Mapping[str, str]
) -> FilterSet:
    """Build the canonical FilterSet for one request.

    Args:
        path_segments: Request path split on ``/``, starting with the sort
            route (``latest``, ``best``, ``downloads`` or ``plays``).
        query_params: Query string parameters.

    Returns:
        The normalized FilterSet.

    Raises:
        FilterNormalizationException: If the sort route is unknown, the
            filter segments are not paired, or a filter key is empty or
            unknown.
    """
    segments = list(path_segments)
    if not segments or not segments[0]:
        raise FilterNormalizationException("Missing sort route", segments)

    sort = SortMode.from_route(segments[0])
    if sort is None:
        raise FilterNormalizationException(
            f"Unknown sort route {segments[0]!r}", segments
        )

    from_path = _path_filters(segments[1:])

    values: dict[str, str | None] = {}
    for key in FILTER_KEYS:
        raw = from_path.get(key) or query_params.get(key) or ""
        values[key] = raw.strip() or None

    mood = values["mood"]
    license = values["license"]
    filters = FilterSet(
        sort=sort,
        genre=values["genre"],
        mood=canonical_mood(mood) if mood else None,
        license=canonical_license(license) if license else None,
        page=parse_page(query_params.get("page")),
    )
    logger.debug(f"Normalized {'/'.join(segments)} to {filters}")
    return filters
