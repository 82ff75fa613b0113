"""Core data types for the catalog service.

This module defines:

- SortMode: the four catalog orderings and their route/upstream names
- FilterSet: the canonical, request-scoped filter criteria
- Track: one extracted catalog entry, with "not found" kept as None
- TrackPayload: the wire form of a Track, with every field zero-valued
  instead of missing
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

# Zero value for published_date on the wire.
ZERO_DATETIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class SortMode(Enum):
    """Catalog orderings supported by the upstream site."""

    NEWEST = "newest"
    TOP_RATED = "top_rated"
    MOST_DOWNLOADED = "most_downloaded"
    MOST_PLAYED = "most_played"

    @property
    def route_prefix(self) -> str:
        """First path segment that selects this ordering."""
        return _ROUTE_PREFIXES[self]

    @property
    def upstream_key(self) -> str:
        """Value of the ``sort`` query parameter the catalog expects."""
        return _UPSTREAM_KEYS[self]

    @classmethod
    def from_route(cls, prefix: str) -> SortMode | None:
        """Return the mode for a route prefix, or None if it isn't one."""
        for mode, route in _ROUTE_PREFIXES.items():
            if route == prefix:
                return mode
        return None


_ROUTE_PREFIXES: dict[SortMode, str] = {
    SortMode.NEWEST: "latest",
    SortMode.TOP_RATED: "best",
    SortMode.MOST_DOWNLOADED: "downloads",
    SortMode.MOST_PLAYED: "plays",
}

_UPSTREAM_KEYS: dict[SortMode, str] = {
    SortMode.NEWEST: "posted",
    SortMode.TOP_RATED: "note",
    SortMode.MOST_DOWNLOADED: "countweb",
    SortMode.MOST_PLAYED: "countfla",
}


@dataclass(frozen=True)
class FilterSet:
    """Canonical filter criteria for one catalog request.

    Values are already in the upstream vocabulary (see normalizer.py).
    Two FilterSets with equal fields are the same cache entity, however the
    caller spelled them.

    Attributes:
        sort: Catalog ordering.
        genre: Genre tag, sent upstream as ``tag``.
        mood: Mood filter.
        license: License code, e.g. ``cc-by``.
        page: 1-based page number.
    """

    sort: SortMode = SortMode.NEWEST
    genre: str | None = None
    mood: str | None = None
    license: str | None = None
    page: int = 1

    def cache_key(self) -> str:
        """Derive the cache key for this filter set.

        Fields are emitted in a fixed order as URL-encoded ``name=value``
        pairs, so separators inside values can't make two different filter
        sets collide. None and "" both mean "no filter" and share a key.
        """
        return urlencode(
            [
                ("sort", self.sort.value),
                ("genre", self.genre or ""),
                ("mood", self.mood or ""),
                ("license", self.license or ""),
                ("page", str(self.page)),
            ]
        )

    def query_params(self) -> list[tuple[str, str]]:
        """Upstream query parameters, in the order the catalog uses them."""
        params = [("sort", self.sort.upstream_key)]
        if self.license:
            params.append(("license", self.license))
        if self.mood:
            params.append(("mood", self.mood))
        if self.genre:
            params.append(("tag", self.genre))
        params.append(("page", str(self.page)))
        return params


class Track(BaseModel):
    """One track extracted from a catalog page.

    Every scalar field is None when its extractor could not find or parse
    it, so internal code can tell "not found" from a genuine zero. The
    collapse to zero values happens in to_payload().
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    artist: str | None = None
    track_url: str | None = None
    genres: tuple[str, ...] = ()
    cover_art_url: str | None = None
    download_url: str | None = None
    license: str | None = None
    downloads: int | None = Field(None, ge=0)
    play_count: int | None = Field(None, ge=0)
    rating: float | None = Field(None, ge=0, le=5)
    published_date: datetime | None = None

    def to_payload(self) -> TrackPayload:
        return TrackPayload(
            title=self.title or "",
            artist=self.artist or "",
            track_url=self.track_url or "",
            genres=list(self.genres),
            cover_art_url=self.cover_art_url or "",
            download_url=self.download_url or "",
            license=self.license or "",
            downloads=self.downloads or 0,
            play_count=self.play_count or 0,
            rating=self.rating or 0.0,
            published_date=self.published_date or ZERO_DATETIME,
        )


class TrackPayload(BaseModel):
    """Wire representation of a Track. No key is ever omitted."""

    title: str = Field("", description="Track title")
    artist: str = Field("", description="Artist name")
    track_url: str = Field("", description="Artist/track page URL")
    genres: list[str] = Field(default_factory=list, description="Genre tags")
    cover_art_url: str = Field("", description="Cover image URL")
    download_url: str = Field("", description="MP3 download URL")
    license: str = Field("", description="License code, e.g. cc-by")
    downloads: int = Field(0, description="Download count")
    play_count: int = Field(0, description="Play count")
    rating: float = Field(0.0, description="Average rating")
    published_date: datetime = Field(
        ZERO_DATETIME, description="Publication date (UTC)"
    )
