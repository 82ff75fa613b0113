"""Record assembly for one track container.

assemble() runs every field extractor against the sub-tree its field
lives in and builds a Track. is_usable() is the single inclusion rule: a
track is kept if and only if it has a title. Every other field may be
missing without dropping the track.
"""

from __future__ import annotations

from auboutdufil.catalog import fields, markup
from auboutdufil.common.checked_html import CheckedHtmlElement
from auboutdufil.data_types import Track


def _region(
    container: CheckedHtmlElement, region_class: str
) -> CheckedHtmlElement | None:
    return container.first_xpath(markup.region_xpath(region_class))


def assemble(container: CheckedHtmlElement) -> Track:
    """Build a Track from one container located by locator.locate()."""
    info = _region(container, markup.INFO_REGION_CLASS)
    cover = _region(container, markup.COVER_REGION_CLASS)
    parent = container.parent()

    artist, track_url = fields.extract_artist(info)
    legend = fields.legend_slots(parent)

    return Track(
        title=fields.extract_title(info),
        artist=artist,
        track_url=track_url,
        genres=fields.extract_genres(info),
        cover_art_url=fields.extract_cover_art_url(cover),
        download_url=fields.extract_download_url(parent),
        license=fields.extract_license(legend.get("license")),
        downloads=fields.extract_count(legend.get("downloads"), "downloads"),
        play_count=fields.extract_count(legend.get("plays"), "plays"),
        rating=fields.extract_rating(legend.get("rating")),
        published_date=fields.extract_published_date(legend.get("date")),
    )


def is_usable(track: Track) -> bool:
    return bool(track.title)
