"""Fetch-and-extract pipeline for one catalog page.

CatalogPipeline.run() fetches a page, locates the track containers,
assembles a Track from each and keeps the usable ones. A page that could
not be fetched or whose overall shape is wrong raises FetchFailedException;
a page that simply lists nothing returns an empty list. There is no retry.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from auboutdufil.catalog.assembler import assemble, is_usable
from auboutdufil.catalog.locator import locate
from auboutdufil.common.exceptions import (
    FetchFailedException,
    HTMLStructuralAssumptionException,
    TransientException,
)
from auboutdufil.common.request_manager import SyncRequestManager
from auboutdufil.data_types import FilterSet, Track

logger = logging.getLogger(__name__)


def build_catalog_url(base_url: str, filters: FilterSet) -> str:
    """Append the upstream query for *filters* to *base_url*.

    *base_url* already ends with ``?``, e.g.
    ``http://www.auboutdufil.com/index.php?``.
    """
    return base_url + urlencode(filters.query_params())


class CatalogPipeline:
    """Turns a catalog page URL into a list of Tracks.

    Example::

        with SyncRequestManager(timeout=15.0) as manager:
            tracks = CatalogPipeline(manager).run(url)
    """

    def __init__(self, request_manager: SyncRequestManager) -> None:
        self.request_manager = request_manager

    def run(self, url: str) -> list[Track]:
        """Fetch *url* and extract its tracks.

        Returns:
            Usable tracks in page order, possibly empty.

        Raises:
            FetchFailedException: On any transport failure, unparseable
                body or structural mismatch of the page as a whole.
        """
        logger.info("Scraping page...", extra={"url": url})

        try:
            document = self.request_manager.fetch_document(url)
        except (TransientException, httpx.HTTPError) as e:
            logger.error(f"Fetching {url} failed: {e}")
            raise FetchFailedException(url, str(e)) from e

        try:
            containers = locate(document, request_url=url)
        except HTMLStructuralAssumptionException as e:
            logger.error(f"Unexpected catalog layout on {url}: {e.message}")
            raise FetchFailedException(url, e.message) from e

        tracks = []
        for container in containers:
            track = assemble(container)
            if is_usable(track):
                tracks.append(track)
            else:
                logger.warning(
                    "Dropping track without a title", extra={"url": url}
                )

        logger.info(
            f"Extracted {len(tracks)} of {len(containers)} tracks from {url}"
        )
        return tracks
