"""Catalog service: cache-through access to the extraction pipeline.

CatalogService owns the ResultCache and the CatalogPipeline. It is built
once per process (see web/app.py and cli.py) and handed to whoever needs
it; nothing here is module-level state.
"""

from __future__ import annotations

import logging

from auboutdufil.cache import ResultCache
from auboutdufil.catalog.pipeline import CatalogPipeline, build_catalog_url
from auboutdufil.common.config import ServiceConfig
from auboutdufil.common.request_manager import SyncRequestManager
from auboutdufil.data_types import FilterSet, Track

logger = logging.getLogger(__name__)


class CatalogService:
    """Serves track lists for filter sets, caching each result for a while.

    Concurrent misses on the same key each run the pipeline; whichever
    finishes last is the one left in the cache.
    """

    def __init__(
        self,
        pipeline: CatalogPipeline,
        cache: ResultCache[list[Track]],
        base_url: str,
    ) -> None:
        self.pipeline = pipeline
        self.cache = cache
        self.base_url = base_url

    @classmethod
    def from_config(
        cls, config: ServiceConfig, request_manager: SyncRequestManager | None = None
    ) -> CatalogService:
        """Build a service and its collaborators from *config*."""
        if request_manager is None:
            request_manager = SyncRequestManager(
                timeout=config.fetch_timeout, user_agent=config.user_agent
            )
        return cls(
            pipeline=CatalogPipeline(request_manager),
            cache=ResultCache(ttl=config.cache_ttl, maxsize=config.cache_maxsize),
            base_url=config.base_url,
        )

    def close(self) -> None:
        self.pipeline.request_manager.close()

    def catalog_url(self, filters: FilterSet) -> str:
        return build_catalog_url(self.base_url, filters)

    def tracks(self, filters: FilterSet) -> list[Track]:
        """Return the tracks for *filters*, from cache when possible.

        Raises:
            FetchFailedException: If the page had to be fetched and failed.
                Failures are not cached.
        """
        key = filters.cache_key()
        cached, found = self.cache.get(key)
        if found and cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.info("Cache expired, scraping data...", extra={"cache_key": key})
        tracks = self.pipeline.run(self.catalog_url(filters))
        self.cache.set(key, tracks)
        return tracks
