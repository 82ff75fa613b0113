"""FastAPI application serving catalog track lists.

Routes:

- ``GET /`` redirects to the project page
- ``GET /{latest,best,downloads,plays}[/<key>/<value>...]`` returns a JSON
  array of tracks; filters may also be passed as ``genre``, ``mood`` and
  ``license`` query parameters, together with ``page``

The CatalogService is created by the caller and stored on ``app.state``;
handlers receive it through ``Depends(get_catalog_service)``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    Depends,
    FastAPI,
    HTTPException,
    Request,
    status,
)
from fastapi.responses import JSONResponse, RedirectResponse

from auboutdufil.common.config import ServiceConfig
from auboutdufil.common.exceptions import (
    FetchFailedException,
    FilterNormalizationException,
)
from auboutdufil.data_types import SortMode, TrackPayload
from auboutdufil.normalizer import normalize, split_path
from auboutdufil.service import CatalogService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tracks"])


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


@router.get("/", include_in_schema=False)
def redirect_homepage(request: Request) -> RedirectResponse:
    return RedirectResponse(
        request.app.state.config.project_url,
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@router.get("/{route}", response_model=list[TrackPayload])
@router.get("/{route}/{filters:path}", response_model=list[TrackPayload])
def list_tracks(
    route: str,
    request: Request,
    filters: str = "",
    service: CatalogService = Depends(get_catalog_service),
) -> list[TrackPayload]:
    """List tracks for a sort route and optional filter pairs.

    Raises:
        HTTPException: 404 if *route* is not a sort route.
    """
    if SortMode.from_route(route) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown route {route!r}",
        )

    filter_set = normalize([route, *split_path(filters)], request.query_params)
    return [track.to_payload() for track in service.tracks(filter_set)]


async def _bad_filters(
    request: Request, exc: FilterNormalizationException
) -> JSONResponse:
    logger.info(f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


async def _fetch_failed(
    request: Request, exc: FetchFailedException
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Upstream catalog unavailable"},
    )


def create_app(
    service: CatalogService, config: ServiceConfig | None = None
) -> FastAPI:
    """Create the API application around an existing CatalogService.

    Args:
        service: The service handlers will use. It is closed when the
            application shuts down.
        config: Settings used by the HTTP layer itself (redirect target).

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Catalog API started")
        yield
        service.close()
        logger.info("Catalog API stopped")

    app = FastAPI(title="auboutdufil", version="0.1.0", lifespan=lifespan)
    app.state.catalog_service = service
    app.state.config = config or ServiceConfig()

    app.add_exception_handler(FilterNormalizationException, _bad_filters)  # type: ignore[arg-type]
    app.add_exception_handler(FetchFailedException, _fetch_failed)  # type: ignore[arg-type]
    app.include_router(router)
    return app
