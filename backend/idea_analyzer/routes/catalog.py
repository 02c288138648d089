"""Store browsing routes: keyword search and single-app detail."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import search_result_limit
from ..schemas.competitor_schema import AppDetail, SearchResponse
from ..services.catalog_dependency import get_catalog
from ..services.catalog_provider import CatalogError, CatalogNotFoundError, PlayStoreCatalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Catalog"],
)


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search the Store",
    response_description="Matching listings without detail pages",
)
async def search_apps(
    query: Optional[str] = Query(None, description="Search term"),
    catalog: PlayStoreCatalog = Depends(get_catalog),
) -> SearchResponse:
    if not query or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide a search query",
        )

    term = query.strip()
    try:
        hits = await catalog.search_hits(term, search_result_limit())
    except CatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Search failed: {exc}",
        ) from exc

    return SearchResponse(query=term, count=len(hits), results=hits)


@router.get(
    "/app/{app_id}",
    response_model=AppDetail,
    summary="Get App Details",
    response_description="Full store listing for one app",
)
async def get_app_details(
    app_id: str,
    catalog: PlayStoreCatalog = Depends(get_catalog),
) -> AppDetail:
    try:
        return await catalog.fetch_detail(app_id)
    except CatalogNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'App with ID "{app_id}" was not found',
        ) from exc
    except CatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Detail lookup failed: {exc}",
        ) from exc
