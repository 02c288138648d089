"""Idea Analysis Route.

Thin HTTP wrapper around ``analyze_idea``.  All business logic lives in
the service layer.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import get_scoring_weights, results_per_keyword
from ..schemas.idea_schema import AnalyzeRequest
from ..schemas.report_schema import AnalysisReport
from ..schemas.score_schema import ScoringWeights
from ..services.analysis_orchestrator import analyze_idea
from ..services.catalog_dependency import get_catalog
from ..services.catalog_provider import CatalogError, PlayStoreCatalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Analysis"],
    responses={
        502: {"description": "Store catalog failure during analysis"},
    },
)


@router.post(
    "/analyze",
    response_model=AnalysisReport,
    status_code=status.HTTP_200_OK,
    summary="Analyze an App Idea",
    response_description="Opportunity score, market insights and similar competitors",
)
async def analyze(
    request: AnalyzeRequest,
    catalog: PlayStoreCatalog = Depends(get_catalog),
    weights: ScoringWeights = Depends(get_scoring_weights),
) -> AnalysisReport:
    """Score the market opportunity for a free-text app idea."""
    try:
        return await analyze_idea(
            catalog,
            request.idea,
            keywords=request.keywords,
            genre=request.genre,
            country=request.country.lower() if request.country else None,
            weights=weights,
            results_per_keyword=results_per_keyword(),
        )
    except CatalogError as exc:
        logger.exception("[ANALYZE] Catalog failure")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Analysis failed: {exc}",
        ) from exc
