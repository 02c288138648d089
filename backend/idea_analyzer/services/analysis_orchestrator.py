"""Idea Analysis Orchestrator.

Composes keyword resolution, competitor aggregation, per-competitor
scoring and the winning-score engine into one ``AnalysisReport``.

Two competitor populations flow through here:

- the *full* deduplicated population feeds the winning score;
- the *reporting subset* (similarity >= 10, most similar first) feeds the
  competitor listing and the display averages.

The subset never feeds back into the score.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..constants import GENERIC_CATEGORY_TERMS, MIN_REPORTED_SIMILARITY, TOP_SIMILARITY_WINDOW
from ..schemas.competitor_schema import CompetitorRecord, ScoredCompetitor
from ..schemas.idea_schema import IdeaInput
from ..schemas.report_schema import AnalysisReport, CompetitorListing, MarketInsights
from ..schemas.score_schema import ScoringWeights, WinningScoreResult
from .competitor_aggregator import CatalogSearch, aggregate_competitors
from .installs_estimator import estimate_recent_installs
from .keyword_extractor import resolve_keywords
from .scoring_engine import calculate_winning_score
from .similarity_scorer import similarity_index
from .timing import StepTimer

logger = logging.getLogger(__name__)


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_competitors(
    idea: IdeaInput,
    competitors: Sequence[CompetitorRecord],
    today: Optional[date] = None,
) -> List[ScoredCompetitor]:
    """Attach similarity and recent-installs estimates, preserving order."""
    record_fields = set(CompetitorRecord.model_fields)
    scored: list[ScoredCompetitor] = []
    for comp in competitors:
        scored.append(
            ScoredCompetitor(
                **comp.model_dump(include=record_fields),
                similarity_index=similarity_index(idea, comp),
                estimated_recent_installs=estimate_recent_installs(
                    comp.total_installs, comp.released, today,
                ),
            )
        )
    return scored


def reporting_subset(scored: Iterable[ScoredCompetitor]) -> List[ScoredCompetitor]:
    """Competitors similar enough to list, most similar first.

    Ties keep aggregation order (``sorted`` is stable with ``reverse``).
    """
    kept = [c for c in scored if c.similarity_index >= MIN_REPORTED_SIMILARITY]
    return sorted(kept, key=lambda c: c.similarity_index, reverse=True)


def _listing(rank: int, comp: ScoredCompetitor) -> CompetitorListing:
    return CompetitorListing(
        rank=rank,
        id=comp.id,
        title=comp.title,
        publisher=comp.developer_name,
        total_installs=comp.total_installs,
        last_30_days_installs=comp.estimated_recent_installs,
        rating=comp.rating,
        contains_iap=comp.monetized,
        release_date=comp.released,
        similarity_index=comp.similarity_index,
        url=comp.url,
    )


def build_report(
    idea: IdeaInput,
    subset: Sequence[ScoredCompetitor],
    winning: WinningScoreResult,
) -> AnalysisReport:
    """Merge the winning score (full population) with subset display figures."""
    count = len(subset)
    top = subset[:TOP_SIMILARITY_WINDOW]

    avg_similarity = _round(sum(c.similarity_index for c in top) / len(top)) if top else 0
    highest_similarity = subset[0].similarity_index if subset else 0
    avg_recent = _round(sum(c.estimated_recent_installs for c in subset) / count) if count else 0
    monetized_pct = _round(sum(1 for c in subset if c.monetized) / count * 100) if count else 0

    return AnalysisReport(
        idea=idea.raw_text,
        keywords=list(idea.keywords),
        total_products_count=count,
        competitors_count=count,
        idea_score=winning.score,
        avg_similarity_index=avg_similarity,
        highest_similarity_index=highest_similarity,
        score_explanation=winning.explanation,
        market_insights=MarketInsights(
            avg_rating=winning.avg_rating,
            avg_installs=winning.avg_installs,
            avg_reviews=winning.avg_reviews,
            avg_last_30_days_installs=avg_recent,
            competition_level=winning.competition_level,
            market_maturity=winning.market_maturity,
            total_apps=count,
            contains_iap_percentage=monetized_pct,
        ),
        competitors=[_listing(rank, comp) for rank, comp in enumerate(subset)],
    )


async def analyze_idea(
    catalog: CatalogSearch,
    idea_text: str,
    keywords: Optional[Sequence[str]] = None,
    genre: Optional[str] = None,
    country: Optional[str] = None,
    weights: Optional[ScoringWeights] = None,
    results_per_keyword: int = 15,
    excluded_terms: Sequence[str] = GENERIC_CATEGORY_TERMS,
    today: Optional[date] = None,
) -> AnalysisReport:
    """Run the full analysis for one idea.

    Catalog failures propagate unchanged to the caller.
    """
    timer = StepTimer("analyze")

    with timer.step("keywords"):
        resolved = resolve_keywords(idea_text, keywords, excluded_terms)
    logger.info("[ANALYZE] Analyzing idea %r with keywords: %s", idea_text[:80], ", ".join(resolved))

    idea = IdeaInput(raw_text=idea_text, keywords=resolved, genre=genre, locale=country)

    async with timer.async_step("aggregate"):
        population = await aggregate_competitors(
            catalog, resolved, genre=genre, country=country, limit=results_per_keyword,
        )

    with timer.step("score"):
        scored = score_competitors(idea, population, today)
        subset = reporting_subset(scored)
        winning = calculate_winning_score(population, weights, today)

    logger.info(
        "[ANALYZE] population=%d listed=%d score=%d level=%s",
        len(population), len(subset), winning.score, winning.competition_level,
    )
    timer.summary()

    return build_report(idea, subset, winning)
