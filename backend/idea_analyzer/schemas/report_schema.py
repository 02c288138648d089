from typing import Optional

from pydantic import BaseModel, Field

from .score_schema import CompetitionLevel, MarketMaturity


class MarketInsights(BaseModel):
    """Market-level figures shown next to the score.

    ``avg_rating``, ``avg_installs`` and ``avg_reviews`` describe the full
    competitor population; ``avg_last_30_days_installs`` and
    ``contains_iap_percentage`` describe only the listed competitors.
    """

    avg_rating: float
    avg_installs: float
    avg_reviews: float
    avg_last_30_days_installs: int = Field(..., ge=0)
    competition_level: CompetitionLevel
    market_maturity: MarketMaturity
    total_apps: int = Field(..., ge=0)
    contains_iap_percentage: int = Field(
        ...,
        ge=0,
        le=100,
        description="Share of listed competitors with ads or in-app purchases",
    )


class CompetitorListing(BaseModel):
    """One row of the competitor table, most similar first."""

    rank: int = Field(..., ge=0)
    id: str
    title: str
    publisher: str
    total_installs: int = Field(..., ge=0)
    last_30_days_installs: int = Field(..., ge=0)
    rating: Optional[float] = None
    contains_iap: bool
    release_date: Optional[str] = None
    similarity_index: int = Field(..., ge=0, le=100)
    url: Optional[str] = None


class AnalysisReport(BaseModel):
    """Response of ``POST /api/analyze``."""

    idea: str
    keywords: list[str]
    total_products_count: int = Field(..., ge=0)
    competitors_count: int = Field(..., ge=0)
    idea_score: int = Field(..., ge=0, le=100)
    avg_similarity_index: int = Field(..., ge=0, le=100)
    highest_similarity_index: int = Field(..., ge=0, le=100)
    score_explanation: str
    market_insights: MarketInsights
    competitors: list[CompetitorListing]
