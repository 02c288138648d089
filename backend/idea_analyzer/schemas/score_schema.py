from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CompetitionLevel = Literal["None", "Low", "Medium", "High", "Very High"]
MarketMaturity = Literal["New", "Growing", "Established", "Mature"]


class ScoringWeights(BaseModel):
    """Weights applied to the five opportunity factors.

    Not required to sum to 1.0, but the defaults do.  The explanation text
    always buckets with the default weights regardless of these values.
    """

    model_config = ConfigDict(frozen=True)

    rating: float = Field(0.30, ge=0.0, description="Mean competitor rating factor")
    installs: float = Field(0.25, ge=0.0, description="Mean lifetime installs factor")
    reviews: float = Field(0.20, ge=0.0, description="Mean review count factor")
    age: float = Field(0.15, ge=0.0, description="Mean competitor age factor")
    competition: float = Field(0.10, ge=0.0, description="Population size factor")


class FactorScores(BaseModel):
    """Per-factor opportunity sub-scores.

    Higher means more favourable for a newcomer.  Every value is 0-100.
    """

    rating: int = Field(..., ge=0, le=100)
    installs: int = Field(..., ge=0, le=100)
    reviews: int = Field(..., ge=0, le=100)
    age: int = Field(..., ge=0, le=100)
    competition: int = Field(..., ge=0, le=100)


class WinningScoreResult(BaseModel):
    """Composite opportunity assessment of one competitor population."""

    score: int = Field(..., ge=0, le=100, description="Weighted opportunity score")
    explanation: str
    avg_rating: float = Field(..., ge=0.0)
    avg_installs: float = Field(..., ge=0.0)
    avg_reviews: float = Field(..., ge=0.0)
    avg_age_days: float = Field(
        ...,
        ge=0.0,
        description="Mean age over competitors with a usable release date",
    )
    competitor_count: int = Field(..., ge=0)
    competition_level: CompetitionLevel
    market_maturity: MarketMaturity
    factor_scores: FactorScores
