"""Deterministic Winning-Score Engine.

Converts a competitor population into a 0-100 opportunity score, two
categorical labels (competition level, market maturity) and a templated
explanation.

Rules
-----
- NO API calls
- NO LLMs
- NO heuristics beyond the explicit step tables below
- Pure deterministic math (``today`` is injectable)

Each factor maps a population mean to an opportunity sub-score through a
monotone step table: the stronger the incumbents, the lower the sub-score.
A mean of exactly zero means "no data" and scores 100.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional, Sequence

from ..schemas.competitor_schema import CompetitorRecord
from ..schemas.score_schema import FactorScores, ScoringWeights, WinningScoreResult
from .installs_estimator import RECENT_WINDOW_DAYS, recent_share_for_age
from .release_dates import age_in_days

logger = logging.getLogger(__name__)

# Explanation tiers always use these, whatever the caller configured.
REFERENCE_WEIGHTS = ScoringWeights()

NO_COMPETITORS_EXPLANATION = (
    "No competitors found. This might indicate a new market opportunity "
    "or that your search terms need refinement."
)

# (minimum mean, sub-score), checked top-down; first match wins.
_RATING_STEPS: tuple[tuple[float, int], ...] = (
    (4.5, 40), (4.0, 50), (3.5, 60), (3.0, 70), (2.5, 80),
)
_INSTALLS_STEPS: tuple[tuple[float, int], ...] = (
    (10_000_000, 30), (1_000_000, 40), (500_000, 50), (100_000, 60),
    (50_000, 70), (10_000, 80),
)
_REVIEWS_STEPS: tuple[tuple[float, int], ...] = (
    (1_000_000, 30), (100_000, 40), (10_000, 50), (5_000, 60), (1_000, 70),
    (500, 80), (100, 90),
)
_AGE_STEPS: tuple[tuple[float, int], ...] = (
    (2190, 40), (1460, 50), (730, 60), (365, 70), (180, 80), (90, 85),
)
_COMPETITION_STEPS: tuple[tuple[float, int], ...] = (
    (50, 30), (30, 40), (20, 50), (10, 60), (5, 70), (3, 80), (1, 90),
)

_SCORE_TIERS: tuple[tuple[int, str], ...] = (
    (80, "Great opportunity!"),
    (60, "Good opportunity with some challenges."),
    (40, "Challenging market with established competitors."),
)
_LOWEST_TIER = "Very competitive market with strong existing players."

# (factor, sentence when sub-score >= 70, sentence when sub-score <= 50)
_INSIGHTS: tuple[tuple[str, str, str], ...] = (
    (
        "rating",
        "Existing apps have relatively low ratings, indicating potential to win with better quality.",
        "Existing apps have high ratings, indicating a market with high quality standards.",
    ),
    (
        "installs",
        "The market has relatively few installs, suggesting room for growth.",
        "The market has many installs, indicating proven demand but tough competition.",
    ),
    (
        "age",
        "This is a relatively new market.",
        "This is a mature market with long-established players.",
    ),
)
_INSIGHT_HIGH = 70
_INSIGHT_LOW = 50


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _step(value: float, steps: Sequence[tuple[float, int]], floor_score: int) -> int:
    for threshold, score in steps:
        if value >= threshold:
            return score
    return floor_score


# ===================================================================== #
#  Factor sub-scores                                                      #
# ===================================================================== #

def rating_score(avg_rating: float) -> int:
    if avg_rating == 0:
        return 100
    return _step(avg_rating, _RATING_STEPS, 90)


def installs_score(avg_installs: float) -> int:
    if avg_installs == 0:
        return 100
    return _step(avg_installs, _INSTALLS_STEPS, 90)


def reviews_score(avg_reviews: float) -> int:
    if avg_reviews == 0:
        return 100
    return _step(avg_reviews, _REVIEWS_STEPS, 95)


def age_score(avg_age_days: float) -> int:
    if avg_age_days == 0:
        return 100
    return _step(avg_age_days, _AGE_STEPS, 90)


def competition_score(competitor_count: int) -> int:
    return _step(competitor_count, _COMPETITION_STEPS, 100)


def weighted_score(factors: FactorScores, weights: ScoringWeights) -> int:
    """Weighted sum of the five sub-scores, rounded and clamped to 0-100."""
    total = (
        factors.rating * weights.rating
        + factors.installs * weights.installs
        + factors.reviews * weights.reviews
        + factors.age * weights.age
        + factors.competition * weights.competition
    )
    return _round(_clamp(total))


# ===================================================================== #
#  Classifiers                                                            #
# ===================================================================== #

def competition_level(count: int, avg_installs: float, avg_rating: float) -> str:
    if count >= 20 and avg_installs >= 1_000_000 and avg_rating >= 4.0:
        return "Very High"
    if count >= 10 and avg_installs >= 500_000 and avg_rating >= 3.5:
        return "High"
    if count >= 5 and avg_installs >= 100_000:
        return "Medium"
    if count >= 1:
        return "Low"
    return "None"


def market_maturity(avg_age_days: float, avg_installs: float) -> str:
    if avg_age_days >= 1460 or avg_installs >= 1_000_000:
        return "Mature"
    if avg_age_days >= 730 or avg_installs >= 100_000:
        return "Established"
    if avg_age_days >= 365 or avg_installs >= 10_000:
        return "Growing"
    return "New"


# ===================================================================== #
#  Explanation                                                            #
# ===================================================================== #

def format_number(value: float) -> str:
    """Render *value* with a K/M/B suffix and one decimal."""
    for divisor, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if value >= divisor:
            return f"{value / divisor:.1f}{suffix}"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def _tier_label(score: int) -> str:
    for minimum, label in _SCORE_TIERS:
        if score >= minimum:
            return label
    return _LOWEST_TIER


def _estimated_recent_mean(avg_installs: float, avg_age_days: float) -> float:
    if avg_age_days < RECENT_WINDOW_DAYS:
        return avg_installs
    return avg_installs * recent_share_for_age(avg_age_days)


def _insight_sentences(factors: FactorScores) -> list[str]:
    sentences: list[str] = []
    for factor, high, low in _INSIGHTS:
        value = getattr(factors, factor)
        if value >= _INSIGHT_HIGH:
            sentences.append(high)
        elif value <= _INSIGHT_LOW:
            sentences.append(low)
    return sentences


def build_explanation(
    factors: FactorScores,
    competitor_count: int,
    avg_rating: float,
    avg_installs: float,
    avg_age_days: float,
) -> str:
    """Deterministic narrative for a non-empty population."""
    if competitor_count == 0:
        return NO_COMPETITORS_EXPLANATION

    reference = weighted_score(factors, REFERENCE_WEIGHTS)
    recent = _round(_estimated_recent_mean(avg_installs, avg_age_days))

    parts = [
        _tier_label(reference),
        (
            f"Found {competitor_count} competitors with an average rating of "
            f"{avg_rating:.1f}/5, approximately {format_number(avg_installs)} "
            f"total installs per app, with an estimated {format_number(recent)} "
            f"installs per app in the last 30 days, and an average age of "
            f"{avg_age_days / 365:.1f} years."
        ),
    ]
    parts.extend(_insight_sentences(factors))
    return " ".join(parts)


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _known_ages(competitors: Sequence[CompetitorRecord], today: date) -> list[int]:
    ages: list[int] = []
    for comp in competitors:
        if not comp.released:
            continue
        try:
            ages.append(max(0, age_in_days(comp.released, today)))
        except ValueError:
            logger.debug("[SCORE] Unparseable release date %r for %s", comp.released, comp.id)
    return ages


def calculate_winning_score(
    competitors: Sequence[CompetitorRecord],
    weights: Optional[ScoringWeights] = None,
    today: Optional[date] = None,
) -> WinningScoreResult:
    """Score how favourable a competitor population is for a newcomer.

    Parameters
    ----------
    competitors : Sequence[CompetitorRecord]
        The full, unfiltered population found for the idea.
    weights : ScoringWeights, optional
        Factor weights; defaults to 0.30/0.25/0.20/0.15/0.10.
    today : date, optional
        Reference date for competitor ages.

    Returns
    -------
    WinningScoreResult
        Score, explanation, population means and both classifiers.
    """
    weights = weights or ScoringWeights()
    today = today or date.today()

    count = len(competitors)
    if count == 0:
        return WinningScoreResult(
            score=100,
            explanation=NO_COMPETITORS_EXPLANATION,
            avg_rating=0.0,
            avg_installs=0.0,
            avg_reviews=0.0,
            avg_age_days=0.0,
            competitor_count=0,
            competition_level="None",
            market_maturity="New",
            factor_scores=FactorScores(
                rating=100, installs=100, reviews=100, age=100, competition=100,
            ),
        )

    avg_rating = _mean([c.rating or 0.0 for c in competitors])
    avg_installs = _mean([c.total_installs for c in competitors])
    avg_reviews = _mean([c.review_count for c in competitors])
    avg_age_days = _mean(_known_ages(competitors, today))

    factors = FactorScores(
        rating=rating_score(avg_rating),
        installs=installs_score(avg_installs),
        reviews=reviews_score(avg_reviews),
        age=age_score(avg_age_days),
        competition=competition_score(count),
    )
    score = weighted_score(factors, weights)

    logger.info(
        "[SCORE] n=%d rating=%.2f installs=%.0f reviews=%.0f age=%.0fd → %d",
        count, avg_rating, avg_installs, avg_reviews, avg_age_days, score,
    )

    return WinningScoreResult(
        score=score,
        explanation=build_explanation(factors, count, avg_rating, avg_installs, avg_age_days),
        avg_rating=avg_rating,
        avg_installs=avg_installs,
        avg_reviews=avg_reviews,
        avg_age_days=avg_age_days,
        competitor_count=count,
        competition_level=competition_level(count, avg_installs, avg_rating),
        market_maturity=market_maturity(avg_age_days, avg_installs),
        factor_scores=factors,
    )
