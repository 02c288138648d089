"""Recent-installs Estimator.

The store only publishes a lifetime installs lower bound.  This module
models how much of that total arrived in the trailing 30 days from the
listing's age, on the assumption that inflow decays as a product matures.

All figures are estimates, never measurements.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from .release_dates import DateLike, age_in_days

logger = logging.getLogger(__name__)

# (upper age bound in days, share of lifetime installs in the last 30 days)
AGE_TIERS: tuple[tuple[int, float], ...] = (
    (90, 0.60),
    (180, 0.40),
    (365, 0.20),
    (730, 0.10),
)
MATURE_SHARE = 0.05
FALLBACK_SHARE = 0.10

POPULAR_THRESHOLD = 10_000_000
POPULAR_MULTIPLIER = 1.2
LOW_TRAFFIC_THRESHOLD = 10_000
LOW_TRAFFIC_MULTIPLIER = 0.8

RECENT_WINDOW_DAYS = 30


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def recent_share_for_age(age_days: float) -> float:
    """Base share of lifetime installs expected in the last 30 days."""
    for upper, share in AGE_TIERS:
        if age_days < upper:
            return share
    return MATURE_SHARE


def estimate_recent_installs(
    total_installs: Optional[int],
    released: Optional[DateLike],
    today: Optional[date] = None,
) -> int:
    """Estimate installs over the trailing 30 days.

    Returns 0 without installs or a release date.  Listings younger than
    30 days return their lifetime figure unchanged.  A date that cannot be
    interpreted yields 10% of lifetime installs instead of an error.
    """
    if not total_installs or not released:
        return 0

    try:
        age_days = max(1, age_in_days(released, today))
        if age_days < RECENT_WINDOW_DAYS:
            return int(total_installs)

        share = recent_share_for_age(age_days)
        if total_installs > POPULAR_THRESHOLD:
            share *= POPULAR_MULTIPLIER
        elif total_installs < LOW_TRAFFIC_THRESHOLD:
            share *= LOW_TRAFFIC_MULTIPLIER

        return _round(total_installs * share)
    except (ValueError, TypeError, OverflowError) as exc:
        logger.debug("[INSTALLS] Falling back to %.0f%% for %r: %s", FALLBACK_SHARE * 100, released, exc)
        return _round(total_installs * FALLBACK_SHARE)
