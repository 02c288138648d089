"""Environment-derived configuration.

Values are read from the process environment (populated from ``.env`` by
``main.py``) each time a loader is called.  Nothing here caches state at
module level, so tests can change the environment freely.
"""

from __future__ import annotations

import logging
import os

from .schemas.score_schema import ScoringWeights

logger = logging.getLogger(__name__)

# env var → ScoringWeights field
_WEIGHT_ENV_VARS: dict[str, str] = {
    "RATING_WEIGHT": "rating",
    "INSTALLS_WEIGHT": "installs",
    "REVIEWS_WEIGHT": "reviews",
    "AGE_WEIGHT": "age",
    "COMPETITION_WEIGHT": "competition",
}


def _env_float(name: str) -> float | None:
    """Return the float value of *name*, or None when unset/blank/invalid."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("[CONFIG] Ignoring non-numeric %s=%r", name, raw)
        return None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("[CONFIG] Ignoring non-integer %s=%r", name, raw)
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def load_scoring_weights() -> ScoringWeights:
    """Build the winning-score weights from the environment.

    Any weight that is missing, unparseable or negative keeps its default.
    """
    overrides: dict[str, float] = {}
    for env_name, field in _WEIGHT_ENV_VARS.items():
        value = _env_float(env_name)
        if value is None:
            continue
        if value < 0:
            logger.warning("[CONFIG] Ignoring negative %s=%r", env_name, value)
            continue
        overrides[field] = value
    return ScoringWeights(**overrides)


def get_scoring_weights() -> ScoringWeights:
    """FastAPI dependency returning the configured scoring weights."""
    return load_scoring_weights()


def default_country() -> str:
    return (os.getenv("DEFAULT_COUNTRY") or "us").strip().lower()


def default_lang() -> str:
    return (os.getenv("DEFAULT_LANG") or "en").strip().lower()


def results_per_keyword() -> int:
    """Number of full-detail results requested per keyword query."""
    return max(1, _env_int("RESULTS_PER_KEYWORD", 15))


def search_result_limit() -> int:
    return max(1, _env_int("SEARCH_RESULT_LIMIT", 30))


def debug_enabled() -> bool:
    return _env_bool("DEBUG", False)


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
