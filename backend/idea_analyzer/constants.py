"""Centralized constants shared across the analysis engine and routes.

This module is the SINGLE SOURCE OF TRUTH for the keyword stop-word table,
the generic category terms removed from search keywords, and the numeric
thresholds the engine reports against.
"""

from __future__ import annotations

# ── Keyword extraction ──────────────────────────────────────────────────
# Function words plus filler verbs/nouns that describe *building* an app
# rather than what the app does.

STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
        "be", "been", "being", "in", "on", "at", "to", "for", "with", "by",
        "about", "against", "between", "into", "through", "during",
        "before", "after", "above", "below", "from", "up", "down", "of",
        "off", "over", "under", "again", "further", "then", "once", "here",
        "there", "when", "where", "why", "how", "all", "any", "both",
        "each", "few", "more", "most", "other", "some", "such", "no",
        "nor", "not", "only", "own", "same", "so", "than", "too", "very",
        "can", "will", "just", "should", "now", "i", "me", "my", "myself",
        "we", "our", "ours", "ourselves", "you", "your", "yours",
        "yourself", "yourselves", "he", "him", "his", "himself", "she",
        "her", "hers", "herself", "it", "its", "itself", "they", "them",
        "their", "theirs", "themselves", "what", "which", "who", "whom",
        "this", "that", "these", "those", "am", "would", "could",
        # domain filler
        "app", "make", "create", "build", "application",
    }
)

MAX_KEYWORDS: int = 6

# Category-wide terms that would return the store's whole top chart
# instead of comparable products.
GENERIC_CATEGORY_TERMS: tuple[str, ...] = ("game", "games")

# Last-resort search term when nothing usable survives extraction.
FALLBACK_KEYWORD: str = "app"

# ── Reporting ───────────────────────────────────────────────────────────
# Competitors below this similarity are scored but never listed.
MIN_REPORTED_SIMILARITY: int = 10

# Number of best matches averaged into ``avg_similarity_index``.
TOP_SIMILARITY_WINDOW: int = 10

# ── Catalog ─────────────────────────────────────────────────────────────
PLAY_STORE_APP_URL: str = "https://play.google.com/store/apps/details?id={app_id}"
