"""Idea ↔ competitor similarity.

Blends three lexical signals into a 0-100 similarity index:

- text overlap   (Jaccard of idea tokens vs listing tokens)   50%
- keyword match  (share of idea keywords found in the listing) 40%
- genre match    (1 equal, 0 different, 0.5 unknown)           10%
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

from ..schemas.competitor_schema import CompetitorRecord
from ..schemas.idea_schema import IdeaInput

_NON_WORD = re.compile(r"[^\w\s]")

TEXT_WEIGHT = 0.5
KEYWORD_WEIGHT = 0.4
GENRE_WEIGHT = 0.1


def _tokenise(text: str) -> set[str]:
    """Lower-cased word set, punctuation stripped, tokens longer than 2."""
    return {t for t in _NON_WORD.sub(" ", text.lower()).split() if len(t) > 2}


def jaccard_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """Jaccard coefficient of the token sets of two texts; 0.0 if either is empty."""
    if not text_a or not text_b:
        return 0.0
    set_a = _tokenise(text_a)
    set_b = _tokenise(text_b)
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def keyword_match_score(keywords: Iterable[str], text: Optional[str]) -> float:
    """Fraction of *keywords* occurring as a case-insensitive substring of *text*."""
    keywords = list(keywords or [])
    if not keywords or not text:
        return 0.0
    haystack = text.lower()
    matches = sum(1 for kw in keywords if kw.lower() in haystack)
    return matches / len(keywords)


def genre_match_score(idea_genre: Optional[str], app_genre: Optional[str]) -> float:
    if not idea_genre or not app_genre:
        return 0.5  # neutral without genre information
    return 1.0 if idea_genre.lower() == app_genre.lower() else 0.0


def similarity_index(
    idea: Optional[IdeaInput],
    competitor: Optional[CompetitorRecord],
) -> int:
    """Overall similarity of *competitor* to *idea*, an integer in [0, 100]."""
    if idea is None or competitor is None:
        return 0

    listing_text = competitor.text_blob
    weighted = (
        TEXT_WEIGHT * jaccard_similarity(idea.raw_text, listing_text)
        + KEYWORD_WEIGHT * keyword_match_score(idea.keywords, listing_text)
        + GENRE_WEIGHT * genre_match_score(idea.genre, competitor.genre)
    )
    return max(0, min(100, math.floor(weighted * 100 + 0.5)))
