"""Deterministic Keyword Extractor.

Turns a free-text product idea into at most six store search terms, each a
single word or a two-word phrase.

Rules
-----
- NO stemming, embeddings or language models
- NO external API calls
- Pure transformation: same input → same output
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional

from ..constants import FALLBACK_KEYWORD, MAX_KEYWORDS, STOP_WORDS

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


# ===================================================================== #
#  Internal helpers                                                       #
# ===================================================================== #

def _normalise(text: str) -> str:
    """Lower-case, replace punctuation with spaces, collapse whitespace."""
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def _is_candidate_word(token: str) -> bool:
    return len(token) > 2 and token not in STOP_WORDS and not token.isdigit()


def _bigrams(tokens: List[str]) -> List[str]:
    """Adjacent pairs of the *unfiltered* token stream.

    A pair survives only when neither side is a stop word, so a phrase is
    never bridged across a removed word.
    """
    phrases: list[str] = []
    for left, right in zip(tokens, tokens[1:]):
        if left in STOP_WORDS or right in STOP_WORDS:
            continue
        phrase = f"{left} {right}"
        if len(phrase) > 5:
            phrases.append(phrase)
    return phrases


def _dedupe(
    items: Iterable[str],
    key: Optional[Callable[[str], str]] = None,
) -> List[str]:
    """Return *items* with duplicates removed, preserving first-seen order.

    With *key*, items are compared by ``key(item)`` and the first spelling
    is kept.
    """
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        marker = key(item) if key else item
        if marker not in seen:
            seen.add(marker)
            out.append(item)
    return out


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

def extract_keywords(idea: Optional[str]) -> List[str]:
    """Extract up to six search terms from *idea*.

    Unigrams come first in text order, then bigrams; duplicates are dropped
    and the merged list is truncated to ``MAX_KEYWORDS``.  Empty or missing
    input yields an empty list.
    """
    if not idea:
        return []

    tokens = _normalise(idea).split(" ")
    if tokens == [""]:
        return []

    words = [t for t in tokens if _is_candidate_word(t)]
    phrases = _bigrams(tokens)

    return _dedupe(words + phrases)[:MAX_KEYWORDS]


def exclude_terms(keywords: Iterable[str], excluded: Iterable[str]) -> List[str]:
    """Drop every keyword equal (case-insensitively) to an excluded term."""
    blocked = {e.lower() for e in excluded}
    return [k for k in keywords if k.lower() not in blocked]


def fallback_keyword(idea: str, excluded: Iterable[str] = ()) -> str:
    """Pick a single search term when extraction left nothing usable.

    The first whitespace-delimited word of the lower-cased idea that is
    longer than three characters and not excluded; ``"app"`` otherwise.
    """
    blocked = {e.lower() for e in excluded}
    for word in (idea or "").lower().split():
        if len(word) > 3 and word not in blocked:
            return word
    return FALLBACK_KEYWORD


def resolve_keywords(
    idea: str,
    supplied: Optional[Iterable[str]] = None,
    excluded: Iterable[str] = (),
) -> List[str]:
    """Return the final search keywords for an idea.

    Caller-supplied keywords win over extraction; repeats of a keyword in
    another case are dropped, keeping the first spelling.  Excluded terms are then
    removed, and if nothing remains the deterministic fallback applies, so
    the result is never empty.
    """
    excluded = tuple(excluded)
    if supplied:
        candidates = _dedupe(supplied, key=str.lower)
    else:
        candidates = extract_keywords(idea)
    keywords = exclude_terms(candidates, excluded)[:MAX_KEYWORDS]

    if not keywords:
        keywords = [fallback_keyword(idea, excluded)]
        logger.info("[KEYWORDS] Extraction empty, falling back to %r", keywords[0])

    return keywords
