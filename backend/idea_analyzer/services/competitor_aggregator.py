"""Competitor Aggregator.

Fans one catalog query out per keyword, waits for all of them, then folds
the result batches into a single deduplicated competitor population.

Rules
-----
- All-or-nothing: any failed query fails the aggregation
- Merge order follows keyword order, never response arrival order
- First occurrence of an id wins
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from ..schemas.competitor_schema import CompetitorRecord

logger = logging.getLogger(__name__)


class CatalogSearch(Protocol):
    async def search(
        self,
        term: str,
        limit: int,
        full_detail: bool = True,
        country: Optional[str] = None,
    ) -> List[CompetitorRecord]: ...


def search_term(keyword: str, genre: Optional[str] = None) -> str:
    """Query text for one keyword, narrowed by the genre when given."""
    return f"{keyword} {genre}" if genre else keyword


def merge_batches(batches: Iterable[Sequence[CompetitorRecord]]) -> List[CompetitorRecord]:
    """Flatten *batches* in order, keeping the first record seen per id."""
    by_id: dict[str, CompetitorRecord] = {}
    order: list[str] = []
    for batch in batches:
        for record in batch:
            if record.id in by_id:
                continue
            by_id[record.id] = record
            order.append(record.id)
    return [by_id[app_id] for app_id in order]


async def aggregate_competitors(
    catalog: CatalogSearch,
    keywords: Sequence[str],
    genre: Optional[str] = None,
    country: Optional[str] = None,
    limit: int = 15,
) -> List[CompetitorRecord]:
    """Query the catalog once per keyword and return the merged population.

    Queries run concurrently.  If any of them fails, the first failure in
    keyword order is re-raised unchanged once all queries have settled.
    """
    if not keywords:
        return []

    terms = [search_term(kw, genre) for kw in keywords]
    logger.info("[AGGREGATE] Running %d catalog queries in parallel: %s", len(terms), terms)

    results = await asyncio.gather(
        *(catalog.search(term, limit, full_detail=True, country=country) for term in terms),
        return_exceptions=True,
    )

    for term, result in zip(terms, results):
        if isinstance(result, BaseException):
            logger.error("[AGGREGATE] Query %r failed: %s", term, result)
            raise result

    merged = merge_batches(results)
    logger.info(
        "[AGGREGATE] %d raw results → %d unique competitors",
        sum(len(r) for r in results), len(merged),
    )
    return merged
