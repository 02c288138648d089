"""Competitor aggregation tests — fan-out, ordering, dedup, fail-fast.

The catalog is replaced by an in-memory fake; no network access.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio

import pytest

from idea_analyzer.schemas.competitor_schema import CompetitorRecord
from idea_analyzer.services.catalog_provider import CatalogError
from idea_analyzer.services.competitor_aggregator import (
    aggregate_competitors,
    merge_batches,
    search_term,
)


class FakeCatalog:
    """Returns canned batches per term, optionally delayed or failing."""

    def __init__(self, batches, delays=None, failing=()):
        self.batches = batches
        self.delays = delays or {}
        self.failing = set(failing)
        self.calls = []

    async def search(self, term, limit, full_detail=True, country=None):
        self.calls.append((term, limit, full_detail, country))
        await asyncio.sleep(self.delays.get(term, 0))
        if term in self.failing:
            raise CatalogError(f"boom: {term}")
        return list(self.batches.get(term, []))


def _rec(app_id, title=""):
    return CompetitorRecord(id=app_id, title=title)


class TestMergeBatches:
    def test_first_seen_wins(self):
        merged = merge_batches([
            [_rec("x", "first"), _rec("y")],
            [_rec("x", "second"), _rec("z")],
        ])
        assert [r.id for r in merged] == ["x", "y", "z"]
        assert merged[0].title == "first"

    def test_empty(self):
        assert merge_batches([]) == []
        assert merge_batches([[], []]) == []


class TestAggregateCompetitors:
    def test_dedup_across_keywords(self):
        catalog = FakeCatalog({
            "recipe": [_rec("x", "first"), _rec("y")],
            "cooks": [_rec("x", "second"), _rec("z")],
        })
        merged = asyncio.run(aggregate_competitors(catalog, ["recipe", "cooks"]))
        assert [r.id for r in merged] == ["x", "y", "z"]
        assert merged[0].title == "first"

    def test_order_follows_keywords_not_arrival(self):
        catalog = FakeCatalog(
            {"slow": [_rec("a"), _rec("shared", "slow")], "fast": [_rec("shared", "fast"), _rec("b")]},
            delays={"slow": 0.05},
        )
        merged = asyncio.run(aggregate_competitors(catalog, ["slow", "fast"]))
        assert [r.id for r in merged] == ["a", "shared", "b"]
        assert merged[1].title == "slow"

    def test_genre_narrows_queries(self):
        catalog = FakeCatalog({})
        asyncio.run(
            aggregate_competitors(catalog, ["recipe", "cooks"], genre="Food", country="gb", limit=15)
        )
        assert catalog.calls == [
            ("recipe Food", 15, True, "gb"),
            ("cooks Food", 15, True, "gb"),
        ]

    def test_single_failure_fails_everything(self):
        catalog = FakeCatalog({"recipe": [_rec("x")]}, failing={"cooks"})
        with pytest.raises(CatalogError, match="cooks"):
            asyncio.run(aggregate_competitors(catalog, ["recipe", "cooks"]))

    def test_no_keywords(self):
        catalog = FakeCatalog({})
        assert asyncio.run(aggregate_competitors(catalog, [])) == []
        assert catalog.calls == []


class TestSearchTerm:
    def test_with_and_without_genre(self):
        assert search_term("chess") == "chess"
        assert search_term("chess", "Board") == "chess Board"
