"""End-to-end engine tests — two populations, reporting subset, display figures."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
from datetime import date, timedelta
from unittest.mock import patch

import pytest

from idea_analyzer.schemas.competitor_schema import CompetitorRecord, ScoredCompetitor
from idea_analyzer.schemas.idea_schema import IdeaInput
from idea_analyzer.services.analysis_orchestrator import (
    analyze_idea,
    reporting_subset,
    score_competitors,
)
from idea_analyzer.services.catalog_provider import CatalogError
from idea_analyzer.services.scoring_engine import NO_COMPETITORS_EXPLANATION

TODAY = date(2024, 1, 1)


class FakeCatalog:
    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.terms = []

    async def search(self, term, limit, full_detail=True, country=None):
        self.terms.append(term)
        if self.error:
            raise self.error
        return list(self.records)


def _record(app_id, **overrides):
    data = {
        "id": app_id,
        "title": f"App {app_id}",
        "developer_name": "Example Studio",
        "rating": 4.0,
        "total_installs": 1_000_000,
        "review_count": 5_000,
        "released": (TODAY - timedelta(days=1000)).isoformat(),
        "url": f"https://play.google.com/store/apps/details?id={app_id}",
    }
    data.update(overrides)
    return CompetitorRecord(**data)


def _run(catalog, **kwargs):
    kwargs.setdefault("today", TODAY)
    return asyncio.run(analyze_idea(catalog, "Build a recipe sharing app for home cooks", **kwargs))


class TestTwoPopulations:
    def setup_method(self):
        self.catalog = FakeCatalog([
            _record("low"),
            _record("mid"),
            _record("high", contains_ads=True),
        ])
        self.similarities = {"low": 5, "mid": 40, "high": 80}

    def _analyze(self):
        with patch(
            "idea_analyzer.services.analysis_orchestrator.similarity_index",
            side_effect=lambda idea, comp: self.similarities[comp.id],
        ):
            return _run(self.catalog, keywords=["recipe"])

    def test_listing_is_filtered_and_sorted(self):
        report = self._analyze()
        assert [c.id for c in report.competitors] == ["high", "mid"]
        assert [c.similarity_index for c in report.competitors] == [80, 40]
        assert [c.rank for c in report.competitors] == [0, 1]
        assert report.competitors_count == 2
        assert report.total_products_count == 2

    def test_score_uses_full_population(self):
        report = self._analyze()
        # competition sub-score for 3 records is 80 (2 records would give 90 → 55)
        assert report.idea_score == 54
        assert report.market_insights.competition_level == "Low"
        assert report.market_insights.market_maturity == "Mature"
        assert "Found 3 competitors" in report.score_explanation

    def test_display_figures_use_subset(self):
        report = self._analyze()
        assert report.avg_similarity_index == 60
        assert report.highest_similarity_index == 80
        assert report.market_insights.total_apps == 2
        assert report.market_insights.contains_iap_percentage == 50
        assert report.market_insights.avg_last_30_days_installs == 50_000
        assert report.competitors[0].contains_iap is True
        assert report.competitors[0].publisher == "Example Studio"
        assert report.competitors[0].last_30_days_installs == 50_000

    def test_keywords_echoed(self):
        report = self._analyze()
        assert report.keywords == ["recipe"]
        assert self.catalog.terms == ["recipe"]


class TestKeywordResolution:
    def test_extracted_keywords_drive_queries(self):
        catalog = FakeCatalog()
        report = _run(catalog)
        assert report.keywords == ["recipe", "sharing", "home", "cooks", "recipe sharing", "home cooks"]
        assert catalog.terms == report.keywords

    def test_generic_only_idea_falls_back(self):
        catalog = FakeCatalog()
        report = asyncio.run(analyze_idea(catalog, "The game", today=TODAY))
        assert report.keywords == ["app"]
        assert catalog.terms == ["app"]

    def test_repeated_keywords_queried_once(self):
        catalog = FakeCatalog()
        report = asyncio.run(
            analyze_idea(catalog, "chess trainer", keywords=["chess", "Chess", "chess"], today=TODAY)
        )
        assert report.keywords == ["chess"]
        assert catalog.terms == ["chess"]

    def test_genre_appended_to_queries(self):
        catalog = FakeCatalog()
        _run(catalog, keywords=["recipe"], genre="Food & Drink")
        assert catalog.terms == ["recipe Food & Drink"]


class TestEdgeCases:
    def test_no_competitors(self):
        report = _run(FakeCatalog(), keywords=["recipe"])
        assert report.idea_score == 100
        assert report.competitors == []
        assert report.avg_similarity_index == 0
        assert report.highest_similarity_index == 0
        assert report.market_insights.contains_iap_percentage == 0
        assert report.market_insights.competition_level == "None"
        assert report.score_explanation == NO_COMPETITORS_EXPLANATION

    def test_catalog_failure_propagates(self):
        with pytest.raises(CatalogError):
            _run(FakeCatalog(error=CatalogError("rate limited")), keywords=["recipe"])

    def test_duplicate_ids_listed_once(self):
        catalog = FakeCatalog([_record("same", title="recipe sharing cooks")])
        report = _run(catalog, keywords=["recipe", "cooks"])
        assert [c.id for c in report.competitors] == ["same"]


class TestSubsetHelpers:
    def test_ties_keep_aggregation_order(self):
        base = {"estimated_recent_installs": 0}
        scored = [
            ScoredCompetitor(id="a", similarity_index=30, **base),
            ScoredCompetitor(id="b", similarity_index=50, **base),
            ScoredCompetitor(id="c", similarity_index=30, **base),
            ScoredCompetitor(id="d", similarity_index=9, **base),
        ]
        assert [c.id for c in reporting_subset(scored)] == ["b", "a", "c"]

    def test_score_competitors_preserves_order(self):
        idea = IdeaInput(raw_text="recipe sharing", keywords=["recipe"])
        records = [_record("one", title="Recipe sharing"), _record("two", title="Chess")]
        scored = score_competitors(idea, records, TODAY)
        assert [s.id for s in scored] == ["one", "two"]
        assert scored[0].similarity_index > scored[1].similarity_index
        assert scored[0].estimated_recent_installs == 50_000
