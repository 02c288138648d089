"""Winning-score tests — step tables, classifiers, weights, explanation text."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, timedelta

from idea_analyzer.schemas.competitor_schema import CompetitorRecord
from idea_analyzer.schemas.score_schema import ScoringWeights
from idea_analyzer.services.scoring_engine import (
    NO_COMPETITORS_EXPLANATION,
    age_score,
    calculate_winning_score,
    competition_level,
    competition_score,
    format_number,
    installs_score,
    market_maturity,
    rating_score,
    reviews_score,
)

TODAY = date(2024, 1, 1)


def _population(n, **fields):
    return [CompetitorRecord(id=f"com.example.app{i}", **fields) for i in range(n)]


class TestEmptyPopulation:
    def test_new_market(self):
        result = calculate_winning_score([], today=TODAY)
        assert result.score == 100
        assert result.competition_level == "None"
        assert result.market_maturity == "New"
        assert result.explanation == NO_COMPETITORS_EXPLANATION
        assert result.avg_rating == 0
        assert result.avg_installs == 0
        assert result.avg_reviews == 0


class TestCrowdedMarket:
    def setup_method(self):
        self.population = _population(
            60,
            rating=4.7,
            total_installs=5_000_000,
            review_count=2_000_000,
            released="2015-01-01",
        )

    def test_score_and_labels(self):
        result = calculate_winning_score(self.population, today=TODAY)
        assert result.factor_scores.rating == 40
        assert result.factor_scores.installs == 40
        assert result.factor_scores.reviews == 30
        assert result.factor_scores.age == 40
        assert result.factor_scores.competition == 30
        assert result.score == 37
        assert result.competition_level == "Very High"
        assert result.market_maturity == "Mature"
        assert result.avg_age_days == 3287

    def test_explanation(self):
        text = calculate_winning_score(self.population, today=TODAY).explanation
        assert text.startswith("Very competitive market with strong existing players.")
        assert "Found 60 competitors with an average rating of 4.7/5" in text
        assert "approximately 5.0M total installs per app" in text
        assert "estimated 250.0K installs per app in the last 30 days" in text
        assert "average age of 9.0 years" in text
        assert "Existing apps have high ratings" in text
        assert "many installs, indicating proven demand" in text
        assert "mature market with long-established players" in text

    def test_very_high_competition_with_large_installs(self):
        population = _population(60, rating=4.7, total_installs=20_000_000)
        assert calculate_winning_score(population, today=TODAY).competition_level == "Very High"


class TestWeights:
    def setup_method(self):
        self.population = _population(
            1,
            rating=4.8,
            total_installs=50_000_000,
            review_count=2_000_000,
            released="2015-01-01",
        )

    def test_custom_weights_change_score_not_tier(self):
        weights = ScoringWeights(rating=0, installs=0, reviews=0, age=0, competition=1.0)
        result = calculate_winning_score(self.population, weights, today=TODAY)
        assert result.score == 90
        # tier still uses the reference 0.30/0.25/0.20/0.15/0.10 weights
        assert result.explanation.startswith("Challenging market with established competitors.")

    def test_score_clamped(self):
        weights = ScoringWeights(rating=1, installs=1, reviews=1, age=1, competition=1)
        assert calculate_winning_score(self.population, weights, today=TODAY).score == 100


class TestOpenMarket:
    def test_positive_insights(self):
        population = [
            CompetitorRecord(
                id="com.example.tiny",
                rating=2.0,
                total_installs=1_000,
                review_count=10,
                released=(TODAY - timedelta(days=100)).isoformat(),
            )
        ]
        result = calculate_winning_score(population, today=TODAY)
        assert result.explanation.startswith("Great opportunity!")
        assert "relatively low ratings" in result.explanation
        assert "relatively few installs" in result.explanation
        assert "relatively new market" in result.explanation
        assert result.competition_level == "Low"
        assert result.market_maturity == "New"


class TestAverages:
    def test_missing_rating_counts_as_zero(self):
        population = [
            CompetitorRecord(id="a", rating=4.0),
            CompetitorRecord(id="b"),
        ]
        assert calculate_winning_score(population, today=TODAY).avg_rating == 2.0

    def test_age_mean_only_over_dated_records(self):
        population = [
            CompetitorRecord(id="a", released=(TODAY - timedelta(days=365)).isoformat()),
            CompetitorRecord(id="b"),
            CompetitorRecord(id="c", released="garbage"),
        ]
        assert calculate_winning_score(population, today=TODAY).avg_age_days == 365


class TestStepTables:
    def test_rating(self):
        assert rating_score(0) == 100
        assert rating_score(4.5) == 40
        assert rating_score(4.49) == 50
        assert rating_score(3.0) == 70
        assert rating_score(2.4) == 90

    def test_installs(self):
        assert installs_score(0) == 100
        assert installs_score(10_000_000) == 30
        assert installs_score(500_000) == 50
        assert installs_score(9_999) == 90

    def test_reviews(self):
        assert reviews_score(0) == 100
        assert reviews_score(1_000_000) == 30
        assert reviews_score(100) == 90
        assert reviews_score(99) == 95

    def test_age(self):
        assert age_score(0) == 100
        assert age_score(2190) == 40
        assert age_score(90) == 85
        assert age_score(89) == 90

    def test_competition(self):
        assert competition_score(0) == 100
        assert competition_score(1) == 90
        assert competition_score(3) == 80
        assert competition_score(19) == 60
        assert competition_score(50) == 30


class TestClassifiers:
    def test_competition_level(self):
        assert competition_level(20, 1_000_000, 4.0) == "Very High"
        assert competition_level(10, 600_000, 3.6) == "High"
        assert competition_level(5, 100_000, 1.0) == "Medium"
        assert competition_level(4, 10_000_000, 5.0) == "Low"
        assert competition_level(0, 0, 0) == "None"

    def test_market_maturity(self):
        assert market_maturity(1460, 0) == "Mature"
        assert market_maturity(0, 1_000_000) == "Mature"
        assert market_maturity(730, 0) == "Established"
        assert market_maturity(0, 10_000) == "Growing"
        assert market_maturity(100, 5_000) == "New"


class TestFormatNumber:
    def test_suffixes(self):
        assert format_number(2_000_000_000) == "2.0B"
        assert format_number(1_500_000) == "1.5M"
        assert format_number(1_234) == "1.2K"
        assert format_number(999) == "999"
        assert format_number(12.5) == "12.5"
