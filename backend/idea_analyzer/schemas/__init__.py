# Schemas package
from .idea_schema import AnalyzeRequest, IdeaInput
from .competitor_schema import (
    AppDetail,
    CompetitorRecord,
    ScoredCompetitor,
    SearchHit,
    SearchResponse,
)
from .score_schema import FactorScores, ScoringWeights, WinningScoreResult
from .report_schema import AnalysisReport, CompetitorListing, MarketInsights

__all__ = [
    "AnalyzeRequest",
    "IdeaInput",
    "AppDetail",
    "CompetitorRecord",
    "ScoredCompetitor",
    "SearchHit",
    "SearchResponse",
    "FactorScores",
    "ScoringWeights",
    "WinningScoreResult",
    "AnalysisReport",
    "CompetitorListing",
    "MarketInsights",
]
