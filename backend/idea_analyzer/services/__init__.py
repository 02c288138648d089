from .keyword_extractor import extract_keywords, resolve_keywords
from .similarity_scorer import similarity_index
from .installs_estimator import estimate_recent_installs
from .scoring_engine import calculate_winning_score
from .catalog_provider import CatalogError, CatalogNotFoundError, PlayStoreCatalog
from .competitor_aggregator import aggregate_competitors
from .analysis_orchestrator import analyze_idea

__all__ = [
    "extract_keywords",
    "resolve_keywords",
    "similarity_index",
    "estimate_recent_installs",
    "calculate_winning_score",
    "CatalogError",
    "CatalogNotFoundError",
    "PlayStoreCatalog",
    "aggregate_competitors",
    "analyze_idea",
]
