from .analysis import router as analysis_router
from .catalog import router as catalog_router

__all__ = ["analysis_router", "catalog_router"]
