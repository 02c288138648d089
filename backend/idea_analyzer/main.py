import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    cors_origins,
    debug_enabled,
    default_country,
    load_scoring_weights,
    log_level,
    results_per_keyword,
)
from .logging_config import configure_logging
from .routes import analysis_router, catalog_router


# Load environment variables from .env file
load_dotenv()
configure_logging(log_level())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    weights = load_scoring_weights()
    logger.info("Starting Play Store Idea Analyzer")
    logger.info("   Default country: %s", default_country())
    logger.info("   Results per keyword: %d", results_per_keyword())
    logger.info(
        "   Weights: rating=%.2f installs=%.2f reviews=%.2f age=%.2f competition=%.2f",
        weights.rating, weights.installs, weights.reviews, weights.age, weights.competition,
    )

    yield

    logger.info("Shutting down Play Store Idea Analyzer")


app = FastAPI(
    title="Play Store Idea Analyzer",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)
app.include_router(catalog_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Play Store Idea Analyzer",
        "version": "0.1.0",
        "docs": "/docs",
        "endpoints": {
            "search": "GET /api/search?query=<searchTerm>",
            "app_details": "GET /api/app/<appId>",
            "analyze": "POST /api/analyze",
            "health": "GET /health",
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "play-idea-analyzer",
        "version": "0.1.0"
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and parameters as 400."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation Error",
            "message": "; ".join(messages),
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if debug_enabled() else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "idea_analyzer.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=debug_enabled(),
    )
