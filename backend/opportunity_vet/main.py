import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .config import get_settings
from .constants import CREDIBILITY_TIERS
from .routers.decision import router as decision_router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    logger.info("Starting Opportunity Vet decision core")
    logger.info("   Credibility table: %d domains", len(CREDIBILITY_TIERS))
    logger.info(
        "   Coverage targets: evidence=%d competitors=%d domains=%d",
        settings.evidence_target, settings.competitor_target, settings.domain_diversity_min,
    )

    yield

    logger.info("Shutting down Opportunity Vet decision core")


app = FastAPI(
    title="Opportunity Vet — Deterministic Decision Core",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(decision_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Opportunity Vet",
        "version": "0.1.0",
        "description": "Deterministic Go/No-Go decisions over model-gathered evidence",
        "docs": "/docs",
        "endpoints": {
            "decide": "POST /decide - Consolidate evidence and enforce kill rules",
            "credibility": "POST /credibility - Credibility tier per URL",
            "health": "GET /decide/health - Service health check"
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
        "service": "opportunity-vet",
        "version": "0.1.0"
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if get_settings().debug else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "opportunity_vet.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
