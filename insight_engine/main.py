"""
Insight Engine - FastAPI Application

Serves the learning & predictive insight endpoints.

Run with:
    uvicorn insight_engine.main:app
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI

from . import __version__, MODEL_ID
from .learning_router import router as learning_router

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("insight_engine")

app = FastAPI(
    title="Learning & Predictive Insight Engine",
    description="Patterns, predictive insights and self-reported accuracy from monitoring snapshots",
    version=__version__,
)
app.include_router(learning_router)


@app.get("/")
async def root():
    """Service identity."""
    return {
        "name": "insight-engine",
        "version": __version__,
        "model_id": MODEL_ID,
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
