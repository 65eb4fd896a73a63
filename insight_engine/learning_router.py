"""
Learning API Router

FastAPI routes for running the learning engine and reading its latest
persisted model:
- POST /learning/analyze
- GET  /learning/model
- GET  /learning/patterns
- GET  /learning/insights
- GET  /learning/report
- GET  /learning/statistics

Every analyze request runs a fresh LearningEngine.
"""

import logging
from typing import Optional, List, Any

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from .insights_report import generate_insights_report
from .learning_engine import LearningEngine
from .learning_model import InsightType, LearningModel, PatternType
from .learning_store import LearningStore, get_learning_store

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logger = logging.getLogger("learning_router")

# -----------------------------------------------------------------------------
# Router Setup
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/learning", tags=["Learning & Predictive Insights"])


# -----------------------------------------------------------------------------
# Request Models
# -----------------------------------------------------------------------------
class AnalyzeRequest(BaseModel):
    """
    Snapshot history to learn from, oldest first.

    Items are not validated here; the engine drops malformed ones with a warning.
    """
    snapshots: List[Any] = Field(default_factory=list)
    persist: bool = True


def _require_latest_model(store: LearningStore) -> LearningModel:
    model = store.get_latest_model()
    if model is None:
        raise HTTPException(status_code=404, detail="No learning model available yet")
    return model


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.post("/analyze")
async def analyze_endpoint(
    request: AnalyzeRequest,
    store: LearningStore = Depends(get_learning_store),
):
    """
    Run a learning pass over the submitted snapshots.

    Malformed snapshots are dropped and reported in `warnings`.
    """
    engine = LearningEngine()
    model = engine.learn_from_history(request.snapshots)

    if request.persist:
        try:
            store.record_model(model)
            store.export_yaml(model)
        except OSError as e:
            logger.error(f"Failed to persist learning model: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to persist learning model: {str(e)}")

    return {
        "endpoint": "learning/analyze",
        "persisted": request.persist,
        "model": model.to_dict(),
    }


@router.get("/model")
async def model_endpoint(store: LearningStore = Depends(get_learning_store)):
    """Get the latest persisted learning model."""
    model = _require_latest_model(store)
    return {
        "endpoint": "learning/model",
        "model": model.to_dict(),
    }


@router.get("/patterns")
async def patterns_endpoint(
    pattern_type: Optional[PatternType] = None,
    limit: int = Query(default=100, ge=1),
    store: LearningStore = Depends(get_learning_store),
):
    """Get patterns of the latest model, optionally filtered by type."""
    model = _require_latest_model(store)
    patterns = [
        p for p in model.patterns
        if pattern_type is None or p.pattern_type == pattern_type.value
    ][:limit]
    return {
        "endpoint": "learning/patterns",
        "patterns": [p.to_dict() for p in patterns],
        "count": len(patterns),
    }


@router.get("/insights")
async def insights_endpoint(
    insight_type: Optional[InsightType] = None,
    limit: int = Query(default=100, ge=1),
    store: LearningStore = Depends(get_learning_store),
):
    """Get insights of the latest model, optionally filtered by type."""
    model = _require_latest_model(store)
    insights = [
        i for i in model.insights
        if insight_type is None or i.insight_type == insight_type.value
    ][:limit]
    return {
        "endpoint": "learning/insights",
        "insights": [i.to_dict() for i in insights],
        "count": len(insights),
    }


@router.get("/report", response_class=PlainTextResponse)
async def report_endpoint(store: LearningStore = Depends(get_learning_store)):
    """Markdown insights report of the latest model."""
    model = _require_latest_model(store)
    return PlainTextResponse(generate_insights_report(model), media_type="text/markdown")


@router.get("/statistics")
async def statistics_endpoint(store: LearningStore = Depends(get_learning_store)):
    """Get learning store statistics."""
    return {
        "endpoint": "learning/statistics",
        **store.get_statistics(),
    }
