"""
Learning Model - Data Models

Frozen dataclasses and LOCKED enums for mined patterns, predictive
insights and the per-run learning model.

CONSTRAINTS:
- IMMUTABLE: Every record is frozen once created
- DETERMINISTIC IDS: Pattern and insight IDs derive from type + subject
- PER RUN: Records live for one learning run; persistence is external
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, Tuple

from . import MODEL_ID, MODEL_VERSION


# -----------------------------------------------------------------------------
# Pattern Type Enum (LOCKED - EXACTLY 4 VALUES)
# -----------------------------------------------------------------------------
class PatternType(str, Enum):
    """
    Families of mined patterns.

    This enum is LOCKED - EXACTLY 4 values.
    """
    ISSUE_CORRELATION = "issue_correlation"
    PERFORMANCE_TREND = "performance_trend"
    FAILURE_PREDICTION = "failure_prediction"
    OPTIMIZATION_OPPORTUNITY = "optimization_opportunity"


# -----------------------------------------------------------------------------
# Insight Type Enum (LOCKED - EXACTLY 4 VALUES)
# -----------------------------------------------------------------------------
class InsightType(str, Enum):
    """
    Families of predictive insights.

    This enum is LOCKED - EXACTLY 4 values.
    """
    RISK_ALERT = "risk_alert"
    OPPORTUNITY = "opportunity"
    TREND_ANALYSIS = "trend_analysis"
    ANOMALY_DETECTION = "anomaly_detection"


class Actionability(str, Enum):
    """How soon a pattern or insight calls for action."""
    IMMEDIATE = "immediate"
    SHORT_TERM = "short_term"
    LONG_TERM = "long_term"


class Impact(str, Enum):
    """Impact of a pattern or insight."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def freeze_mapping(data: Optional[Dict[str, Any]]) -> Tuple[Tuple[str, Any], ...]:
    """Convert a dict into immutable key-value pairs (lists become tuples)."""
    if not data:
        return ()
    return tuple(
        (key, tuple(value) if isinstance(value, list) else value)
        for key, value in data.items()
    )


def thaw_mapping(pairs: Tuple[Tuple[str, Any], ...]) -> Dict[str, Any]:
    """Inverse of freeze_mapping, JSON-safe."""
    return {
        key: list(value) if isinstance(value, tuple) else value
        for key, value in pairs
    }


# -----------------------------------------------------------------------------
# Pattern (Frozen - Immutable)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Pattern:
    """
    A regularity mined across snapshots.

    FROZEN: Immutable once created.
    Confidence is a heuristic strength in [0, 1], except for
    performance_trend patterns where it is the raw slope magnitude.
    """
    pattern_id: str
    pattern_type: str  # PatternType value
    confidence: float
    description: str
    prediction: str
    evidence: Tuple[str, ...]
    actionability: str  # Actionability value
    impact: str  # Impact value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern_id": self.pattern_id,
            "pattern_type": self.pattern_type,
            "confidence": self.confidence,
            "description": self.description,
            "prediction": self.prediction,
            "evidence": list(self.evidence),
            "actionability": self.actionability,
            "impact": self.impact,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        return cls(
            pattern_id=data["pattern_id"],
            pattern_type=data["pattern_type"],
            confidence=data["confidence"],
            description=data["description"],
            prediction=data["prediction"],
            evidence=tuple(data.get("evidence", [])),
            actionability=data["actionability"],
            impact=data["impact"],
        )


# -----------------------------------------------------------------------------
# Insight (Frozen - Immutable)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Insight:
    """
    A predictive, user-facing conclusion.

    FROZEN: Immutable once created.
    Derived from one or more patterns and/or the latest snapshot.
    """
    insight_id: str
    insight_type: str  # InsightType value
    title: str
    description: str
    confidence: float
    probability: float
    timeframe: str  # Actionability value
    impact: str  # Impact value
    recommendations: Tuple[str, ...]
    supporting_data: Tuple[Tuple[str, Any], ...]  # Immutable key-value pairs

    def to_dict(self) -> Dict[str, Any]:
        return {
            "insight_id": self.insight_id,
            "insight_type": self.insight_type,
            "title": self.title,
            "description": self.description,
            "confidence": self.confidence,
            "probability": self.probability,
            "timeframe": self.timeframe,
            "impact": self.impact,
            "recommendations": list(self.recommendations),
            "supporting_data": thaw_mapping(self.supporting_data),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Insight":
        return cls(
            insight_id=data["insight_id"],
            insight_type=data["insight_type"],
            title=data["title"],
            description=data["description"],
            confidence=data["confidence"],
            probability=data["probability"],
            timeframe=data["timeframe"],
            impact=data["impact"],
            recommendations=tuple(data.get("recommendations", [])),
            supporting_data=freeze_mapping(data.get("supporting_data", {})),
        )


# -----------------------------------------------------------------------------
# Learning Model (Frozen - Run Summary)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LearningModel:
    """
    Summary of one learning run.

    FROZEN: Immutable once created.
    INVARIANT: accuracy == correct_predictions / total_predictions,
    or 0.0 when total_predictions == 0.
    """
    model_id: str
    version: str
    last_updated: str  # ISO format
    patterns: Tuple[Pattern, ...]
    insights: Tuple[Insight, ...]
    accuracy: float
    total_predictions: int
    correct_predictions: int
    snapshot_count: int = 0
    warnings: Tuple[str, ...] = ()

    @property
    def self_reported_accuracy(self) -> float:
        """Confidence-distribution proxy, not a validated backtest."""
        return self.accuracy

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_id": self.model_id,
            "version": self.version,
            "last_updated": self.last_updated,
            "patterns": [p.to_dict() for p in self.patterns],
            "insights": [i.to_dict() for i in self.insights],
            "accuracy": self.accuracy,
            "total_predictions": self.total_predictions,
            "correct_predictions": self.correct_predictions,
            "snapshot_count": self.snapshot_count,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LearningModel":
        return cls(
            model_id=data.get("model_id", MODEL_ID),
            version=data.get("version", MODEL_VERSION),
            last_updated=data["last_updated"],
            patterns=tuple(Pattern.from_dict(p) for p in data.get("patterns", [])),
            insights=tuple(Insight.from_dict(i) for i in data.get("insights", [])),
            accuracy=data.get("accuracy", 0.0),
            total_predictions=data.get("total_predictions", 0),
            correct_predictions=data.get("correct_predictions", 0),
            snapshot_count=data.get("snapshot_count", 0),
            warnings=tuple(data.get("warnings", [])),
        )
