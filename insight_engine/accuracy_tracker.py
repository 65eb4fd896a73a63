"""
Model Accuracy Tracker

Self-reported accuracy of a learning run.

This is a HEURISTIC proxy: the share of patterns whose confidence exceeds
HIGH_CONFIDENCE_THRESHOLD. It is NOT validated against future outcomes.
"""

from dataclasses import dataclass
from typing import Sequence

from .learning_model import Pattern

HIGH_CONFIDENCE_THRESHOLD = 0.7


@dataclass(frozen=True)
class AccuracySummary:
    """Accuracy figures for one pattern set."""
    accuracy: float
    total_predictions: int
    correct_predictions: int


class ModelAccuracyTracker:
    """Scores a pattern set by its confidence distribution."""

    def __init__(self, threshold: float = HIGH_CONFIDENCE_THRESHOLD):
        self._threshold = threshold

    def score(self, patterns: Sequence[Pattern]) -> AccuracySummary:
        total = len(patterns)
        correct = sum(1 for p in patterns if p.confidence > self._threshold)
        return AccuracySummary(
            accuracy=correct / total if total > 0 else 0.0,
            total_predictions=total,
            correct_predictions=correct,
        )
