"""
Learning Engine - Facade

Runs one learning pass over a snapshot history:

    idle -> loading -> mining -> generating -> scoring -> done

Each state is a single synchronous pass and none is skipped.

CONSTRAINTS:
- ONE ENGINE PER RUN: No module-level singleton, no shared mutable state
- DETERMINISTIC: Same snapshots = same patterns and insights
- NEVER FATAL: Malformed snapshots are dropped with a warning; the worst
  outcome is an empty model
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from . import MODEL_ID, MODEL_VERSION
from .accuracy_tracker import ModelAccuracyTracker
from .insight_generator import InsightGenerator
from .learning_model import Insight, LearningModel, Pattern
from .pattern_miner import PatternMiner
from .snapshot_schema import Snapshot

logger = logging.getLogger("learning_engine")

SnapshotInput = Union[Snapshot, Mapping[str, Any]]


# -----------------------------------------------------------------------------
# Engine State Enum (LOCKED - EXACTLY 6 VALUES)
# -----------------------------------------------------------------------------
class EngineState(str, Enum):
    """Lifecycle states of a learning run."""
    IDLE = "idle"
    LOADING = "loading"
    MINING = "mining"
    GENERATING = "generating"
    SCORING = "scoring"
    DONE = "done"


class LearningEngine:
    """
    Learning & Predictive Insight Engine.

    Construct one engine per run (or reuse it sequentially); results of
    the last completed run are available through get_patterns(),
    get_insights() and get_model().
    """

    def __init__(
        self,
        miner: Optional[PatternMiner] = None,
        generator: Optional[InsightGenerator] = None,
        tracker: Optional[ModelAccuracyTracker] = None,
        model_id: str = MODEL_ID,
        version: str = MODEL_VERSION,
    ):
        self._miner = miner or PatternMiner()
        self._generator = generator or InsightGenerator()
        self._tracker = tracker or ModelAccuracyTracker()
        self._model_id = model_id
        self._version = version

        self._state = EngineState.IDLE
        self._model: Optional[LearningModel] = None
        self._warnings: List[str] = []

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def warnings(self) -> List[str]:
        """Warnings recorded while loading the current or last run."""
        return list(self._warnings)

    # -------------------------------------------------------------------------
    # Main Entry Point
    # -------------------------------------------------------------------------

    def learn_from_history(self, snapshots: Iterable[SnapshotInput]) -> LearningModel:
        """
        Learn from a snapshot history ordered oldest -> newest.

        Args:
            snapshots: Snapshot objects or raw JSON-like mappings

        Returns:
            LearningModel with patterns, insights and accuracy
        """
        self._warnings = []

        self._transition(EngineState.LOADING)
        valid = self._load(snapshots)
        logger.info(f"Loaded {len(valid)} valid snapshots ({len(self._warnings)} dropped)")

        self._transition(EngineState.MINING)
        patterns = self._miner.mine(valid)

        self._transition(EngineState.GENERATING)
        insights = self._generator.generate(patterns, valid)

        self._transition(EngineState.SCORING)
        summary = self._tracker.score(patterns)

        self._model = LearningModel(
            model_id=self._model_id,
            version=self._version,
            last_updated=datetime.now(timezone.utc).isoformat(),
            patterns=tuple(patterns),
            insights=tuple(insights),
            accuracy=summary.accuracy,
            total_predictions=summary.total_predictions,
            correct_predictions=summary.correct_predictions,
            snapshot_count=len(valid),
            warnings=tuple(self._warnings),
        )

        self._transition(EngineState.DONE)
        logger.info(
            f"Learning complete: {len(patterns)} patterns, {len(insights)} insights, "
            f"accuracy {summary.accuracy:.2f}"
        )
        return self._model

    # -------------------------------------------------------------------------
    # Read Operations (Idempotent)
    # -------------------------------------------------------------------------

    def get_patterns(self) -> List[Pattern]:
        """Patterns of the last completed run."""
        return list(self._model.patterns) if self._model else []

    def get_insights(self) -> List[Insight]:
        """Insights of the last completed run."""
        return list(self._model.insights) if self._model else []

    def get_model(self) -> Optional[LearningModel]:
        """The last completed LearningModel, or None before the first run."""
        return self._model

    # -------------------------------------------------------------------------
    # Internal Helpers
    # -------------------------------------------------------------------------

    def _transition(self, new_state: EngineState) -> None:
        logger.debug(f"Engine state: {self._state.value} -> {new_state.value}")
        self._state = new_state

    def _load(self, snapshots: Iterable[SnapshotInput]) -> List[Snapshot]:
        """Validate inputs, dropping malformed records with a warning."""
        valid: List[Snapshot] = []
        for index, raw in enumerate(snapshots):
            if isinstance(raw, Snapshot):
                valid.append(raw)
                continue
            if not isinstance(raw, Mapping):
                self._warn(f"Snapshot {index} dropped: expected a mapping, got {type(raw).__name__}")
                continue
            try:
                valid.append(Snapshot.model_validate(raw))
            except ValidationError as e:
                self._warn(
                    f"Snapshot {index} dropped: {e.error_count()} validation error(s), "
                    f"first: {e.errors()[0]['loc']} {e.errors()[0]['msg']}"
                )
        return valid

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self._warnings.append(message)


# -----------------------------------------------------------------------------
# Module-Level Functions
# -----------------------------------------------------------------------------

def analyze_history(snapshots: Iterable[SnapshotInput]) -> LearningModel:
    """
    Run a learning pass over snapshots.

    Convenience function using a fresh engine.
    """
    return LearningEngine().learn_from_history(snapshots)
