"""
Pattern Miner

Scans the snapshot history (oldest -> newest) and emits Pattern records
across four families:
1. Issue correlation (issue types co-occurring in the same snapshot)
2. Performance trend (slope of the overall health score)
3. Failure prediction (tasks repeatedly in critical status)
4. Optimization opportunity (tasks repeatedly slower than 1s)

DETERMINISTIC: Same snapshots = same patterns.
NO ML: Frequency counts and a least-squares slope only.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from .learning_model import Actionability, Impact, Pattern, PatternType
from .snapshot_schema import Snapshot, TaskHealthStatus
from .trend_calculator import TrendCalculator

logger = logging.getLogger("pattern_miner")


# -----------------------------------------------------------------------------
# Thresholds
# -----------------------------------------------------------------------------
MIN_SNAPSHOTS_FOR_PATTERNS = 2
MIN_SNAPSHOTS_FOR_TREND = 3
MIN_CORRELATION_COUNT = 2
MIN_CRITICAL_COUNT = 2
MIN_SLOW_OBSERVATIONS = 2
TREND_SLOPE_THRESHOLD = 0.1
SLOW_TASK_THRESHOLD_MS = 1000


class PatternMiner:
    """Mines recurring patterns from a list of snapshots."""

    def mine(self, snapshots: Sequence[Snapshot]) -> List[Pattern]:
        """
        Identify patterns in the snapshot history.

        Fewer than 2 snapshots yields no patterns.
        Emission order is not significant.
        """
        if len(snapshots) < MIN_SNAPSHOTS_FOR_PATTERNS:
            logger.info(
                f"Need at least {MIN_SNAPSHOTS_FOR_PATTERNS} snapshots to identify patterns, "
                f"got {len(snapshots)}"
            )
            return []

        patterns: List[Pattern] = []
        patterns.extend(self._identify_issue_correlations(snapshots))
        patterns.extend(self._identify_performance_trends(snapshots))
        patterns.extend(self._identify_failure_patterns(snapshots))
        patterns.extend(self._identify_optimization_opportunities(snapshots))

        logger.debug(f"Mined {len(patterns)} patterns from {len(snapshots)} snapshots")
        return patterns

    # -------------------------------------------------------------------------
    # Issue Correlation
    # -------------------------------------------------------------------------

    def _identify_issue_correlations(self, snapshots: Sequence[Snapshot]) -> List[Pattern]:
        """
        Count ordered pairs of distinct issue types seen in the same snapshot.

        Counts are symmetric, so (A, B) and (B, A) are both emitted.
        """
        correlations: Dict[Tuple[str, str], int] = defaultdict(int)

        for snapshot in snapshots:
            issue_types = list(dict.fromkeys(i.issue_type.value for i in snapshot.issues))
            for first in issue_types:
                for second in issue_types:
                    if first != second:
                        correlations[(first, second)] += 1

        total = len(snapshots)
        patterns = []
        for (first, second), count in correlations.items():
            if count < MIN_CORRELATION_COUNT:
                continue
            patterns.append(Pattern(
                pattern_id=f"correlation-{first}-{second}",
                pattern_type=PatternType.ISSUE_CORRELATION.value,
                confidence=min(count / total, 1.0),
                description=f"Issues of type '{first}' often occur together with '{second}'",
                prediction=f"When {first} issues appear, expect {second} issues to follow",
                evidence=(f"Found {count} co-occurrences in {total} snapshots",),
                actionability=Actionability.IMMEDIATE.value,
                impact=Impact.MEDIUM.value,
            ))
        return patterns

    # -------------------------------------------------------------------------
    # Performance Trend
    # -------------------------------------------------------------------------

    def _identify_performance_trends(self, snapshots: Sequence[Snapshot]) -> List[Pattern]:
        """Detect a significant slope in the overall health score."""
        if len(snapshots) < MIN_SNAPSHOTS_FOR_TREND:
            return []

        scores = [s.overall_health.overall_score for s in snapshots]
        slope = TrendCalculator.slope(scores)
        if abs(slope) <= TREND_SLOPE_THRESHOLD:
            return []

        # Confidence is the raw slope magnitude and may exceed 1.0
        return [Pattern(
            pattern_id="performance-trend",
            pattern_type=PatternType.PERFORMANCE_TREND.value,
            confidence=abs(slope),
            description=f"Project health is {'improving' if slope > 0 else 'degrading'} over time",
            prediction=(
                f"If trend continues, health score will be "
                f"{TrendCalculator.predict_next(scores):.1f} in next analysis"
            ),
            evidence=(
                f"Health scores: {' → '.join(f'{s:g}' for s in scores)}",
                f"Trend slope: {slope:.3f}",
            ),
            actionability=(
                Actionability.LONG_TERM.value if slope > 0 else Actionability.IMMEDIATE.value
            ),
            impact=Impact.HIGH.value,
        )]

    # -------------------------------------------------------------------------
    # Failure Prediction
    # -------------------------------------------------------------------------

    def _identify_failure_patterns(self, snapshots: Sequence[Snapshot]) -> List[Pattern]:
        """Detect tasks that were critical in several snapshots."""
        critical_counts: Dict[str, int] = defaultdict(int)

        for snapshot in snapshots:
            for task in snapshot.tasks:
                if task.status == TaskHealthStatus.CRITICAL:
                    critical_counts[task.task_id] += 1

        total = len(snapshots)
        patterns = []
        for task_id, count in critical_counts.items():
            if count < MIN_CRITICAL_COUNT:
                continue
            confidence = count / total
            patterns.append(Pattern(
                pattern_id=f"failure-{task_id}",
                pattern_type=PatternType.FAILURE_PREDICTION.value,
                confidence=confidence,
                description=f"Task '{task_id}' has been critical in {count} out of {total} snapshots",
                prediction=f"Task '{task_id}' is likely to be critical in next analysis",
                evidence=(f"Critical status frequency: {confidence * 100:.1f}%",),
                actionability=Actionability.IMMEDIATE.value,
                impact=Impact.HIGH.value,
            ))
        return patterns

    # -------------------------------------------------------------------------
    # Optimization Opportunity
    # -------------------------------------------------------------------------

    def _identify_optimization_opportunities(self, snapshots: Sequence[Snapshot]) -> List[Pattern]:
        """Detect tasks that repeatedly take longer than SLOW_TASK_THRESHOLD_MS."""
        slow_tasks: Dict[str, List[float]] = defaultdict(list)

        for snapshot in snapshots:
            for task in snapshot.tasks:
                if task.average_duration > SLOW_TASK_THRESHOLD_MS:
                    slow_tasks[task.task_id].append(task.average_duration)

        total = len(snapshots)
        patterns = []
        for task_id, durations in slow_tasks.items():
            if len(durations) < MIN_SLOW_OBSERVATIONS:
                continue
            avg_duration = sum(durations) / len(durations)
            duration_slope = TrendCalculator.slope(durations)
            patterns.append(Pattern(
                pattern_id=f"optimization-{task_id}",
                pattern_type=PatternType.OPTIMIZATION_OPPORTUNITY.value,
                confidence=min(len(durations) / total, 1.0),
                description=f"Task '{task_id}' consistently takes {avg_duration:.0f}ms to complete",
                prediction=(
                    f"Optimizing '{task_id}' could improve overall performance "
                    f"by {avg_duration / 1000:.1f}s"
                ),
                evidence=(
                    f"Average duration: {avg_duration:.0f}ms",
                    f"Performance trend: {'degrading' if duration_slope > 0 else 'stable'}",
                    f"Occurred in {len(durations)} snapshots",
                ),
                actionability=Actionability.SHORT_TERM.value,
                impact=Impact.MEDIUM.value,
            ))
        return patterns
