"""
Insight Generator

Turns mined patterns plus the snapshot history into predictive insights.

Four independent passes, each may emit zero or more insights:
1. Risk alerts (one per critical-impact pattern)
2. Opportunities (one per optimization pattern)
3. Trend analysis (slope of the overall health score)
4. Anomaly detection (latest score vs. mean of prior scores)
"""

import logging
from typing import List, Sequence

from .learning_model import (
    Actionability,
    Impact,
    Insight,
    InsightType,
    Pattern,
    PatternType,
    freeze_mapping,
)
from .snapshot_schema import Snapshot
from .trend_calculator import TrendCalculator

logger = logging.getLogger("insight_generator")


MIN_SNAPSHOTS_FOR_TREND = 3
MIN_SNAPSHOTS_FOR_ANOMALY = 3
ANOMALY_DEVIATION_THRESHOLD = 0.2

OPPORTUNITY_PROBABILITY = 0.8
TREND_PROBABILITY = 0.7
ANOMALY_PROBABILITY = 0.9

RISK_RECOMMENDATIONS = (
    "Address immediately to prevent system failure",
    "Implement monitoring for early detection",
    "Create contingency plans",
)

OPPORTUNITY_RECOMMENDATIONS = (
    "Profile the identified task for bottlenecks",
    "Implement caching where appropriate",
    "Consider parallelization opportunities",
    "Set performance budgets",
)

ANOMALY_RECOMMENDATIONS = (
    "Investigate recent changes immediately",
    "Check for new issues or resolved problems",
    "Review monitoring data for root cause",
)


class InsightGenerator:
    """Generates predictive insights from patterns and snapshots."""

    def generate(
        self,
        patterns: Sequence[Pattern],
        snapshots: Sequence[Snapshot],
    ) -> List[Insight]:
        """Run all insight passes. There is no cap on the insight count."""
        insights: List[Insight] = []
        insights.extend(self._generate_risk_alerts(patterns))
        insights.extend(self._generate_opportunities(patterns))
        insights.extend(self._generate_trend_analysis(snapshots))
        insights.extend(self._generate_anomaly_detection(snapshots))

        logger.debug(f"Generated {len(insights)} insights from {len(patterns)} patterns")
        return insights

    def _generate_risk_alerts(self, patterns: Sequence[Pattern]) -> List[Insight]:
        return [
            Insight(
                insight_id=f"risk-{pattern.pattern_id}",
                insight_type=InsightType.RISK_ALERT.value,
                title=f"Critical Risk: {pattern.description}",
                description=pattern.prediction,
                confidence=pattern.confidence,
                probability=pattern.confidence,
                timeframe=Actionability.IMMEDIATE.value,
                impact=Impact.CRITICAL.value,
                recommendations=RISK_RECOMMENDATIONS,
                supporting_data=freeze_mapping({
                    "pattern_type": pattern.pattern_type,
                    "evidence": list(pattern.evidence),
                    "actionability": pattern.actionability,
                }),
            )
            for pattern in patterns
            if pattern.impact == Impact.CRITICAL.value
        ]

    def _generate_opportunities(self, patterns: Sequence[Pattern]) -> List[Insight]:
        # Probability is fixed, not derived from the pattern confidence
        return [
            Insight(
                insight_id=f"opportunity-{pattern.pattern_id}",
                insight_type=InsightType.OPPORTUNITY.value,
                title=f"Optimization Opportunity: {pattern.description}",
                description=pattern.prediction,
                confidence=pattern.confidence,
                probability=OPPORTUNITY_PROBABILITY,
                timeframe=Actionability.SHORT_TERM.value,
                impact=Impact.MEDIUM.value,
                recommendations=OPPORTUNITY_RECOMMENDATIONS,
                supporting_data=freeze_mapping({
                    "pattern_type": pattern.pattern_type,
                    "evidence": list(pattern.evidence),
                    "expected_improvement": pattern.prediction,
                }),
            )
            for pattern in patterns
            if pattern.pattern_type == PatternType.OPTIMIZATION_OPPORTUNITY.value
        ]

    def _generate_trend_analysis(self, snapshots: Sequence[Snapshot]) -> List[Insight]:
        """
        Health trend insight.

        Recomputes the slope directly instead of reading the
        performance-trend pattern, so it is emitted even for flat series.
        """
        if len(snapshots) < MIN_SNAPSHOTS_FOR_TREND:
            return []

        health_scores = [s.overall_health.overall_score for s in snapshots]
        slope = TrendCalculator.slope(health_scores)
        improving = slope > 0

        return [Insight(
            insight_id="trend-health",
            insight_type=InsightType.TREND_ANALYSIS.value,
            title="Health Trend Analysis",
            description=(
                f"Project health is {'improving' if improving else 'degrading'} "
                f"with a slope of {slope:.3f}"
            ),
            confidence=abs(slope),
            probability=TREND_PROBABILITY,
            timeframe=Actionability.LONG_TERM.value,
            impact=Impact.HIGH.value,
            recommendations=(
                "Continue current practices" if improving else "Review recent changes for negative impact",
                "Monitor trend closely",
                "Set health score targets",
            ),
            supporting_data=freeze_mapping({
                "trend_slope": slope,
                "health_scores": health_scores,
                "prediction": TrendCalculator.predict_next(health_scores),
            }),
        )]

    def _generate_anomaly_detection(self, snapshots: Sequence[Snapshot]) -> List[Insight]:
        """Flag the latest health score if it deviates > 20% from the prior mean."""
        if len(snapshots) < MIN_SNAPSHOTS_FOR_ANOMALY:
            return []

        previous_scores = [s.overall_health.overall_score for s in snapshots[:-1]]
        current_score = snapshots[-1].overall_health.overall_score
        average_score = sum(previous_scores) / len(previous_scores)

        if average_score == 0:
            logger.debug("Prior mean health score is 0, skipping anomaly detection")
            return []

        deviation = abs(current_score - average_score) / average_score
        if deviation <= ANOMALY_DEVIATION_THRESHOLD:
            return []

        return [Insight(
            insight_id="anomaly-health-score",
            insight_type=InsightType.ANOMALY_DETECTION.value,
            title="Anomaly Detected: Health Score Deviation",
            description=(
                f"Current health score ({current_score:g}) deviates {deviation * 100:.1f}% "
                f"from average ({average_score:.1f})"
            ),
            confidence=min(deviation, 1.0),
            probability=ANOMALY_PROBABILITY,
            timeframe=Actionability.IMMEDIATE.value,
            impact=Impact.HIGH.value,
            recommendations=ANOMALY_RECOMMENDATIONS,
            supporting_data=freeze_mapping({
                "current_score": current_score,
                "average_score": average_score,
                "deviation": deviation,
                "previous_scores": previous_scores,
            }),
        )]
