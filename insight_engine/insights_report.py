"""
Insights Report

Renders a LearningModel as a human-readable Markdown report:
risk alerts, opportunities and identified patterns. Empty sections are
omitted.
"""

from datetime import datetime, timezone
from typing import List, Optional

from .learning_model import Insight, InsightType, LearningModel


def _percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def _bullets(items, indent: str = "  ") -> List[str]:
    return [f"{indent}- {item}" for item in items]


def generate_insights_report(model: LearningModel, generated_at: Optional[str] = None) -> str:
    """
    Build the Markdown insights report for a model.

    Args:
        model: Learning model to render
        generated_at: ISO timestamp for the header (defaults to now, UTC)
    """
    generated_at = generated_at or datetime.now(timezone.utc).isoformat()
    lines = [
        "# Learning Analysis Insights Report",
        "",
        f"**Generated:** {generated_at}",
        f"**Model Version:** {model.version}",
        f"**Accuracy:** {_percent(model.accuracy)}",
        "",
    ]

    risk_alerts = _insights_of_type(model, InsightType.RISK_ALERT)
    if risk_alerts:
        lines += ["## 🚨 Risk Alerts", ""]
        for insight in risk_alerts:
            lines += [
                f"### {insight.title}",
                f"- **Confidence:** {_percent(insight.confidence)}",
                f"- **Probability:** {_percent(insight.probability)}",
                f"- **Impact:** {insight.impact}",
                f"- **Description:** {insight.description}",
                "- **Recommendations:**",
                *_bullets(insight.recommendations),
                "",
            ]

    opportunities = _insights_of_type(model, InsightType.OPPORTUNITY)
    if opportunities:
        lines += ["## 💡 Opportunities", ""]
        for insight in opportunities:
            lines += [
                f"### {insight.title}",
                f"- **Confidence:** {_percent(insight.confidence)}",
                f"- **Expected Impact:** {insight.impact}",
                f"- **Description:** {insight.description}",
                "- **Recommendations:**",
                *_bullets(insight.recommendations),
                "",
            ]

    if model.patterns:
        lines += ["## 🔍 Identified Patterns", ""]
        for pattern in model.patterns:
            lines += [
                f"### {pattern.description}",
                f"- **Type:** {pattern.pattern_type}",
                f"- **Confidence:** {_percent(pattern.confidence)}",
                f"- **Impact:** {pattern.impact}",
                f"- **Actionability:** {pattern.actionability}",
                f"- **Prediction:** {pattern.prediction}",
                "- **Evidence:**",
                *_bullets(pattern.evidence),
                "",
            ]

    return "\n".join(lines) + "\n"


def _insights_of_type(model: LearningModel, insight_type: InsightType) -> List[Insight]:
    return [i for i in model.insights if i.insight_type == insight_type.value]
