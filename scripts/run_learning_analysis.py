#!/usr/bin/env python3
"""
Learning Analysis Run

Loads historical analysis snapshots, learns patterns and predictive
insights, persists the model and writes the Markdown insights report.

Configuration (environment):
- ANALYSIS_DIR: snapshot directory (default fossils/tests/analysis)
- LEARNING_HISTORY_LIMIT: most recent snapshot files to load (default 10)
- LEARNING_DIR: output directory (default data/learning)
"""

import logging
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from insight_engine.insights_report import generate_insights_report  # noqa: E402
from insight_engine.learning_engine import LearningEngine  # noqa: E402
from insight_engine.learning_model import InsightType  # noqa: E402
from insight_engine.learning_store import LearningStore  # noqa: E402
from insight_engine.snapshot_loader import SnapshotLoader  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("run_learning_analysis")


def main() -> int:
    print("🧠 Starting learning analysis...\n")

    try:
        snapshots = SnapshotLoader().load()

        engine = LearningEngine()
        model = engine.learn_from_history(snapshots)

        store = LearningStore()
        store.record_model(model)
        yaml_path = store.export_yaml(model)
        report_path = store.write_report(generate_insights_report(model))

    except Exception as e:
        logger.exception(f"Learning analysis failed: {e}")
        print(f"❌ Learning analysis failed: {e}")
        return 1

    patterns = engine.get_patterns()
    insights = engine.get_insights()

    print("\n📊 Learning Analysis Complete!\n")
    print(f"Snapshots Analyzed: {model.snapshot_count}")
    print(f"Patterns Identified: {len(patterns)}")
    print(f"Predictive Insights: {len(insights)}")

    risk_alerts = [i for i in insights if i.insight_type == InsightType.RISK_ALERT.value]
    if risk_alerts:
        print(f"\n🚨 Risk Alerts: {len(risk_alerts)}")
        for alert in risk_alerts:
            print(f"  - {alert.title} ({alert.confidence * 100:.1f}% confidence)")

    opportunities = [i for i in insights if i.insight_type == InsightType.OPPORTUNITY.value]
    if opportunities:
        print(f"\n💡 Opportunities: {len(opportunities)}")
        for opportunity in opportunities:
            print(f"  - {opportunity.title} ({opportunity.confidence * 100:.1f}% confidence)")

    print(f"\n💾 Model saved to {yaml_path}")
    print(f"📄 Insights report saved to {report_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
