"""
Learning & Predictive Insight Engine

Derives recurring patterns, predictive insights and a self-reported
accuracy score from a sequence of historical health/test-monitoring
snapshots.

Components:
- TrendCalculator: least-squares slope and next-value prediction
- PatternMiner: issue correlation, performance trend, failure prediction,
  optimization opportunity patterns
- InsightGenerator: risk alerts, opportunities, trend analysis, anomaly detection
- ModelAccuracyTracker: heuristic accuracy over the mined patterns
- LearningEngine: per-run facade (idle -> loading -> mining -> generating
  -> scoring -> done)

Collaborators:
- SnapshotLoader: reads snapshot files from the analysis directory
- LearningStore: append-only JSONL persistence with fsync, YAML export
- InsightsReport: Markdown insights report
- learning_router: FastAPI endpoints under /learning

Constraints:
- 100% deterministic: Same snapshots = same patterns and insights
- Frozen dataclass outputs (immutable after creation)
- Malformed snapshots are dropped with a warning, never fatal
- Insufficient data degrades silently to empty results
"""

__version__ = "1.0.0"

MODEL_ID = "monitoring-analysis-v1"
MODEL_VERSION = "1.0.0"
