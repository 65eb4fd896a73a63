"""
Pytest configuration for Learning & Predictive Insight Engine tests.

This module provides:
1. Snapshot, task and issue record builders (camelCase JSON form)
2. Common fixtures for all tests
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from insight_engine.learning_store import LearningStore
from insight_engine.snapshot_schema import Snapshot


# -----------------------------------------------------------------------------
# Record Builders
# -----------------------------------------------------------------------------
def make_issue(issue_type: str = "slow_test", severity: str = "medium") -> Dict[str, Any]:
    """Build a raw issue record."""
    return {
        "type": issue_type,
        "severity": severity,
        "title": f"Issue: {issue_type}",
        "description": f"Detected {issue_type}",
        "location": "tests/suite.test.ts",
        "duration": 8000,
        "frequency": 2,
        "impact": "Slows down test suite",
        "recommendations": ["Investigate"],
        "metadata": {"suite": "main"},
    }


def make_task(
    task_id: str = "unit-tests",
    status: str = "healthy",
    average_duration: float = 500,
) -> Dict[str, Any]:
    """Build a raw task status record."""
    return {
        "taskId": task_id,
        "name": task_id.replace("-", " ").title(),
        "status": status,
        "lastRun": "2025-01-01T00:00:00Z",
        "successRate": 0.95,
        "averageDuration": average_duration,
        "issues": [],
        "recommendations": [],
    }


def make_snapshot(
    overall_score: float = 75,
    tasks: Optional[List[Dict[str, Any]]] = None,
    issues: Optional[List[Dict[str, Any]]] = None,
    timestamp: str = "2025-01-01T00:00:00Z",
) -> Dict[str, Any]:
    """Build a raw snapshot record."""
    return {
        "timestamp": timestamp,
        "overallHealth": {
            "overallScore": overall_score,
            "testReliability": 80,
            "performanceStability": 70,
            "memoryEfficiency": 85,
            "errorRate": 20,
            "hangingTestRate": 15,
            "averageTestDuration": 2500,
            "totalIssues": len(issues or []),
            "criticalIssues": 0,
        },
        "tasks": tasks if tasks is not None else [make_task()],
        "issues": issues if issues is not None else [],
        "trends": {
            "testDuration": "stable",
            "errorRate": "stable",
            "hangingTests": "improving",
        },
        "recommendations": [],
    }


def to_snapshots(records: List[Dict[str, Any]]) -> List[Snapshot]:
    """Validate raw records into Snapshot objects."""
    return [Snapshot.model_validate(r) for r in records]


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def declining_snapshots() -> List[Snapshot]:
    """Three snapshots with overall scores 90 -> 80 -> 70."""
    return to_snapshots([
        make_snapshot(overall_score=score, timestamp=f"2025-01-0{day}T00:00:00Z")
        for day, score in enumerate([90, 80, 70], start=1)
    ])


@pytest.fixture
def store(tmp_path: Path) -> LearningStore:
    """Create a learning store with temp files."""
    return LearningStore(
        models_file=tmp_path / "models.jsonl",
        yaml_file=tmp_path / "learning_model.yaml",
        report_file=tmp_path / "learning_insights.md",
    )
