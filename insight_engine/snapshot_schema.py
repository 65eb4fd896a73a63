"""
Snapshot Schema

Pydantic models for one historical health/test-monitoring snapshot.

JSON keys are camelCase (as written by the monitoring pipeline); Python
attributes are snake_case. Validation failures raise
pydantic.ValidationError, which the learning engine turns into a dropped
record plus a warning.
"""

from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------
class TaskHealthStatus(str, Enum):
    """Health status of a monitored task."""
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class IssueType(str, Enum):
    """Kinds of detected issues."""
    HANGING_TEST = "hanging_test"
    SLOW_TEST = "slow_test"
    MEMORY_LEAK = "memory_leak"
    CPU_SPIKE = "cpu_spike"
    ERROR_PATTERN = "error_pattern"
    PERFORMANCE_REGRESSION = "performance_regression"


class IssueSeverity(str, Enum):
    """Severity of a detected issue."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class _SnapshotRecord(BaseModel):
    """Base for snapshot records: immutable, accepts alias or field name."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)


# -----------------------------------------------------------------------------
# Snapshot Parts
# -----------------------------------------------------------------------------
class OverallHealth(_SnapshotRecord):
    """Aggregate health metrics of one snapshot."""
    overall_score: float = Field(alias="overallScore")
    test_reliability: float = Field(alias="testReliability")
    performance_stability: float = Field(alias="performanceStability")
    memory_efficiency: float = Field(alias="memoryEfficiency")
    error_rate: float = Field(alias="errorRate")
    hanging_test_rate: float = Field(alias="hangingTestRate")
    average_test_duration: float = Field(alias="averageTestDuration")
    total_issues: int = Field(alias="totalIssues")
    critical_issues: int = Field(alias="criticalIssues")


class Issue(_SnapshotRecord):
    """A detected issue."""
    issue_type: IssueType = Field(alias="type")
    severity: IssueSeverity
    title: str
    description: str
    location: str
    duration: Optional[float] = None
    frequency: int
    impact: str
    recommendations: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class TaskStatus(_SnapshotRecord):
    """Status of one monitored task."""
    task_id: str = Field(alias="taskId")
    name: str
    status: TaskHealthStatus
    last_run: Optional[str] = Field(default=None, alias="lastRun")
    success_rate: float = Field(alias="successRate", ge=0.0, le=1.0)
    average_duration: float = Field(alias="averageDuration")  # ms
    issues: List[Issue] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class SnapshotTrends(_SnapshotRecord):
    """Descriptive trend directions; never derived by the engine."""
    test_duration: str = Field(alias="testDuration")
    error_rate: str = Field(alias="errorRate")
    hanging_tests: str = Field(alias="hangingTests")


# -----------------------------------------------------------------------------
# Snapshot
# -----------------------------------------------------------------------------
class Snapshot(_SnapshotRecord):
    """
    One recorded observation of system health.

    Immutable once produced.
    """
    timestamp: str
    overall_health: OverallHealth = Field(alias="overallHealth")
    tasks: List[TaskStatus]
    issues: List[Issue]
    trends: SnapshotTrends
    recommendations: List[str] = Field(default_factory=list)
