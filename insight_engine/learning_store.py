"""
Learning Store

Append-only persistence for learning models.

CONSTRAINTS:
- APPEND-ONLY: Model records are NEVER modified or deleted
- FSYNC: All JSONL writes are fsync'd for durability
- NO SIDE EFFECTS: Reading does not modify state

The store also keeps two derived artifacts, overwritten on each run:
- learning_model.yaml: the latest model as YAML
- learning_insights.md: the latest Markdown insights report
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml

from .learning_model import LearningModel

logger = logging.getLogger("learning_store")


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
STORAGE_DIR = Path(os.getenv("LEARNING_DIR", "data/learning"))
MODELS_FILE = STORAGE_DIR / "models.jsonl"
YAML_FILE = STORAGE_DIR / "learning_model.yaml"
REPORT_FILE = STORAGE_DIR / "learning_insights.md"


class LearningStore:
    """Append-only persistence for LearningModel records."""

    def __init__(
        self,
        models_file: Optional[Path] = None,
        yaml_file: Optional[Path] = None,
        report_file: Optional[Path] = None,
    ):
        """
        Initialize store.

        Args:
            models_file: Path to models JSONL file (optional, for testing)
            yaml_file: Path to latest-model YAML file (optional, for testing)
            report_file: Path to Markdown report file (optional, for testing)
        """
        self._models_file = models_file or MODELS_FILE
        self._yaml_file = yaml_file or YAML_FILE
        self._report_file = report_file or REPORT_FILE

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def record_model(self, model: LearningModel) -> None:
        """
        Record a learning model.

        APPEND-ONLY: Creates a new record, never modifies existing.
        """
        self._append_record(self._models_file, model.to_dict())
        logger.info(f"Recorded learning model {model.model_id} ({model.last_updated})")

    def export_yaml(self, model: LearningModel) -> Path:
        """Write the model as YAML, replacing the previous export."""
        self._yaml_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._yaml_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(model.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return self._yaml_file

    def write_report(self, report: str) -> Path:
        """Write the Markdown insights report, replacing the previous one."""
        self._report_file.parent.mkdir(parents=True, exist_ok=True)
        self._report_file.write_text(report, encoding="utf-8")
        return self._report_file

    # -------------------------------------------------------------------------
    # Read Operations (Read-Only)
    # -------------------------------------------------------------------------

    def get_recent_models(self, limit: int = 10) -> List[LearningModel]:
        """Get recent models, most recent first."""
        models = [LearningModel.from_dict(r) for r in self._read_records(self._models_file)]
        models.reverse()
        return models[:limit]

    def get_latest_model(self) -> Optional[LearningModel]:
        """Get the most recently recorded model."""
        models = self.get_recent_models(limit=1)
        return models[0] if models else None

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get learning statistics.

        Pattern and insight breakdowns describe the latest model.
        """
        records = self._read_records(self._models_file)
        latest = records[-1] if records else None

        by_pattern_type: Dict[str, int] = {}
        by_insight_type: Dict[str, int] = {}
        if latest:
            for pattern in latest.get("patterns", []):
                p_type = pattern.get("pattern_type", "unknown")
                by_pattern_type[p_type] = by_pattern_type.get(p_type, 0) + 1
            for insight in latest.get("insights", []):
                i_type = insight.get("insight_type", "unknown")
                by_insight_type[i_type] = by_insight_type.get(i_type, 0) + 1

        return {
            "model_count": len(records),
            "latest_updated": latest.get("last_updated") if latest else None,
            "latest_accuracy": latest.get("accuracy", 0.0) if latest else 0.0,
            "pattern_count": sum(by_pattern_type.values()),
            "insight_count": sum(by_insight_type.values()),
            "by_pattern_type": by_pattern_type,
            "by_insight_type": by_insight_type,
        }

    # -------------------------------------------------------------------------
    # Internal Helpers
    # -------------------------------------------------------------------------

    def _append_record(self, file_path: Path, record: Dict[str, Any]) -> None:
        """
        Append a record to a JSONL file with fsync.

        APPEND-ONLY: Only appends, never modifies.
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'a', encoding="utf-8") as f:
            f.write(json.dumps(record) + '\n')
            f.flush()
            os.fsync(f.fileno())

    def _read_records(self, file_path: Path) -> List[Dict[str, Any]]:
        """
        Read all records from a JSONL file.

        READ-ONLY: Does not modify state.
        """
        if not file_path.exists():
            return []

        records = []
        with open(file_path, 'r', encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    try:
                        records.append(json.loads(line))
                    except json.JSONDecodeError:
                        logger.warning(f"Skipping malformed record in {file_path.name}")
                        continue

        return records


# -----------------------------------------------------------------------------
# Module-Level Functions
# -----------------------------------------------------------------------------

# Singleton instance
_store: Optional[LearningStore] = None


def get_learning_store() -> LearningStore:
    """Get the learning store singleton."""
    global _store
    if _store is None:
        _store = LearningStore()
    return _store
