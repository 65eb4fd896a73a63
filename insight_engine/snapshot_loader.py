"""
Snapshot Loader

Reads historical analysis snapshots from the analysis directory.

Files are `*.json`, sorted by name (timestamped names sort oldest first),
and only the most recent LEARNING_HISTORY_LIMIT are kept. A file may hold
the snapshot directly or wrapped as a fossil record whose `content` field
is the snapshot JSON string.

Schema validation is NOT done here; the learning engine validates and
drops malformed records during its loading step.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("snapshot_loader")


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------
ANALYSIS_DIR = Path(os.getenv("ANALYSIS_DIR", "fossils/tests/analysis"))
DEFAULT_HISTORY_LIMIT = 10


def history_limit_from_env() -> int:
    """Read LEARNING_HISTORY_LIMIT, falling back to the default on bad values."""
    raw = os.getenv("LEARNING_HISTORY_LIMIT")
    if raw is None:
        return DEFAULT_HISTORY_LIMIT
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Invalid LEARNING_HISTORY_LIMIT {raw!r}, using {DEFAULT_HISTORY_LIMIT}"
        )
        return DEFAULT_HISTORY_LIMIT


class SnapshotLoader:
    """Loads raw snapshot records from disk."""

    def __init__(
        self,
        analysis_dir: Optional[Path] = None,
        limit: Optional[int] = None,
    ):
        """
        Initialize loader.

        Args:
            analysis_dir: Directory holding snapshot files (optional, for testing)
            limit: Number of most recent files to load (optional, for testing)
        """
        self._analysis_dir = Path(analysis_dir) if analysis_dir else ANALYSIS_DIR
        self._limit = limit if limit is not None else history_limit_from_env()
        self._warnings: List[str] = []

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    def load(self) -> List[Dict[str, Any]]:
        """Load the most recent snapshot records, oldest first."""
        self._warnings = []

        if not self._analysis_dir.exists():
            logger.info(f"No historical data found in {self._analysis_dir}, starting fresh")
            return []

        files = sorted(p for p in self._analysis_dir.glob("*.json") if p.is_file())
        if self._limit > 0:
            files = files[-self._limit:]

        records = []
        for file_path in files:
            try:
                records.append(self._read_snapshot(file_path))
            except (OSError, ValueError) as e:
                message = f"Failed to load {file_path.name}: {e}"
                logger.warning(message)
                self._warnings.append(message)

        logger.info(f"Loaded {len(records)} historical snapshots from {self._analysis_dir}")
        return records

    def _read_snapshot(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse one snapshot file, unwrapping fossil content.

        Raises:
            OSError: File cannot be read
            ValueError: Invalid JSON or not an object
        """
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, str):
            data = json.loads(data)
        elif isinstance(data, dict) and isinstance(data.get("content"), str):
            data = json.loads(data["content"])

        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data
