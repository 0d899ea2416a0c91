"""
JSON file backed log storage.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

logger = logging.getLogger(__name__)


class LogStore:
    """Keeps all log entries in one JSON array, newest first."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def ensure(self) -> None:
        """Create the data directory and an empty log file if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text(json.dumps([]))

    def read(self) -> List[Dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding='utf-8')
            return json.loads(raw or '[]')
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading logs: {e}")
            return []

    def write(self, logs: List[Dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(logs, indent=2), encoding='utf-8')
        except OSError as e:
            logger.error(f"Error writing logs: {e}")

    def add(self, entry: Dict[str, Any]) -> None:
        logs = self.read()
        logs.insert(0, entry)
        self.write(logs)

    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        return self.read()[:max(limit, 0)]
