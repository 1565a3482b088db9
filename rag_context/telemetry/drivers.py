import datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rag_context.utils.logging import logger


class MetricsDriver:
    def record(self, payload: Dict[str, Any]) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class NullMetricsDriver(MetricsDriver):
    def record(self, payload: Dict[str, Any]) -> None:
        return None


class LogMetricsDriver(MetricsDriver):
    """Write each event as a structured log record."""

    def __init__(self, channel: Optional[str] = None) -> None:
        self.logger = logging.getLogger(channel) if channel else logger.getChild("metrics")

    def record(self, payload: Dict[str, Any]) -> None:
        self.logger.info("metrics %s", json.dumps(payload, ensure_ascii=False, default=str))


class FileMetricsDriver(MetricsDriver):
    """Append events to one JSONL file per day."""

    def __init__(self, log_dir: Path | str) -> None:
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def _file_path(self) -> Path:
        day = datetime.date.today().strftime("%Y%m%d")
        return self.log_dir / f"{day}.jsonl"

    def record(self, event: Dict[str, Any]) -> None:
        with open(self._file_path(), "a", encoding="utf-8") as fh:
            fh.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
