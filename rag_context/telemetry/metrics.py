from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional

from rag_context.config.loader import config_get

from .drivers import FileMetricsDriver, LogMetricsDriver, MetricsDriver, NullMetricsDriver
from .sampling import should_sample


class Metrics:
    """Fire-and-forget event sink configured by the ``metrics`` section."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None, driver: Optional[MetricsDriver] = None) -> None:
        self.config = config or {}
        self._driver = driver

    def record(self, payload: Mapping[str, Any]) -> None:
        if not config_get(self.config, "metrics.enabled", True):
            return
        if not should_sample(float(config_get(self.config, "metrics.sampling_rate", 1.0))):
            return
        event = self.enrich(payload)
        if self.below_threshold(event):
            return
        self.driver().record(event)

    def enrich(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {"timestamp": time.time(), **payload}

    def below_threshold(self, payload: Mapping[str, Any]) -> bool:
        threshold = config_get(self.config, "metrics.thresholds.minimum_savings_percent", 0)
        if not threshold or threshold <= 0:
            return False
        if "savings_percent" not in payload:
            return False
        savings = payload["savings_percent"]
        return isinstance(savings, (int, float)) and savings < threshold

    def driver(self) -> MetricsDriver:
        if self._driver is not None:
            return self._driver
        name = str(config_get(self.config, "metrics.driver", "log"))
        opts = config_get(self.config, f"metrics.drivers.{name}", {}) or {}
        if name == "log":
            self._driver = LogMetricsDriver(opts.get("channel"))
        elif name == "file":
            self._driver = FileMetricsDriver(opts.get("log_dir") or ".rag_context/telemetry")
        else:
            self._driver = NullMetricsDriver()
        return self._driver
