import json

from rag_context.telemetry import Metrics
from rag_context.telemetry.drivers import FileMetricsDriver, LogMetricsDriver, NullMetricsDriver


class Collect:
    def __init__(self):
        self.events = []

    def record(self, payload):
        self.events.append(payload)


def test_record_enriches_with_timestamp():
    sink = Collect()
    Metrics({}, driver=sink).record({"type": "rag_search", "query": "q"})
    (event,) = sink.events
    assert event["type"] == "rag_search"
    assert "timestamp" in event


def test_disabled_metrics_record_nothing():
    sink = Collect()
    Metrics({"metrics": {"enabled": False}}, driver=sink).record({"type": "x"})
    assert sink.events == []


def test_sampling_respected():
    sink = Collect()
    Metrics({"metrics": {"sampling_rate": 0.0}}, driver=sink).record({"type": "x"})
    assert sink.events == []


def test_threshold_only_applies_to_savings_events():
    sink = Collect()
    m = Metrics({"metrics": {"thresholds": {"minimum_savings_percent": 8}}}, driver=sink)
    m.record({"type": "compression", "savings_percent": 5})
    m.record({"type": "compression", "savings_percent": 12})
    m.record({"type": "rag_search"})
    assert [e.get("savings_percent") for e in sink.events] == [12, None]


def test_driver_selection(tmp_path):
    assert isinstance(Metrics({}).driver(), LogMetricsDriver)
    assert isinstance(Metrics({"metrics": {"driver": "null"}}).driver(), NullMetricsDriver)
    cfg = {"metrics": {"driver": "file", "drivers": {"file": {"log_dir": str(tmp_path)}}}}
    assert isinstance(Metrics(cfg).driver(), FileMetricsDriver)


def test_file_driver_writes_jsonl(tmp_path):
    cfg = {"metrics": {"driver": "file", "drivers": {"file": {"log_dir": str(tmp_path / "logs")}}}}
    m = Metrics(cfg)
    m.record({"type": "rag_search", "query": "a"})
    m.record({"type": "rag_search", "query": "b"})
    files = list((tmp_path / "logs").glob("*.jsonl"))
    assert files, "metric file not written"
    lines = [json.loads(line) for line in files[0].read_text().splitlines()]
    assert [e["query"] for e in lines] == ["a", "b"]


def test_log_driver_uses_channel(caplog):
    caplog.set_level("INFO", logger="audit")
    LogMetricsDriver("audit").record({"type": "rag_search"})
    assert any("rag_search" in r.getMessage() for r in caplog.records if r.name == "audit")
