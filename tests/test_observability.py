"""Tests for observability hooks."""

import logging

from csv_tally.observability import (
    EventType,
    LoggingHook,
    MetricType,
    ObservabilityHook,
    ObservabilityManager,
    configure_observability,
    get_observability_manager,
)
from csv_tally.async_orchestrator import run_async_tally
from csv_tally.orchestrator import tally_files


class RecordingHook(ObservabilityHook):
    """Hook that keeps everything it receives."""

    def __init__(self):
        self.events = []
        self.metrics = []
        self.errors = []

    def on_metric(self, metric):
        self.metrics.append(metric)

    def on_event(self, event):
        self.events.append(event)

    def on_error(self, error, context):
        self.errors.append((error, context))


class BrokenHook(ObservabilityHook):
    """Hook that always fails."""

    def on_event(self, event):
        raise RuntimeError("hook failure")


def test_tally_files_emits_events(sample_csv_file, tmp_path):
    """Test file events, metrics and errors during a run."""
    hook = RecordingHook()
    configure_observability([hook])
    missing = tmp_path / "missing.csv"

    tally_files([sample_csv_file, missing])

    event_types = [e.event_type for e in hook.events]
    assert event_types.count(EventType.FILE_START) == 2
    assert EventType.FILE_COMPLETE in event_types
    assert EventType.FILE_ERROR in event_types
    assert EventType.ROW_ERROR in event_types

    counted = [m for m in hook.metrics if m.name == "values_counted"]
    assert counted[0].value == 2
    assert counted[0].tags == {"file": "sample.csv"}
    assert any(m.metric_type == MetricType.TIMER for m in hook.metrics)

    assert len(hook.errors) == 1
    assert hook.errors[0][1] == {"file": str(missing)}


def test_failing_hook_does_not_propagate(sample_csv_file, caplog):
    """Test that a broken hook is logged and the run completes."""
    configure_observability([BrokenHook()])

    with caplog.at_level(logging.ERROR):
        totals, _, _ = tally_files([sample_csv_file])

    assert totals.count == 2
    assert "Error in observability hook" in caplog.text


def test_logging_hook_levels(caplog):
    """Test that error events are logged as warnings."""
    manager = ObservabilityManager()
    manager.register_hook(LoggingHook())

    with caplog.at_level(logging.DEBUG, logger="csv_tally.observability"):
        manager.emit_event(EventType.FILE_ERROR, details={"error": "boom"})
        manager.counter("files_seen", 3)

    levels = {r.levelno for r in caplog.records}
    assert logging.WARNING in levels
    assert "files_seen:3" in caplog.text


def test_timer_not_started():
    """Test that ending an unknown timer returns zero."""
    assert ObservabilityManager().end_timer("never") == 0.0


def test_global_manager_is_shared():
    """Test that the global manager is a singleton."""
    assert get_observability_manager() is get_observability_manager()


def _file_timers(hook):
    return [m for m in hook.metrics if m.metric_type == MetricType.TIMER and m.name == "file_duration"]


def test_per_file_timer_tagged_with_file(sample_csv_file, messy_csv_file):
    """Test that each file gets its own duration metric."""
    hook = RecordingHook()
    configure_observability([hook])

    tally_files([sample_csv_file, messy_csv_file])

    timers = _file_timers(hook)
    assert [m.tags for m in timers] == [{"file": "sample.csv"}, {"file": "messy.csv"}]
    assert all(m.value >= 0 for m in timers)


def test_per_file_timer_in_async_run(sample_csv_file, messy_csv_file, tmp_path):
    """Test that concurrent files are timed separately, missing ones included."""
    hook = RecordingHook()
    configure_observability([hook])

    run_async_tally([sample_csv_file, messy_csv_file, tmp_path / "missing.csv"], max_concurrent=3)

    tags = sorted(m.tags["file"] for m in _file_timers(hook))
    assert tags == ["messy.csv", "missing.csv", "sample.csv"]


def test_keyed_timers_do_not_collide():
    """Test that timers sharing a name are tracked per key."""
    hook = RecordingHook()
    manager = ObservabilityManager()
    manager.register_hook(hook)

    manager.start_timer("file_duration", key="a")
    manager.start_timer("file_duration", key="b")
    manager.end_timer("file_duration", tags={"file": "b"}, key="b")
    manager.end_timer("file_duration", tags={"file": "a"}, key="a")

    assert [m.tags["file"] for m in hook.metrics] == ["b", "a"]
    assert manager.end_timer("file_duration", key="a") == 0.0
