"""
Observability hooks for monitoring tally runs.

Hooks receive file-level events and per-file metrics; the default
LoggingHook forwards them to Python logging.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class MetricType(Enum):
    """Types of metrics that can be emitted."""
    COUNTER = "counter"  # Monotonically increasing count
    TIMER = "timer"  # Duration measurement


class EventType(Enum):
    """Types of events that can be emitted."""
    FILE_START = "file_start"
    FILE_COMPLETE = "file_complete"
    FILE_ERROR = "file_error"
    ROW_ERROR = "row_error"


@dataclass
class MetricEvent:
    """Represents a metric event."""
    metric_type: MetricType
    name: str
    value: float
    timestamp: float = field(default_factory=time.time)
    tags: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        tags_str = ",".join(f"{k}={v}" for k, v in self.tags.items())
        return f"{self.name}:{self.value}|{self.metric_type.value}|{tags_str}"


@dataclass
class Event:
    """Represents a tally event."""
    event_type: EventType
    timestamp: float = field(default_factory=time.time)
    file_path: Optional[Path] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [self.event_type.value]
        if self.file_path:
            parts.append(f"file={self.file_path.name}")
        if self.details:
            parts.append(",".join(f"{k}={v}" for k, v in self.details.items()))
        return " ".join(parts)


class ObservabilityHook:
    """Base class for observability hooks."""

    def on_metric(self, metric: MetricEvent) -> None:
        """Called when a metric is emitted."""
        pass

    def on_event(self, event: Event) -> None:
        """Called when an event occurs."""
        pass

    def on_error(self, error: Exception, context: Dict[str, Any]) -> None:
        """Called when an error occurs."""
        pass


class LoggingHook(ObservabilityHook):
    """Hook that logs metrics and events to Python logging."""

    def __init__(self, log_metrics: bool = True, log_events: bool = True):
        self.log_metrics = log_metrics
        self.log_events = log_events

    def on_metric(self, metric: MetricEvent) -> None:
        if self.log_metrics:
            logger.debug(f"METRIC: {metric}")

    def on_event(self, event: Event) -> None:
        if self.log_events:
            level = logging.WARNING if event.event_type in (EventType.FILE_ERROR, EventType.ROW_ERROR) else logging.DEBUG
            logger.log(level, f"EVENT: {event}")

    def on_error(self, error: Exception, context: Dict[str, Any]) -> None:
        logger.error(f"ERROR: {error} | Context: {context}")


TimerKey = Tuple[str, str]


class ObservabilityManager:
    """Fans tally events and metrics out to the registered hooks.

    Hook failures are logged and never reach the tally run. Timers are keyed
    by name plus an optional key so files tallied concurrently can be timed
    under the same metric name.
    """

    def __init__(self):
        self.hooks: List[ObservabilityHook] = []
        self._timers: Dict[TimerKey, float] = {}

    def register_hook(self, hook: ObservabilityHook) -> None:
        """Register an observability hook."""
        self.hooks.append(hook)

    def clear_hooks(self) -> None:
        """Remove all registered hooks."""
        self.hooks.clear()

    def _dispatch(self, method: str, *args: Any) -> None:
        for hook in self.hooks:
            try:
                getattr(hook, method)(*args)
            except Exception as e:
                logger.error(f"Error in observability hook {type(hook).__name__}.{method}: {e}")

    def emit_metric(
        self,
        metric_type: MetricType,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        self._dispatch("on_metric", MetricEvent(metric_type=metric_type, name=name, value=value, tags=tags or {}))

    def emit_event(
        self,
        event_type: EventType,
        file_path: Optional[Path] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self._dispatch("on_event", Event(event_type=event_type, file_path=file_path, details=details or {}))

    def emit_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        self._dispatch("on_error", error, context or {})

    def counter(self, name: str, value: float = 1.0, tags: Optional[Dict[str, str]] = None) -> None:
        self.emit_metric(MetricType.COUNTER, name, value, tags)

    def start_timer(self, name: str, key: str = "") -> None:
        self._timers[(name, key)] = time.time()

    def end_timer(self, name: str, tags: Optional[Dict[str, str]] = None, key: str = "") -> float:
        """Stop a timer and emit its duration in milliseconds.

        Returns:
            Duration in seconds (0.0 if the timer was never started)
        """
        started = self._timers.pop((name, key), None)
        if started is None:
            logger.warning(f"Timer '{name}' ({key or 'no key'}) was not started")
            return 0.0

        duration = time.time() - started
        self.emit_metric(MetricType.TIMER, name, duration * 1000, tags)
        return duration


_global_manager: Optional[ObservabilityManager] = None


def get_observability_manager() -> ObservabilityManager:
    """Get the process-wide manager used by the orchestrators."""
    global _global_manager
    if _global_manager is None:
        _global_manager = ObservabilityManager()
    return _global_manager


def configure_observability(hooks: List[ObservabilityHook]) -> None:
    """Register hooks on the process-wide manager.

    Example:
        >>> from csv_tally.observability import configure_observability, LoggingHook
        >>> configure_observability([LoggingHook()])
    """
    manager = get_observability_manager()
    for hook in hooks:
        manager.register_hook(hook)
