"""Telemetry - logger factory and metrics facade

Log format: [module] [Component:id[:8]] msg
Metrics: session.dispatched, session.failed, session.inflight, workspace.noop, ...
"""

import logging

from .core.ids import short_id

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> None:
    """Install the root handler used by the entry points."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)


def format_log(component: str, entity_id: str | None, msg: str) -> str:
    """Format a log line scoped to one tab/pane/session.

    Args:
        component: Component prefix, e.g. "Dispatcher"
        entity_id: id the message is about (shortened to 8 chars)
        msg: message body

    Returns:
        "[component:id] msg"
    """
    short = short_id(entity_id) if entity_id else "-"
    return f"[{component}:{short}] {msg}"


class Metrics:
    """In-memory counters and gauges.

    Keys carry optional labels: ``name{k=v,...}``.
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        key = self._key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        self._gauges[self._key(name, labels)] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters.get(self._key(name, labels), 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        return self._gauges.get(self._key(name, labels), 0.0)

    def snapshot(self) -> dict[str, dict]:
        """Copy of every counter and gauge (for the debug endpoint)."""
        return {"counters": dict(self._counters), "gauges": dict(self._gauges)}

    def reset(self) -> None:
        """Clear everything (tests)."""
        self._counters.clear()
        self._gauges.clear()

    @staticmethod
    def _key(name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


metrics = Metrics()
