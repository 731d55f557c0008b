"""Publisher metrics: subscription churn, notifications and per-subscriber deliveries."""

from typing import Dict


class Metrics:
    """Counters and gauges a DefaultPublisher records as it runs.

    Counter names are flat strings (``deliveries``, ``notifications.sports``);
    gauges hold the current subscriber count per subject (``subscribers.sports``).
    """

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._gauges: Dict[str, int] = {}

    def increment(self, name: str, value: int = 1) -> None:
        self._counters[name] = self._counters.get(name, 0) + value

    def set_gauge(self, name: str, value: int) -> None:
        self._gauges[name] = value

    def get_counter(self, name: str) -> int:
        """Counter value, 0 if it was never incremented."""
        return self._counters.get(name, 0)

    def get_gauge(self, name: str) -> int:
        return self._gauges.get(name, 0)

    def reset(self) -> None:
        """Forget every counter and gauge."""
        self._counters.clear()
        self._gauges.clear()

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        """Copy of the current values as ``{"counters": {...}, "gauges": {...}}``."""
        return {
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
        }
