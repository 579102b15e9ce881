# Backend metrics kept in memory and exposed as JSON on /metrics
# Counters, gauges and latency distributions keyed by name and labels

import threading
import time
from datetime import datetime
from typing import Dict, Mapping, Optional, Tuple

HTTP_SERVER_DURATION = "http_server_duration_seconds"
GEMINI_DURATION = "external_gemini_duration_seconds"
GEMINI_ERRORS = "external_gemini_errors_total"
GEMINI_TOKENS = "external_gemini_tokens_total"
BACKEND_ERRORS = "backend_errors_total"
REQUESTS_INFLIGHT = "requests_inflight"

_MetricKey = Tuple[str, Tuple[Tuple[str, str], ...]]


def _key(name: str, labels: Optional[Mapping[str, str]]) -> _MetricKey:
    if not name:
        raise ValueError("metric name must be non-empty")
    items = tuple(sorted((str(k), str(v)) for k, v in (labels or {}).items()))
    return name, items


def _identifier(key: _MetricKey) -> str:
    name, labels = key
    if not labels:
        return name
    rendered = ",".join(f'{k}="{v}"' for k, v in labels)
    return f"{name}{{{rendered}}}"


class _Distribution:
    def __init__(self):
        self.count = 0
        self.total = 0.0
        self.minimum = None
        self.maximum = None
        self.last = None

    def observe(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.last = value
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if self.maximum is None or value > self.maximum:
            self.maximum = value

    def as_dict(self) -> dict:
        return {
            "count": self.count,
            "sum": self.total,
            "min": self.minimum,
            "max": self.maximum,
            "avg": self.total / self.count if self.count else 0.0,
            "last": self.last,
        }


class MetricsRegistry:
    """Thread-safe in-memory metrics store."""

    def __init__(self):
        self._lock = threading.RLock()
        self._created_at = datetime.utcnow()
        self._counters: Dict[_MetricKey, float] = {}
        self._gauges: Dict[_MetricKey, float] = {}
        self._distributions: Dict[_MetricKey, _Distribution] = {}

    def inc(self, name: str, amount: float = 1.0, labels: Optional[Mapping[str, str]] = None) -> None:
        if amount < 0:
            raise ValueError("counter increment amount must be >= 0")
        key = _key(name, labels)
        with self._lock:
            self._counters[key] = self._counters.get(key, 0.0) + amount

    def add_gauge(self, name: str, delta: float, labels: Optional[Mapping[str, str]] = None) -> None:
        """Move a gauge up or down (used for in-flight request tracking)."""
        key = _key(name, labels)
        with self._lock:
            self._gauges[key] = self._gauges.get(key, 0.0) + delta

    def set_gauge(self, name: str, value: float, labels: Optional[Mapping[str, str]] = None) -> None:
        key = _key(name, labels)
        with self._lock:
            self._gauges[key] = value

    def observe(self, name: str, value: float, labels: Optional[Mapping[str, str]] = None) -> None:
        key = _key(name, labels)
        with self._lock:
            state = self._distributions.get(key)
            if state is None:
                state = _Distribution()
                self._distributions[key] = state
            state.observe(value)

    def get_counter(self, name: str, labels: Optional[Mapping[str, str]] = None) -> float:
        with self._lock:
            return self._counters.get(_key(name, labels), 0.0)

    def get_gauge(self, name: str, labels: Optional[Mapping[str, str]] = None) -> Optional[float]:
        with self._lock:
            return self._gauges.get(_key(name, labels))

    def get_distribution(self, name: str, labels: Optional[Mapping[str, str]] = None) -> Optional[dict]:
        with self._lock:
            state = self._distributions.get(_key(name, labels))
            return state.as_dict() if state else None

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._distributions.clear()
            self._created_at = datetime.utcnow()

    def snapshot(self) -> dict:
        with self._lock:
            counters = sorted(self._counters.items())
            gauges = sorted(self._gauges.items())
            distributions = sorted((k, v.as_dict()) for k, v in self._distributions.items())
            created_at = self._created_at

        now = datetime.utcnow()
        return {
            "metadata": {
                "created_at": created_at.isoformat(),
                "snapshot_at": now.isoformat(),
                "uptime_seconds": max(0.0, (now - created_at).total_seconds()),
            },
            "counters": {_identifier(k): v for k, v in counters},
            "gauges": {_identifier(k): v for k, v in gauges},
            "distributions": {_identifier(k): v for k, v in distributions},
        }


class timed:
    """Context manager recording elapsed seconds into a distribution."""

    def __init__(self, registry: MetricsRegistry, name: str, labels: Optional[Mapping[str, str]] = None):
        self.registry = registry
        self.name = name
        self.labels = labels
        self.elapsed = 0.0

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self._start
        self.registry.observe(self.name, self.elapsed, self.labels)
        return False


# Process-wide registry used by the app and the Gemini client
metrics = MetricsRegistry()
