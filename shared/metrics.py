"""
Shared metrics configuration for the guild client.
"""

import re
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram


_SNOWFLAKE_RE = re.compile(r"\d{15,}")


def route_label(path: str) -> str:
    """Collapse snowflake ids in a path so routes stay low-cardinality."""
    return _SNOWFLAKE_RE.sub(":id", path.split("?", 1)[0])


class MetricsCollector:
    """Metrics collector for a client instance."""

    def __init__(self, namespace: str = "guilds", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up client metrics."""

        # REST metrics
        self._metrics["rest_requests_total"] = Counter(
            "rest_requests_total",
            "Total REST requests",
            ["method", "route", "status_code"],
            namespace=self.namespace,
            registry=self.registry
        )

        self._metrics["rest_request_duration_seconds"] = Histogram(
            "rest_request_duration_seconds",
            "REST request duration in seconds",
            ["method", "route"],
            namespace=self.namespace,
            registry=self.registry
        )

        # Cache metrics
        self._metrics["cache_lookups_total"] = Counter(
            "cache_lookups_total",
            "Total cache lookups",
            ["manager", "result"],
            namespace=self.namespace,
            registry=self.registry
        )

        # Error metrics
        self._metrics["errors_total"] = Counter(
            "errors_total",
            "Total errors",
            ["error_type"],
            namespace=self.namespace,
            registry=self.registry
        )

    def record_rest_request(self, method: str, path: str, status_code: int, duration: float):
        """Record a REST request."""
        route = route_label(path)
        self._metrics["rest_requests_total"].labels(
            method=method,
            route=route,
            status_code=str(status_code)
        ).inc()

        self._metrics["rest_request_duration_seconds"].labels(
            method=method,
            route=route
        ).observe(duration)

    def record_cache_lookup(self, manager: str, hit: bool):
        """Record a cache hit or miss."""
        self._metrics["cache_lookups_total"].labels(
            manager=manager,
            result="hit" if hit else "miss"
        ).inc()

    def record_error(self, error_type: str):
        """Record an error."""
        self._metrics["errors_total"].labels(error_type=error_type).inc()

    @contextmanager
    def time_request(self, method: str, path: str):
        """Time a REST request; the yielded dict receives the status code."""
        outcome = {"status_code": 0}
        start_time = time.time()
        try:
            yield outcome
        finally:
            duration = time.time() - start_time
            self.record_rest_request(method, path, outcome["status_code"], duration)

    def sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read the current value of a sample from this collector's registry."""
        return self.registry.get_sample_value(f"{self.namespace}_{name}", labels or {})
