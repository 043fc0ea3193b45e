# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request metrics for the HTTP base client.

This module provides:
1. ClientMetrics - Dataclass counting request outcomes and token refreshes
2. PrometheusClientMetrics - Optional Prometheus metrics for the same events

Usage:
    metrics = ClientMetrics()

    # Record a successful request
    metrics.record_success("GET", duration=0.12)

    # Record an HTTP error
    metrics.record_http_error("GET", status_code=404, duration=0.08)

    # Get stats for JSON serialization
    stats = metrics.get_stats()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

# Type declarations for optional prometheus_client imports
if TYPE_CHECKING:
    from prometheus_client import Counter as CounterType, Histogram as HistogramType
else:
    CounterType = object
    HistogramType = object

# Try to import prometheus_client for optional Prometheus metrics
try:
    from prometheus_client import Counter as _Counter, Histogram as _Histogram

    Counter: type[CounterType] | None = _Counter
    Histogram: type[HistogramType] | None = _Histogram
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Histogram = None
    PROMETHEUS_AVAILABLE = False


class PrometheusClientMetrics:
    """
    Optional Prometheus metrics for client observability.

    Only instantiated if prometheus_client is available.

    Metrics:
        - http_base_client_requests_total: Counter of requests by method and outcome
        - http_base_client_request_duration_seconds: Histogram of request durations
        - http_base_client_token_refreshes_total: Counter of token refreshes by outcome
    """

    def __init__(self, registry: Any | None = None) -> None:
        """
        Initialize Prometheus client metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.

        Raises:
            ImportError: If prometheus_client is not available.
        """
        if not PROMETHEUS_AVAILABLE or Counter is None or Histogram is None:
            raise ImportError(
                "prometheus_client is not available. "
                "Install with: pip install http-base-client[metrics]"
            )

        self.requests = Counter(
            "http_base_client_requests_total",
            "Requests issued through the client",
            ["method", "outcome"],  # Values: success, http_error, validation_error, transport_error
            registry=registry,
        )

        self.request_duration_seconds = Histogram(
            "http_base_client_request_duration_seconds",
            "Duration of requests including authorization",
            ["method"],
            buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
            registry=registry,
        )

        self.token_refreshes = Counter(
            "http_base_client_token_refreshes_total",
            "Credential exchanges performed by authorization providers",
            ["outcome"],  # Values: success, failure
            registry=registry,
        )

        logger.info("Prometheus client metrics initialized")

    def observe_request(self, method: str, outcome: str, duration: float | None) -> None:
        self.requests.labels(method=method, outcome=outcome).inc()
        if duration is not None:
            self.request_duration_seconds.labels(method=method).observe(duration)

    def observe_token_refresh(self, succeeded: bool) -> None:
        self.token_refreshes.labels(outcome="success" if succeeded else "failure").inc()


@dataclass
class ClientMetrics:
    """
    In-process request metrics.

    Thread Safety:
        Simple counter increments use Python's GIL for atomicity.
        Per-key dictionary updates use a threading.Lock to ensure atomicity
        of the get + increment + set pattern.

    Example:
        >>> metrics = ClientMetrics()
        >>> metrics.record_http_error("GET", status_code=404)
        >>> metrics.get_stats()["http_errors_by_status"]
        {404: 1}
    """

    requests_total: int = 0
    requests_succeeded: int = 0
    http_errors: int = 0
    validation_errors: int = 0
    transport_errors: int = 0

    token_refreshes: int = 0
    token_refresh_failures: int = 0

    total_duration: float = 0.0

    _http_errors_by_status: dict[int, int] = field(default_factory=dict, repr=False)
    _validation_errors_by_phase: dict[str, int] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    prometheus: PrometheusClientMetrics | None = field(default=None, repr=False)

    def _increment(self, counter: dict[Any, int], key: Any) -> None:
        with self._lock:
            counter[key] = counter.get(key, 0) + 1

    def _finish(self, method: str, outcome: str, duration: float | None) -> None:
        self.requests_total += 1
        if duration is not None:
            self.total_duration += duration
        if self.prometheus is not None:
            self.prometheus.observe_request(method, outcome, duration)

    def record_success(self, method: str, duration: float | None = None) -> None:
        self.requests_succeeded += 1
        self._finish(method, "success", duration)

    def record_http_error(
        self, method: str, status_code: int, duration: float | None = None
    ) -> None:
        self.http_errors += 1
        self._increment(self._http_errors_by_status, status_code)
        self._finish(method, "http_error", duration)

    def record_validation_error(
        self, method: str, phase: str, duration: float | None = None
    ) -> None:
        self.validation_errors += 1
        self._increment(self._validation_errors_by_phase, phase)
        self._finish(method, "validation_error", duration)

    def record_transport_error(self, method: str, duration: float | None = None) -> None:
        self.transport_errors += 1
        self._finish(method, "transport_error", duration)

    def record_token_refresh(self, succeeded: bool) -> None:
        if succeeded:
            self.token_refreshes += 1
        else:
            self.token_refresh_failures += 1
        if self.prometheus is not None:
            self.prometheus.observe_token_refresh(succeeded)

    def get_stats(self) -> dict[str, Any]:
        """Return a JSON-friendly snapshot of all counters."""
        with self._lock:
            by_status = dict(self._http_errors_by_status)
            by_phase = dict(self._validation_errors_by_phase)
        completed = self.requests_total
        return {
            "requests_total": self.requests_total,
            "requests_succeeded": self.requests_succeeded,
            "http_errors": self.http_errors,
            "http_errors_by_status": by_status,
            "validation_errors": self.validation_errors,
            "validation_errors_by_phase": by_phase,
            "transport_errors": self.transport_errors,
            "token_refreshes": self.token_refreshes,
            "token_refresh_failures": self.token_refresh_failures,
            "average_duration": self.total_duration / completed if completed else 0.0,
        }

    def reset(self) -> None:
        """Reset all counters (for testing)."""
        with self._lock:
            self._http_errors_by_status.clear()
            self._validation_errors_by_phase.clear()
        self.requests_total = 0
        self.requests_succeeded = 0
        self.http_errors = 0
        self.validation_errors = 0
        self.transport_errors = 0
        self.token_refreshes = 0
        self.token_refresh_failures = 0
        self.total_duration = 0.0


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "ClientMetrics",
    "PrometheusClientMetrics",
]
