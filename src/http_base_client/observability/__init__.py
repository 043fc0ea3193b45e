# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the HTTP base client.

ClientMetrics is always available. PrometheusClientMetrics requires the
'metrics' extra (prometheus-client).
"""

from .metrics import (
    PROMETHEUS_AVAILABLE,
    ClientMetrics,
    PrometheusClientMetrics,
)

__all__ = [
    "PROMETHEUS_AVAILABLE",
    "ClientMetrics",
    "PrometheusClientMetrics",
]
