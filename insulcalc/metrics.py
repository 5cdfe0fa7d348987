# -*- coding: utf-8 -*-
"""
Insulcalc Engine Metrics

Prometheus metrics for the insulation sizing engine:
- insulcalc_calculations_total: calculations by operation and result
- insulcalc_calculation_duration_seconds: calculation latency by operation
- insulcalc_diagnostics_total: non-fatal diagnostics by code
- insulcalc_scan_iterations: thickness scan length by geometry

Recording is a no-op when ``enable_metrics`` is off in the configuration.
"""

import logging

from prometheus_client import Counter, Histogram

from .config import get_config

logger = logging.getLogger(__name__)

calculations_total = Counter(
    "insulcalc_calculations_total",
    "Total insulation calculations",
    ["operation", "result"],
)

calculation_duration_seconds = Histogram(
    "insulcalc_calculation_duration_seconds",
    "Insulation calculation latency in seconds",
    ["operation"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

diagnostics_total = Counter(
    "insulcalc_diagnostics_total",
    "Non-fatal diagnostics attached to results",
    ["code"],
)

scan_iterations = Histogram(
    "insulcalc_scan_iterations",
    "Thickness scan iterations per condensation calculation",
    ["geometry"],
    buckets=(1, 5, 10, 50, 100, 250, 500, 1000),
)


def record_calculation(operation: str, result: str, duration_s: float) -> None:
    """Record one calculation outcome ("success" or the error code) and its latency."""
    if not get_config().enable_metrics:
        return
    calculations_total.labels(operation=operation, result=result).inc()
    calculation_duration_seconds.labels(operation=operation).observe(duration_s)


def record_diagnostic(code: str) -> None:
    if not get_config().enable_metrics:
        return
    diagnostics_total.labels(code=code).inc()


def record_scan(geometry: str, iterations: int) -> None:
    if not get_config().enable_metrics:
        return
    scan_iterations.labels(geometry=geometry).observe(iterations)


__all__ = [
    "calculations_total",
    "calculation_duration_seconds",
    "diagnostics_total",
    "scan_iterations",
    "record_calculation",
    "record_diagnostic",
    "record_scan",
]
