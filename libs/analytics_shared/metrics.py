# libs/analytics_shared/metrics.py
"""
Simple metrics collection utilities.

Metrics are emitted as DEBUG log lines; a monitoring backend can scrape
or replace them without touching call sites.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from .logging import get_logger

logger = get_logger(__name__)


def _format_labels(labels: Optional[Dict[str, str]]) -> str:
    return ", ".join(f"{k}={v}" for k, v in (labels or {}).items())


class Metrics:
    """
    Simple metrics collection class.
    In production, this would integrate with monitoring systems.
    """

    @staticmethod
    def counter(name: str, labels: Optional[Dict[str, str]] = None):
        """Record a counter increment."""
        logger.debug(f"METRIC: counter {name} {_format_labels(labels)}")

    @staticmethod
    def histogram(name: str, value: float, labels: Optional[Dict[str, str]] = None):
        """Record an observation for a histogram metric."""
        logger.debug(f"METRIC: histogram {name}={value} {_format_labels(labels)}")

    @staticmethod
    def gauge(name: str, value: float, labels: Optional[Dict[str, str]] = None):
        """Record the current value of a gauge metric."""
        logger.debug(f"METRIC: gauge {name}={value} {_format_labels(labels)}")

    @staticmethod
    @contextmanager
    def timed(name: str, labels: Optional[Dict[str, str]] = None) -> Iterator[None]:
        """
        Time the enclosed block and record it as a histogram in milliseconds.

        Args:
            name: Histogram metric name
            labels: Optional labels dictionary
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            Metrics.histogram(name, round(duration_ms, 3), labels)
