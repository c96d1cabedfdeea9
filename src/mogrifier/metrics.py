"""
Prometheus metrics for metric name mogrification.

Usage:
    from mogrifier.metrics import MetricsPublisher, MogrifierMetrics

    metrics = MogrifierMetrics()
    mogrifiers = build(specs, metrics=metrics)

    # Long-running hosts can expose /metrics
    MetricsPublisher(port=9091).start()
"""

import logging
from typing import Callable, Optional, TypeVar

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    start_http_server,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_or_create_metric(
    metric_factory: Callable[[], T],
    metric_name: str,
    registry: CollectorRegistry = REGISTRY,
) -> T:
    """
    Create a metric, or return the one already registered under its name.

    Lets MogrifierMetrics be instantiated more than once against the same
    registry (e.g. the global REGISTRY).

    Args:
        metric_factory: Callable that creates the metric
        metric_name: Registered name used to look up an existing metric
        registry: Prometheus registry the factory registers into

    Returns:
        The new or already registered metric
    """
    try:
        return metric_factory()
    except ValueError:
        existing = registry._names_to_collectors.get(metric_name)
        if existing is not None:
            return existing
        raise


class MogrifierMetrics:
    """
    Metrics for mogrifier set construction and name rewriting

    Tracks build outcomes, configured entries, and per-entry matches.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize mogrifier metrics

        Args:
            registry: Custom Prometheus registry (default: global REGISTRY)
        """
        self.registry = registry or REGISTRY

        self.builds_total = get_or_create_metric(
            lambda: Counter(
                "mogrifier_builds_total",
                "Total number of mogrifier set builds",
                ["status"],
                registry=self.registry,
            ),
            "mogrifier_builds_total",
            self.registry,
        )

        self.entries = get_or_create_metric(
            lambda: Gauge(
                "mogrifier_entries",
                "Number of entries in the active mogrifier set",
                registry=self.registry,
            ),
            "mogrifier_entries",
            self.registry,
        )

        self.names_total = get_or_create_metric(
            lambda: Counter(
                "mogrifier_names_total",
                "Total number of metric names passed through mogrify",
                ["result"],
                registry=self.registry,
            ),
            "mogrifier_names_total",
            self.registry,
        )

        self.entry_matches_total = get_or_create_metric(
            lambda: Counter(
                "mogrifier_entry_matches_total",
                "Total number of names rewritten by each mogrifier",
                ["entry"],
                registry=self.registry,
            ),
            "mogrifier_entry_matches_total",
            self.registry,
        )

        self.errors_total = get_or_create_metric(
            lambda: Counter(
                "mogrifier_errors_total",
                "Mogrifier entries that failed while rewriting a name",
                ["entry", "error_type"],
                registry=self.registry,
            ),
            "mogrifier_errors_total",
            self.registry,
        )

    def record_build(self, success: bool, entry_count: int = 0) -> None:
        """
        Record a mogrifier set build

        Args:
            success: Whether the build succeeded
            entry_count: Number of entries in the built set
        """
        status = "success" if success else "failure"
        self.builds_total.labels(status=status).inc()
        if success:
            self.entries.set(entry_count)

    def record_match(self, entry: str) -> None:
        """
        Record a name rewritten by a mogrifier

        Args:
            entry: Key of the mogrifier that matched
        """
        self.names_total.labels(result="matched").inc()
        self.entry_matches_total.labels(entry=entry).inc()

    def record_miss(self) -> None:
        """Record a name that no mogrifier matched"""
        self.names_total.labels(result="unmatched").inc()

    def record_error(self, entry: str, error_type: str) -> None:
        """
        Record a mogrifier that failed while rewriting a name

        Args:
            entry: Key of the failing mogrifier
            error_type: Exception class name
        """
        self.errors_total.labels(entry=entry, error_type=error_type).inc()


class MetricsPublisher:
    """
    Starts an HTTP server that exposes metrics on /metrics endpoint.
    """

    def __init__(
        self,
        port: int = 9091,
        registry: Optional[CollectorRegistry] = None,
    ):
        """
        Initialize metrics publisher

        Args:
            port: Port to expose metrics on (default: 9091)
            registry: Custom Prometheus registry (default: global REGISTRY)
        """
        self.port = port
        self.registry = registry or REGISTRY
        self._server_started = False

    def start(self) -> None:
        """
        Start the metrics HTTP server

        Raises:
            RuntimeError: If the port is already in use
        """
        if self._server_started:
            logger.warning(f"Metrics server already running on port {self.port}")
            return

        try:
            start_http_server(self.port, registry=self.registry)
            self._server_started = True
            logger.info(f"Metrics server started on port {self.port}")
        except OSError as e:
            if "Address already in use" in str(e):
                logger.error(f"Port {self.port} already in use, metrics server cannot start")
                raise RuntimeError(
                    f"Metrics server port {self.port} is already in use"
                ) from e
            raise

    def is_started(self) -> bool:
        """Check if metrics server is running"""
        return self._server_started
