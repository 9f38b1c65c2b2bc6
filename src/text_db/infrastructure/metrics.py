"""Prometheus metrics for the text table store."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all text table store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Operation metrics
        self.operations_total = Counter(
            "text_db_operations_total",
            "Total number of engine operations",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "text_db_operation_latency_seconds",
            "Engine operation latency in seconds",
            ["operation"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        # Transaction metrics
        self.transactions_total = Counter(
            "text_db_transactions_total",
            "Total number of finished transactions",
            ["outcome"],  # commit, rollback
            registry=self._registry,
        )

        self.transactions_active = Gauge(
            "text_db_transactions_active",
            "Number of open transactions (0 or 1)",
            registry=self._registry,
        )

        # Scan metrics
        self.rows_scanned_total = Counter(
            "text_db_rows_scanned_total",
            "Total data rows read by select scans",
            registry=self._registry,
        )

        self.rows_returned_total = Counter(
            "text_db_rows_returned_total",
            "Total rows returned by select",
            registry=self._registry,
        )

        # Store metrics
        self.store_rewrites_total = Counter(
            "text_db_store_rewrites_total",
            "Total whole-file rewrites of the current store",
            registry=self._registry,
        )

        self.info = Info(
            "text_db",
            "Text table store information",
            registry=self._registry,
        )


_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from text_db import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
