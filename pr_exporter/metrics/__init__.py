"""Prometheus metrics for open pull requests."""

from .publisher import MetricsPublisher, record_labels
from .registry import LABEL_NAMES, PullRequestGaugeRegistry, PullRequestLabels
from .server import METRICS_PATH, MetricsServer, create_app

__all__ = [
    "LABEL_NAMES",
    "METRICS_PATH",
    "MetricsPublisher",
    "MetricsServer",
    "PullRequestGaugeRegistry",
    "PullRequestLabels",
    "create_app",
    "record_labels",
]
