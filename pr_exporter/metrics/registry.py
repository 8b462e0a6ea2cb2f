"""Prometheus gauge registry for open pull requests."""

from typing import NamedTuple

from prometheus_client import CollectorRegistry, Gauge, generate_latest

NAMESPACE = "github_pr"
SUBSYSTEM = "prometheus_exporter"
METRIC_NAME = "pull_request_count"


class PullRequestLabels(NamedTuple):
    """Label values of one pull request series, in label-name order."""

    number: str
    label: str
    author: str
    reviewer: str
    repo: str


LABEL_NAMES: tuple[str, ...] = PullRequestLabels._fields


class PullRequestGaugeRegistry:
    """Owns a ``CollectorRegistry`` and the pull request gauge family.

    The registry is never the process-wide default, so several instances can
    coexist (for example one per test).
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.gauge = Gauge(
            METRIC_NAME,
            "Number of Pull Requests",
            labelnames=LABEL_NAMES,
            namespace=NAMESPACE,
            subsystem=SUBSYSTEM,
            registry=self.registry,
        )

    @property
    def metric_name(self) -> str:
        """Fully qualified metric name."""
        return f"{NAMESPACE}_{SUBSYSTEM}_{METRIC_NAME}"

    def reset(self) -> None:
        """Remove every series of the gauge family."""
        self.gauge.clear()

    def set(self, labels: PullRequestLabels, value: float) -> None:
        """Set the series identified by ``labels`` to ``value``."""
        self.gauge.labels(*labels).set(value)

    def series(self) -> dict[PullRequestLabels, float]:
        """Snapshot of all current series keyed by their label values."""
        snapshot: dict[PullRequestLabels, float] = {}
        for metric in self.gauge.collect():
            for sample in metric.samples:
                key = PullRequestLabels(*(sample.labels[n] for n in LABEL_NAMES))
                snapshot[key] = sample.value
        return snapshot

    def exposition(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)
