"""Publishing of normalized pull requests as gauge series."""

import logging
from collections.abc import Iterable

from ..workers.exporter.models import WorkItemRecord
from .registry import PullRequestGaugeRegistry, PullRequestLabels

logger = logging.getLogger(__name__)

LABEL_DELIMITER = ","


def record_labels(record: WorkItemRecord) -> PullRequestLabels:
    """Build the series label values for a pull request."""
    return PullRequestLabels(
        number=str(record.number),
        label=LABEL_DELIMITER.join(record.labels),
        author=record.author,
        reviewer=LABEL_DELIMITER.join(record.reviewers),
        repo=record.repository,
    )


class MetricsPublisher:
    """Replaces the published series set with the latest poll results.

    ``publish`` is synchronous: when it runs on the event loop that also
    serves ``/metrics``, no scrape can observe the set between the reset and
    the rebuild.
    """

    def __init__(self, registry: PullRequestGaugeRegistry) -> None:
        self.registry = registry

    def publish(self, records: Iterable[WorkItemRecord]) -> int:
        """Reset the gauge family and set one series per record.

        Records with identical label values overwrite each other.

        Returns:
            Number of distinct series published
        """
        self.registry.reset()

        published: set[PullRequestLabels] = set()
        for record in records:
            labels = record_labels(record)
            self.registry.set(labels, 1)
            published.add(labels)

        logger.info(f"Published {len(published)} pull request series")
        return len(published)
