"""Allow running the exporter with ``python -m pr_exporter``."""

from .workers.pr_metrics_worker import cli

cli()
