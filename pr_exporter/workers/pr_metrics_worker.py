"""PR Metrics Worker for scheduled pull request export.

This module implements the worker that polls GitHub for open pull requests
on a fixed interval and republishes them as Prometheus gauge series, while
an aiohttp server exposes the registry on ``/metrics``.
"""

import asyncio
import contextlib
import logging
import signal
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from ..config.exceptions import ConfigurationError
from ..config.loader import EnvironmentConfigLoader
from ..config.models import ExporterConfig
from ..github.auth import TokenAuth
from ..github.client import GitHubClient, GitHubClientConfig
from ..metrics.publisher import MetricsPublisher
from ..metrics.registry import PullRequestGaugeRegistry
from ..metrics.server import MetricsServer
from .exporter.normalizer import WorkItemNormalizer
from .exporter.source import GitHubWorkItemSource

logger = logging.getLogger(__name__)


class PRMetricsWorker:
    """Runs fetch, normalize and publish cycles on a schedule.

    The worker is either idle, waiting for the next tick, or running a
    cycle. The first cycle starts as soon as ``run()`` is called. A failed
    cycle stops the worker when ``fail_fast`` is enabled; otherwise the
    error is recorded and the next cycle runs on schedule.
    """

    def __init__(
        self,
        config: ExporterConfig | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize PR metrics worker.

        Args:
            config: Pre-built configuration. Loaded from the environment
                during ``initialize()`` when omitted.
            environ: Environment mapping used when loading configuration
        """
        self.config = config
        self.environ = environ

        self.registry: PullRequestGaugeRegistry | None = None
        self.publisher: MetricsPublisher | None = None
        self.server: MetricsServer | None = None
        self.github_client: GitHubClient | None = None
        self.source: GitHubWorkItemSource | None = None
        self.normalizer: WorkItemNormalizer | None = None

        # Worker state
        self.running = False
        self.shutdown_event = asyncio.Event()
        self.poll_task: asyncio.Task[None] | None = None

        self.stats: dict[str, Any] = {
            "worker_started_at": None,
            "total_cycles": 0,
            "successful_cycles": 0,
            "failed_cycles": 0,
            "last_cycle_at": None,
            "last_error": None,
            "published_series": 0,
        }

    async def initialize(self) -> None:
        """Load configuration and build worker components.

        Raises:
            ConfigurationError: If the environment is missing or malformed
        """
        logger.info("Initializing PR Metrics Worker...")

        if self.config is None:
            self.config = EnvironmentConfigLoader(self.environ).load()

        logger.info(
            f"Configuration loaded: {len(self.config.repositories)} repositories, "
            f"interval {self.config.poll_interval_seconds}s"
        )

        self.registry = PullRequestGaugeRegistry()
        self.publisher = MetricsPublisher(self.registry)
        self.server = MetricsServer(
            self.registry, host=self.config.metrics_host, port=self.config.metrics_port
        )

        self.github_client = GitHubClient(
            auth=TokenAuth(self.config.github_token.get_secret_value()),
            config=GitHubClientConfig(
                base_url=self.config.github_api_url,
                timeout=self.config.request_timeout_seconds,
            ),
        )
        self.source = GitHubWorkItemSource(self.github_client)
        self.normalizer = WorkItemNormalizer()

        self.stats["worker_started_at"] = datetime.now(UTC)
        logger.info("PR Metrics Worker initialized successfully")

    async def run_cycle(self) -> int:
        """Run one fetch, normalize and publish pass.

        Returns:
            Number of series published

        Raises:
            GitHubError: If fetching fails
            ResourceParseError: If a pull request payload is malformed
        """
        if not (self.config and self.source and self.normalizer and self.publisher):
            raise RuntimeError("Worker not initialized. Call initialize() first.")

        cycle_start = datetime.now(UTC)
        self.stats["total_cycles"] += 1
        logger.info("Starting poll cycle...")

        try:
            raw_items = await self.source.fetch_open_items(self.config.repositories)
            records = self.normalizer.normalize(raw_items)
            published = self.publisher.publish(records)
        except Exception as e:
            logger.error(f"Poll cycle failed: {e}")
            self.stats["failed_cycles"] += 1
            self.stats["last_error"] = {
                "message": str(e),
                "type": type(e).__name__,
                "timestamp": datetime.now(UTC),
            }
            raise

        self.stats["successful_cycles"] += 1
        self.stats["last_cycle_at"] = cycle_start
        self.stats["published_series"] = published

        duration = (datetime.now(UTC) - cycle_start).total_seconds()
        logger.info(f"Poll cycle completed: {published} series in {duration:.2f}s")
        return published

    async def run(self, install_signal_handlers: bool = True) -> None:
        """Serve metrics and run poll cycles until shutdown.

        Raises:
            Exception: The error of the failed cycle when ``fail_fast`` is set
        """
        if not self.server or not self.config:
            raise RuntimeError("Worker not initialized. Call initialize() first.")

        self.running = True
        logger.info("Starting PR Metrics Worker...")

        if install_signal_handlers:
            self._setup_signal_handlers()

        shutdown_task = asyncio.create_task(self.shutdown_event.wait())
        try:
            await self.server.start()
            self.poll_task = asyncio.create_task(self._poll_loop())

            done, _ = await asyncio.wait(
                {self.poll_task, shutdown_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if self.poll_task in done:
                # Re-raises the fatal cycle error, if any
                self.poll_task.result()

        finally:
            self.running = False

            shutdown_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await shutdown_task

            if self.poll_task and not self.poll_task.done():
                self.poll_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self.poll_task

            logger.info("PR Metrics Worker stopped")

    async def _poll_loop(self) -> None:
        """Main poll loop."""
        if not self.config:
            raise RuntimeError("Configuration not loaded")

        interval = self.config.poll_interval_seconds
        logger.info(f"Starting poll loop (interval: {interval}s)")

        while not self.shutdown_event.is_set():
            try:
                await self.run_cycle()
            except Exception:
                if self.config.fail_fast:
                    raise
                # Recorded in stats by run_cycle; try again next tick

            try:
                await asyncio.wait_for(self.shutdown_event.wait(), timeout=interval)
                break
            except TimeoutError:
                continue

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        def signal_handler(sig: signal.Signals) -> None:
            logger.info(f"Received signal {sig.name}, initiating shutdown...")
            self.shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, signal_handler, sig)

    async def shutdown(self) -> None:
        """Initiate graceful shutdown."""
        logger.info("Shutting down PR Metrics Worker...")
        self.shutdown_event.set()

    async def cleanup(self) -> None:
        """Clean up resources."""
        if self.server:
            await self.server.stop()
        if self.github_client:
            await self.github_client.close()
        logger.info("Cleanup completed")


async def main(argv: list[str] | None = None) -> int:
    """Main entry point for the PR metrics worker.

    Returns:
        Process exit code
    """
    import argparse

    parser = argparse.ArgumentParser(description="GitHub pull request exporter")
    parser.add_argument(
        "--log-level", help="Log level (overrides LOG_LEVEL, default INFO)"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, (args.log_level or "INFO").upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    worker = PRMetricsWorker()

    try:
        await worker.initialize()
        if not args.log_level and worker.config:
            logging.getLogger().setLevel(worker.config.log_level.value)
        await worker.run()
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1
    except Exception as e:
        logger.critical(f"Worker failed: {e}")
        return 1
    finally:
        await worker.cleanup()

    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
