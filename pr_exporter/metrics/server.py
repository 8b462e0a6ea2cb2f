"""HTTP exposition server for the Prometheus scrape endpoint."""

import logging

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST

from .registry import PullRequestGaugeRegistry

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"


def create_app(registry: PullRequestGaugeRegistry) -> web.Application:
    """Build the aiohttp application serving ``GET /metrics``."""

    async def handle_metrics(request: web.Request) -> web.Response:
        return web.Response(
            body=registry.exposition(),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )

    app = web.Application()
    app.router.add_get(METRICS_PATH, handle_metrics)
    return app


class MetricsServer:
    """Runs the exposition app on the current event loop."""

    def __init__(
        self,
        registry: PullRequestGaugeRegistry,
        host: str = "0.0.0.0",  # nosec B104
        port: int = 8080,
    ) -> None:
        self.registry = registry
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    @property
    def running(self) -> bool:
        """Whether the server is currently accepting connections."""
        return self._runner is not None

    async def start(self) -> None:
        """Start listening for scrape requests."""
        if self._runner is not None:
            return

        runner = web.AppRunner(create_app(self.registry), access_log=None)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        try:
            await site.start()
        except OSError:
            await runner.cleanup()
            raise

        self._runner = runner
        if self.port == 0 and runner.addresses:
            # Ephemeral port requested; record the one the OS assigned
            self.port = runner.addresses[0][1]
        logger.info(f"Serving metrics on http://{self.host}:{self.port}{METRICS_PATH}")

    async def stop(self) -> None:
        """Stop the server and release the listening socket."""
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Metrics server stopped")
