"""
Scanner engine orchestrator.

Wires the producers, the dispatcher, and telemetry together and
manages the scanning lifecycle.
"""

import asyncio
import logging
import signal
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from arbscan.config.constants import CLOSE_GRACE_PERIOD
from arbscan.config.settings import Settings
from arbscan.core.dispatcher import EventDispatcher
from arbscan.core.types import AlertSink
from arbscan.exchange.client import BitstampClient
from arbscan.market.websocket import BitstampFeed
from arbscan.strategy.calculator import ArbitrageEvaluator
from arbscan.strategy.index import ArbitrageIndex
from arbscan.telemetry.alerts import LogAlertSink
from arbscan.telemetry.metrics import MetricsCollector
from arbscan.telemetry.reporter import CLIReporter


logger = logging.getLogger(__name__)


class ScannerEngine:
    """
    Main scanning engine.

    Owns every piece of runtime state:
    - Streaming feed and REST client (producers)
    - Dispatcher with the book cache (single consumer)
    - Metrics and reporting
    """

    def __init__(
        self,
        settings: Settings,
        index: ArbitrageIndex,
        reduced_fee_symbols: Iterable[str] = (),
        alert_sink: AlertSink | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            settings: Application settings.
            index: Cycle configs to scan.
            reduced_fee_symbols: Symbols charged the reduced taker fee.
            alert_sink: Receives profitable cycles (default: log).
        """
        self._settings = settings
        self._index = index
        self._running = False
        self._shutdown_event = asyncio.Event()
        self._shut_down = False

        self._metrics = MetricsCollector()
        self._evaluator = ArbitrageEvaluator(
            fee_rate=settings.fee_rate,
            reduced_fee_rate=settings.reduced_fee_rate,
            reduced_fee_symbols=reduced_fee_symbols,
        )
        self._dispatcher = EventDispatcher(
            index=index,
            evaluator=self._evaluator,
            alert_sink=alert_sink or LogAlertSink(),
            min_pnl=settings.min_pnl,
            metrics=self._metrics,
        )
        self._reporter = CLIReporter(metrics=self._metrics)

        # Producers (created in setup)
        self._feed: BitstampFeed | None = None
        self._client: BitstampClient | None = None

        self._consumer_task: asyncio.Task[None] | None = None
        self._snapshot_task: asyncio.Task[int] | None = None

    async def setup(self) -> None:
        """Open the streaming connection and the REST client."""
        logger.info("Initializing scanner engine...")

        symbols = self._index.symbols()
        self._reporter.set_state(cycle_count=len(self._index), stream_count=len(symbols))

        self._client = BitstampClient(base_url=self._settings.rest_url)
        self._feed = BitstampFeed(self._dispatcher.queue, url=self._settings.ws_url)
        await self._feed.connect()

        logger.info(f"Engine ready: {len(self._index)} cycles, {len(symbols)} symbols")

    async def run(self) -> None:
        """
        Run until interrupted or until the consumer fails.

        Raises:
            FeedError: If the subscription phase fails.
            InvalidDirection: If the consumer hits a corrupt config.
        """
        if self._feed is None or self._client is None:
            raise RuntimeError("setup() must be called before run()")

        self._running = True

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self._handle_shutdown)

        symbols = self._index.symbols()

        try:
            self._consumer_task = asyncio.create_task(self._dispatcher.run(), name="dispatcher")
            self._feed.start()
            self._snapshot_task = asyncio.create_task(
                self._client.fetch_initial_books(symbols, self._dispatcher.queue),
                name="snapshots",
            )

            await self._feed.subscribe(symbols)

            self._reporter.start()

            shutdown_waiter = asyncio.create_task(self._shutdown_event.wait())
            done, _ = await asyncio.wait(
                {shutdown_waiter, self._consumer_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
            shutdown_waiter.cancel()

            if self._consumer_task in done and not self._consumer_task.cancelled():
                error = self._consumer_task.exception()
                if error is not None:
                    logger.error(f"Dispatcher failed: {error}")
                    raise error

        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)
            await self.shutdown()

    def _handle_shutdown(self) -> None:
        """Handle shutdown signal."""
        logger.info("Interrupt received")
        self._running = False
        self._shutdown_event.set()

    async def shutdown(self, grace_period: float = CLOSE_GRACE_PERIOD) -> None:
        """
        Close the feed, then stop everything else.

        Best effort: producer tasks are cancelled, not joined.
        """
        if self._shut_down:
            return
        self._shut_down = True

        logger.info("Shutting down engine...")
        self._running = False

        if self._feed:
            await self._feed.close(grace_period)

        for task in (self._snapshot_task, self._consumer_task):
            if task is not None and not task.done():
                task.cancel()

        if self._client:
            await self._client.close()

        self._reporter.stop()
        self._reporter.print_summary()

        logger.info(f"Engine shutdown complete ({self._dispatcher.backlog} updates unprocessed)")

    @property
    def is_running(self) -> bool:
        """Check if engine is running."""
        return self._running

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def metrics(self) -> MetricsCollector:
        """Get metrics collector."""
        return self._metrics


@asynccontextmanager
async def create_engine(
    settings: Settings,
    index: ArbitrageIndex,
    reduced_fee_symbols: Iterable[str] = (),
) -> AsyncIterator[ScannerEngine]:
    """
    Create and manage engine lifecycle.

    Usage:
        async with create_engine(settings, index) as engine:
            await engine.run()
    """
    engine = ScannerEngine(settings, index, reduced_fee_symbols)

    try:
        await engine.setup()
        yield engine
    finally:
        await engine.shutdown()
