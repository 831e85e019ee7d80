"""
Single-writer dispatch of book updates.

Producers only enqueue; one consumer task owns the book cache, so
neither the cache nor the read-only index needs a lock.
"""

import asyncio
import logging

from arbscan.core.types import AlertSink, ArbitrageResult, Top1Book
from arbscan.market.orderbook import BookCache
from arbscan.strategy.calculator import ArbitrageEvaluator
from arbscan.strategy.index import ArbitrageIndex
from arbscan.telemetry.metrics import MetricsCollector
from arbscan.utils.time import elapsed_us


logger = logging.getLogger(__name__)


class EventDispatcher:
    """
    Consumes book updates in FIFO order.

    For every update:
    - Upsert the book cache
    - Evaluate only the cycles trading the updated symbol
    - Hand results above the threshold to the alert sink

    The queue is unbounded; there is no backpressure or coalescing.
    """

    def __init__(
        self,
        index: ArbitrageIndex,
        evaluator: ArbitrageEvaluator,
        alert_sink: AlertSink,
        min_pnl: float = 0.0,
        metrics: MetricsCollector | None = None,
        books: BookCache | None = None,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            index: Cycle configs and symbol index (read-only).
            evaluator: Cycle return calculator.
            alert_sink: Receives results above `min_pnl`.
            min_pnl: Alert threshold in percent (strictly greater).
            metrics: Optional metrics collector.
            books: Book cache to own; a new one by default.
        """
        self._index = index
        self._evaluator = evaluator
        self._alert_sink = alert_sink
        self._min_pnl = min_pnl
        self._metrics = metrics or MetricsCollector()
        self._books = books if books is not None else BookCache()
        self._queue: asyncio.Queue[Top1Book] = asyncio.Queue()
        self._processed = 0

    @property
    def queue(self) -> "asyncio.Queue[Top1Book]":
        """Delivery queue shared with producers."""
        return self._queue

    @property
    def books(self) -> BookCache:
        return self._books

    @property
    def processed(self) -> int:
        """Get number of updates consumed."""
        return self._processed

    def submit(self, update: Top1Book) -> None:
        """Enqueue an update; safe to call from any producer task."""
        self._queue.put_nowait(update)

    def process(self, update: Top1Book) -> list[ArbitrageResult]:
        """
        Apply one update and re-evaluate the affected cycles.

        Args:
            update: New top of book.

        Returns:
            Results of every cycle evaluated for this update.

        Raises:
            InvalidDirection: If a config carries an unknown side.
        """
        self._books.upsert(update)
        self._processed += 1
        self._metrics.increment_counter("book_updates")

        results: list[ArbitrageResult] = []

        for cycle in self._index.cycles_for_symbol(update.symbol):
            result = self._evaluator.evaluate(self._index[cycle], self._books)
            results.append(result)

            self._metrics.record_evaluation(result.cycle_id, result.profit_pct, result.complete)

            if result.exceeds(self._min_pnl):
                self._metrics.record_alert()
                self._alert(result)

        if update.timestamp_us:
            self._metrics.record_latency("update_to_eval", elapsed_us(update.timestamp_us))

        return results

    def _alert(self, result: ArbitrageResult) -> None:
        """Notify the alert sink, isolating its failures."""
        try:
            self._alert_sink(result)
        except Exception as e:
            logger.error(f"Alert sink error for {result.cycle_id}: {e}")

    def drain(self) -> int:
        """
        Process every update already queued.

        Returns:
            Number of updates processed.
        """
        count = 0
        while not self._queue.empty():
            update = self._queue.get_nowait()
            try:
                self.process(update)
            finally:
                self._queue.task_done()
            count += 1
        return count

    async def run(self) -> None:
        """Consume updates until cancelled."""
        logger.info(
            f"Dispatcher started: {len(self._index)} cycles, "
            f"{len(self._index.symbols())} symbols"
        )

        while True:
            update = await self._queue.get()
            try:
                self.process(update)
            finally:
                self._queue.task_done()

    @property
    def backlog(self) -> int:
        """Get number of updates waiting."""
        return self._queue.qsize()
