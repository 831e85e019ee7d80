"""
Status reporting for the scanner.

Periodic one-line status logs while running, and a session summary
printed on shutdown.
"""

import asyncio
import logging
import sys
from typing import TextIO

from arbscan.telemetry.metrics import MetricsCollector
from arbscan.utils.time import format_duration_us


logger = logging.getLogger(__name__)


class CLIReporter:
    """Text reporter driven by the metrics collector."""

    def __init__(
        self,
        metrics: MetricsCollector,
        output: TextIO | None = None,
    ) -> None:
        """
        Initialize reporter.

        Args:
            metrics: Metrics collector instance.
            output: Output stream for the summary (default: stdout).
        """
        self._metrics = metrics
        self._output = output or sys.stdout
        self._running = False
        self._task: asyncio.Task[None] | None = None

        self._cycle_count = 0
        self._stream_count = 0

    def set_state(self, cycle_count: int = 0, stream_count: int = 0) -> None:
        """Update display state."""
        self._cycle_count = cycle_count
        self._stream_count = stream_count

    @staticmethod
    def _format_uptime(seconds: float) -> str:
        """Format uptime as HH:MM:SS."""
        hours, remainder = divmod(int(seconds), 3600)
        minutes, secs = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"

    def get_status_line(self) -> str:
        """Get a single-line status update."""
        stats = self._metrics.scan_stats
        latency = self._metrics.get_latency_stats("update_to_eval")
        best = f"{stats.best_profit_pct:+.4f}%" if stats.best_profit_pct is not None else "---"

        return (
            f"Updates: {self._metrics.get_counter('book_updates')} | "
            f"Evals: {stats.evaluations} | "
            f"Alerts: {stats.alerts} | "
            f"Best: {best} | "
            f"Latency: {latency.avg_us:.0f}μs"
        )

    async def run(self, interval: float) -> None:
        """
        Log a status line every `interval` seconds.

        Args:
            interval: Update interval in seconds.
        """
        self._running = True

        while self._running:
            await asyncio.sleep(interval)
            logger.info(self.get_status_line())

    def start(self, interval: float = 30.0) -> "asyncio.Task[None]":
        """Start the reporter as a background task."""
        self._task = asyncio.create_task(self.run(interval), name="reporter")
        return self._task

    def stop(self) -> None:
        """Stop the reporter."""
        self._running = False
        if self._task:
            self._task.cancel()

    def print_summary(self) -> None:
        """Print a final summary."""
        stats = self._metrics.scan_stats
        latency = self._metrics.get_latency_stats("update_to_eval")
        uptime = self._format_uptime(self._metrics.uptime_seconds)
        best = (
            f"{stats.best_profit_pct:+.4f}% ({stats.best_cycle})"
            if stats.best_profit_pct is not None
            else "---"
        )

        lines = [
            "",
            "=" * 50,
            "  SESSION SUMMARY",
            "=" * 50,
            f"  Uptime: {uptime}",
            f"  Cycles monitored: {self._cycle_count}",
            f"  Streams:          {self._stream_count}",
            "",
            "  SCAN:",
            f"    Book updates: {self._metrics.get_counter('book_updates'):,}",
            f"    Evaluations:  {stats.evaluations:,}",
            f"    Incomplete:   {stats.incomplete:,}",
            f"    Alerts:       {stats.alerts:,}",
            f"    Best return:  {best}",
            "",
            "  LATENCY (update -> eval):",
            f"    avg={format_duration_us(latency.avg_us)} "
            f"p99={format_duration_us(latency.p99_us)} "
            f"max={format_duration_us(latency.max_us)}",
            "=" * 50,
        ]

        self._output.write("\n".join(lines) + "\n")
        self._output.flush()
