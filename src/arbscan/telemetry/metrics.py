"""
In-memory scanner metrics.

Counters, rolling latency windows, and evaluation statistics. Only
the dispatcher's consumer task records; readers take snapshots.
"""

import time
from collections import Counter, deque
from dataclasses import dataclass


@dataclass(frozen=True)
class LatencyStats:
    """Snapshot of one latency window."""

    min_us: int = 0
    max_us: int = 0
    avg_us: float = 0.0
    p50_us: int = 0
    p99_us: int = 0
    count: int = 0


class LatencyWindow:
    """Last `size` samples of one latency series."""

    __slots__ = ("_samples",)

    def __init__(self, size: int) -> None:
        self._samples: deque[int] = deque(maxlen=size)

    def add(self, latency_us: int) -> None:
        self._samples.append(latency_us)

    def stats(self) -> LatencyStats:
        """Summarize the window; zeros when empty."""
        if not self._samples:
            return LatencyStats()

        ordered = sorted(self._samples)
        n = len(ordered)

        return LatencyStats(
            min_us=ordered[0],
            max_us=ordered[-1],
            avg_us=sum(ordered) / n,
            p50_us=ordered[n // 2],
            p99_us=ordered[min(int(n * 0.99), n - 1)],
            count=n,
        )


@dataclass
class ScanStats:
    """
    Cycle evaluation statistics.

    Incomplete evaluations are counted but never become the best
    return, since their profit is degenerate.
    """

    evaluations: int = 0
    incomplete: int = 0
    alerts: int = 0
    best_profit_pct: float | None = None
    best_cycle: str = ""

    def record(self, cycle_id: str, profit_pct: float, complete: bool) -> None:
        """Record one evaluation."""
        self.evaluations += 1

        if not complete:
            self.incomplete += 1
            return

        if self.best_profit_pct is None or profit_pct > self.best_profit_pct:
            self.best_profit_pct = profit_pct
            self.best_cycle = cycle_id


class MetricsCollector:
    """
    Scanner metrics registry.

    - Named counters ("book_updates")
    - Named latency windows ("update_to_eval")
    - Evaluation and alert statistics
    """

    def __init__(self, latency_window_size: int = 1000) -> None:
        """
        Initialize metrics collector.

        Args:
            latency_window_size: Samples kept per latency series.
        """
        self._window_size = latency_window_size
        self._windows: dict[str, LatencyWindow] = {}
        self._counters: Counter[str] = Counter()
        self._scan_stats = ScanStats()
        self._started = time.monotonic()

    def record_latency(self, name: str, latency_us: int) -> None:
        """Add a sample to the `name` latency series."""
        window = self._windows.get(name)
        if window is None:
            window = self._windows[name] = LatencyWindow(self._window_size)
        window.add(latency_us)

    def increment_counter(self, name: str, value: int = 1) -> None:
        self._counters[name] += value

    def get_counter(self, name: str) -> int:
        """Get counter value, 0 if never incremented."""
        return self._counters[name]

    def record_evaluation(self, cycle_id: str, profit_pct: float, complete: bool) -> None:
        """Record a cycle evaluation."""
        self._scan_stats.record(cycle_id, profit_pct, complete)

    def record_alert(self) -> None:
        self._scan_stats.alerts += 1

    def get_latency_stats(self, name: str) -> LatencyStats:
        """
        Get latency statistics for a series.

        Returns:
            Summary of the series; zeros if nothing was recorded.
        """
        window = self._windows.get(name)
        return window.stats() if window is not None else LatencyStats()

    @property
    def scan_stats(self) -> ScanStats:
        """Get evaluation statistics."""
        return self._scan_stats

    @property
    def uptime_seconds(self) -> float:
        """Get seconds since creation."""
        return time.monotonic() - self._started
