"""
Alert sinks for profitable cycles.

The dispatcher hands every result above the threshold to a sink;
the default one writes a WARNING record flagged as an alert, which
the console formatter highlights on a terminal.
"""

import logging

from arbscan.core.types import ArbitrageResult
from arbscan.telemetry.logger import ALERT_ATTR


logger = logging.getLogger(__name__)


class LogAlertSink:
    """Logs alerts at WARNING."""

    def __init__(self) -> None:
        self._count = 0

    def __call__(self, result: ArbitrageResult) -> None:
        self._count += 1
        logger.warning(
            f"{result.cycle_id} {result.profit_pct:.4f}%",
            extra={ALERT_ATTR: True},
        )

    @property
    def count(self) -> int:
        return self._count


class CollectingAlertSink:
    """Keeps alerts in memory; useful for dry runs and tests."""

    def __init__(self) -> None:
        self.results: list[ArbitrageResult] = []

    def __call__(self, result: ArbitrageResult) -> None:
        self.results.append(result)
