"""Strategy module: graph, cycle discovery, symbol resolution, evaluation."""

from arbscan.strategy.calculator import ArbitrageEvaluator
from arbscan.strategy.cycles import enumerate_cycles
from arbscan.strategy.graph import PairGraph
from arbscan.strategy.index import ArbitrageIndex
from arbscan.strategy.resolver import TickerResolver


__all__ = [
    "ArbitrageEvaluator",
    "ArbitrageIndex",
    "PairGraph",
    "TickerResolver",
    "enumerate_cycles",
]
