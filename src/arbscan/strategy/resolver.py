"""
Cycle to exchange symbol resolution.

Maps an abstract currency cycle onto the concrete market symbols the
exchange lists, and decides the trade direction of every leg.
"""

from collections.abc import Iterable

from arbscan.core.exceptions import InvalidPath, UnknownTicker
from arbscan.core.types import CycleConfig, CycleKey, Leg, OrderSide, parse_cycle_id


class TickerResolver:
    """
    Resolves currency cycles against a known ticker set.

    A symbol is the concatenation of two currency codes (ethusd), so
    each consecutive currency pair is looked up in both orders.
    """

    __slots__ = ("_tickers",)

    def __init__(self, tickers: Iterable[str]) -> None:
        """
        Initialize resolver.

        Args:
            tickers: Exchange symbols; normalized to stripped lower case.
        """
        self._tickers: frozenset[str] = frozenset(
            t.strip().lower() for t in tickers if t.strip()
        )

    def resolve_cycle(self, cycle: CycleKey | str) -> list[str]:
        """
        Find the symbol for every leg of a cycle.

        Args:
            cycle: Cycle key or its text form (eth-usd-btc).

        Returns:
            Ordered symbols, one per leg.

        Raises:
            UnknownTicker: If a consecutive pair has no listed symbol.
        """
        currencies = parse_cycle_id(cycle) if isinstance(cycle, str) else tuple(cycle)
        closed = currencies + currencies[:1]

        symbols: list[str] = []
        for c1, c2 in zip(closed, closed[1:]):
            if c1 + c2 in self._tickers:
                symbols.append(c1 + c2)
            elif c2 + c1 in self._tickers:
                symbols.append(c2 + c1)
            else:
                raise UnknownTicker(c1, c2)

        return symbols

    @staticmethod
    def classify_leg(currency: str, symbol: str) -> OrderSide:
        """
        Decide the direction of a leg that disposes of `currency`.

        ethusd starts with eth -> sell eth; usdeth does not -> buy with eth.
        Either way the eth amount shrinks and the other grows.

        Raises:
            InvalidPath: If the currency does not appear in the symbol.
        """
        if currency not in symbol:
            raise InvalidPath(currency, symbol)

        return OrderSide.SELL if symbol.startswith(currency) else OrderSide.BUY

    def build_config(self, cycle: CycleKey | str) -> CycleConfig:
        """Resolve and classify every leg of a cycle."""
        currencies = parse_cycle_id(cycle) if isinstance(cycle, str) else tuple(cycle)
        symbols = self.resolve_cycle(currencies)

        legs = tuple(
            Leg(symbol=symbol, side=self.classify_leg(currency, symbol))
            for currency, symbol in zip(currencies, symbols)
        )

        return CycleConfig(cycle=currencies, legs=legs)

    @property
    def tickers(self) -> frozenset[str]:
        return self._tickers

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._tickers

    def __len__(self) -> int:
        return len(self._tickers)
