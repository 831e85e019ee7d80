"""
Cycle return calculation.

Compounds a nominal amount through every leg of a cycle at the
current top of book, with per-symbol taker fees.
"""

import logging
import math
from collections.abc import Iterable

from arbscan.config.constants import START_AMOUNT
from arbscan.core.exceptions import InvalidDirection
from arbscan.core.types import ArbitrageResult, CycleConfig, OrderSide, Top1Book
from arbscan.market.orderbook import BookCache
from arbscan.utils.time import get_timestamp_us


logger = logging.getLogger(__name__)


class ArbitrageEvaluator:
    """
    Computes the percentage return of a cycle.

    - BUY legs pay the ask: amount / ask
    - SELL legs hit the bid: amount * bid
    - Fees are charged on the input amount of every leg
    """

    __slots__ = ("_fee_rate", "_reduced_fee_rate", "_reduced_fee_symbols")

    def __init__(
        self,
        fee_rate: float,
        reduced_fee_rate: float = 0.0,
        reduced_fee_symbols: Iterable[str] = (),
    ) -> None:
        """
        Initialize evaluator.

        Args:
            fee_rate: Standard taker fee as a fraction (0.005 = 0.5%).
            reduced_fee_rate: Fee as a fraction for reduced-fee symbols.
            reduced_fee_symbols: Symbols charged the reduced fee.
        """
        self._fee_rate = fee_rate
        self._reduced_fee_rate = reduced_fee_rate
        self._reduced_fee_symbols = frozenset(s.lower() for s in reduced_fee_symbols)

    def fee_for(self, symbol: str) -> float:
        """Get the fee fraction charged on a symbol."""
        if symbol in self._reduced_fee_symbols:
            return self._reduced_fee_rate
        return self._fee_rate

    def trade(self, amount: float, side: OrderSide | str, fee: float, book: Top1Book) -> float:
        """
        Convert `amount` through one leg.

        A zero ask on a BUY yields inf rather than raising, so a cycle
        with a missing book degrades instead of crashing the consumer.

        Raises:
            InvalidDirection: If side is neither buy nor sell.
        """
        after_fee = amount * (1.0 - fee)

        if side == OrderSide.BUY:
            if book.ask_price == 0.0:
                return math.inf if after_fee > 0 else 0.0
            return after_fee / book.ask_price
        if side == OrderSide.SELL:
            return after_fee * book.bid_price

        raise InvalidDirection(book.symbol, side)

    def evaluate(self, config: CycleConfig, books: BookCache) -> ArbitrageResult:
        """
        Value a cycle against the current books.

        Args:
            config: Resolved cycle.
            books: Latest top of book per symbol.

        Returns:
            Result with the percentage return; `complete` is False if any
            leg had no book yet.
        """
        amount = START_AMOUNT
        missing: list[str] = []

        for leg in config.legs:
            if not books.has_symbol(leg.symbol):
                missing.append(leg.symbol)
            book = books.get_or_empty(leg.symbol)

            amount = self.trade(amount, leg.side, self.fee_for(leg.symbol), book)

        profit_pct = (amount - START_AMOUNT) / START_AMOUNT * 100

        return ArbitrageResult(
            cycle=config.cycle,
            profit_pct=profit_pct,
            complete=not missing,
            missing=tuple(missing),
            timestamp_us=get_timestamp_us(),
        )

    @property
    def fee_rate(self) -> float:
        """Get standard fee fraction."""
        return self._fee_rate

    @property
    def reduced_fee_rate(self) -> float:
        """Get reduced fee fraction."""
        return self._reduced_fee_rate

    @property
    def reduced_fee_symbols(self) -> frozenset[str]:
        return self._reduced_fee_symbols
