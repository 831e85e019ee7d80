"""
Type definitions for the scanner.

This module contains the dataclasses, enums, TypedDicts, and Protocol
definitions shared across the application. Using slots=True for
memory efficiency and faster attribute access.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, TypedDict

from arbscan.config.constants import CYCLE_KEY_SEPARATOR


# Ordered vertex keys of a cycle, implicitly closed (last -> first)
CycleKey = tuple[str, ...]

# Seed edges as loaded from pairs.json
PairList = Sequence[Sequence[str]]


def cycle_id(cycle: CycleKey) -> str:
    """Text form of a cycle key (eth-usd-btc)."""
    return CYCLE_KEY_SEPARATOR.join(cycle)


def parse_cycle_id(text: str) -> CycleKey:
    """Inverse of cycle_id()."""
    return tuple(part.strip() for part in text.split(CYCLE_KEY_SEPARATOR))


# =============================================================================
# Enums
# =============================================================================


class OrderSide(str, Enum):
    """Trade direction of a leg, valued as in the persisted config."""

    BUY = "buy"
    SELL = "sell"


# =============================================================================
# Cycle Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class Leg:
    """
    Single step of a cycle.

    `side` holds the raw value when a persisted config carries a
    direction outside OrderSide; the evaluator rejects it.
    """

    symbol: str
    side: OrderSide | str

    def __repr__(self) -> str:
        side = self.side.value if isinstance(self.side, OrderSide) else self.side
        return f"{self.symbol}:{side}"


@dataclass(slots=True, frozen=True)
class CycleConfig:
    """
    Resolved legs for one cycle.

    Pre-computed offline; read-only while scanning.
    """

    cycle: CycleKey
    legs: tuple[Leg, ...]

    @property
    def id(self) -> str:
        """Text cycle id used in JSON documents and logs."""
        return cycle_id(self.cycle)

    @property
    def pairs(self) -> list[str]:
        """Ordered leg symbols."""
        return [leg.symbol for leg in self.legs]

    @property
    def types(self) -> dict[str, OrderSide | str]:
        """Symbol -> direction."""
        return {leg.symbol: leg.side for leg in self.legs}

    def to_dict(self) -> "CycleConfigData":
        """Serialize to the persisted {pairs, types} layout."""
        return {
            "pairs": self.pairs,
            "types": {
                leg.symbol: leg.side.value if isinstance(leg.side, OrderSide) else leg.side
                for leg in self.legs
            },
        }

    @classmethod
    def from_dict(cls, cycle: CycleKey, data: "CycleConfigData") -> "CycleConfig":
        """Rebuild from the persisted layout."""
        types: Mapping[str, str] = data.get("types", {})
        legs = []
        for symbol in data["pairs"]:
            raw = types.get(symbol, "")
            try:
                side: OrderSide | str = OrderSide(raw)
            except ValueError:
                side = raw
            legs.append(Leg(symbol=symbol, side=side))
        return cls(cycle=cycle, legs=tuple(legs))


# =============================================================================
# Market Data Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class Top1Book:
    """
    Best bid and ask for one symbol.

    Frozen for immutability; replaced wholesale on every update.
    """

    symbol: str
    bid_price: float
    bid_amount: float
    ask_price: float
    ask_amount: float
    timestamp_us: int = 0

    @classmethod
    def empty(cls, symbol: str) -> "Top1Book":
        """Zero-priced placeholder for a symbol with no data yet."""
        return cls(symbol=symbol, bid_price=0.0, bid_amount=0.0, ask_price=0.0, ask_amount=0.0)


# =============================================================================
# Result Types
# =============================================================================


@dataclass(slots=True)
class ArbitrageResult:
    """
    Return of one cycle for one evaluation pass.

    `complete` is False when a leg was priced off a missing book,
    in which case profit_pct is degenerate (0 or inf).
    """

    cycle: CycleKey
    profit_pct: float
    complete: bool = True
    missing: tuple[str, ...] = field(default=())
    timestamp_us: int = 0

    @property
    def cycle_id(self) -> str:
        return cycle_id(self.cycle)

    def exceeds(self, threshold_pct: float) -> bool:
        """Check if this result should be alerted on."""
        return self.complete and self.profit_pct > threshold_pct


# =============================================================================
# TypedDicts for Persisted Documents
# =============================================================================


class CycleConfigData(TypedDict):
    """One entry of config.json."""

    pairs: list[str]
    types: dict[str, str]


ConfigDocument = dict[str, CycleConfigData]
PairIndexDocument = dict[str, list[str]]


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class AlertSink(Protocol):
    """Receives results that crossed the alert threshold."""

    def __call__(self, result: ArbitrageResult) -> None:
        ...

