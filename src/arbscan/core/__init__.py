"""Core module containing the engine, dispatcher, errors, and type definitions."""

from arbscan.core.exceptions import (
    ArbscanError,
    DuplicateEdge,
    DuplicateVertex,
    FeedError,
    InvalidDirection,
    InvalidPath,
    ResolutionError,
    StructuralError,
    UnknownTicker,
    UnknownVertex,
)
from arbscan.core.types import (
    ArbitrageResult,
    CycleConfig,
    CycleKey,
    Leg,
    OrderSide,
    Top1Book,
    cycle_id,
    parse_cycle_id,
)


__all__ = [
    "ArbitrageResult",
    "ArbscanError",
    "CycleConfig",
    "CycleKey",
    "DuplicateEdge",
    "DuplicateVertex",
    "FeedError",
    "InvalidDirection",
    "InvalidPath",
    "Leg",
    "OrderSide",
    "ResolutionError",
    "StructuralError",
    "Top1Book",
    "UnknownTicker",
    "UnknownVertex",
    "cycle_id",
    "parse_cycle_id",
]
