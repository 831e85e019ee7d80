"""
Exception hierarchy for the scanner.

Structural and resolution errors are fatal during the one-time
offline build. Feed errors end the producer that raised them.
"""


class ArbscanError(Exception):
    """Base exception for all scanner errors."""


# =============================================================================
# Graph Construction
# =============================================================================


class StructuralError(ArbscanError):
    """The pair graph is malformed."""


class DuplicateVertex(StructuralError):
    """Vertex key already present in the graph."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Vertex {key} already exists")
        self.key = key


class UnknownVertex(StructuralError):
    """Edge endpoint not present in the graph."""

    def __init__(self, a: str, b: str) -> None:
        super().__init__(f"Invalid edge ({a})<--->({b})")
        self.a = a
        self.b = b


class DuplicateEdge(StructuralError):
    """Undirected edge already present in either direction."""

    def __init__(self, a: str, b: str) -> None:
        super().__init__(f"Edge already exists ({a})<--->({b})")
        self.a = a
        self.b = b


# =============================================================================
# Config Assembly
# =============================================================================


class ResolutionError(ArbscanError):
    """A cycle could not be mapped onto exchange symbols."""


class UnknownTicker(ResolutionError):
    """Neither concatenation of a currency pair is a known symbol."""

    def __init__(self, c1: str, c2: str) -> None:
        super().__init__(f"No ticker for {c1}/{c2} (tried {c1 + c2}, {c2 + c1})")
        self.c1 = c1
        self.c2 = c2


class InvalidPath(ResolutionError):
    """Leg symbol does not contain the currency being disposed of."""

    def __init__(self, currency: str, symbol: str) -> None:
        super().__init__(f"Invalid path: {symbol} does not contain {currency}")
        self.currency = currency
        self.symbol = symbol


# =============================================================================
# Evaluation
# =============================================================================


class EvaluationError(ArbscanError):
    """A cycle could not be valued."""


class InvalidDirection(EvaluationError):
    """Leg carries a trade direction other than buy or sell."""

    def __init__(self, symbol: str, side: object) -> None:
        super().__init__(f"Unrecognized direction {side!r} for {symbol}")
        self.symbol = symbol
        self.side = side


# =============================================================================
# Market Data & I/O
# =============================================================================


class FeedError(ArbscanError):
    """Malformed inbound frame or unexpected connection closure."""


class ExchangeClientError(ArbscanError):
    """Base exception for REST client errors."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class ExchangeAPIError(ExchangeClientError):
    """Exchange answered with an error status."""


class LoaderError(ArbscanError):
    """Input file missing or malformed."""
