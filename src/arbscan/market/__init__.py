"""Market data module for real-time order book feeds."""

from arbscan.market.orderbook import BookCache
from arbscan.market.websocket import BitstampFeed, ConnectionState


__all__ = [
    "BitstampFeed",
    "BookCache",
    "ConnectionState",
]
