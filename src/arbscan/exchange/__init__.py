"""Exchange integration module for Bitstamp."""

from arbscan.exchange.client import BitstampClient


__all__ = [
    "BitstampClient",
]
