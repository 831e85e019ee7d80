"""Configuration module for the scanner."""

from arbscan.config.constants import (
    BITSTAMP_REST_URL,
    BITSTAMP_WS_URL,
    CLOSE_GRACE_PERIOD,
    DEFAULT_CYCLE_LENGTH,
    WS_WRITE_TIMEOUT,
)
from arbscan.config.settings import Settings


__all__ = [
    "Settings",
    "BITSTAMP_REST_URL",
    "BITSTAMP_WS_URL",
    "CLOSE_GRACE_PERIOD",
    "DEFAULT_CYCLE_LENGTH",
    "WS_WRITE_TIMEOUT",
]
