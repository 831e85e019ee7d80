"""
Scanner constants and configuration values.

This module contains all hardcoded values used throughout the scanner.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Bitstamp Endpoints
# =============================================================================

BITSTAMP_WS_URL: Final[str] = "wss://ws.bitstamp.net"
BITSTAMP_REST_URL: Final[str] = "https://www.bitstamp.net"

ENDPOINT_ORDER_BOOK: Final[str] = "/api/v2/order_book/{symbol}"


# =============================================================================
# Streaming Protocol
# =============================================================================

EVENT_SUBSCRIBE: Final[str] = "bts:subscribe"
EVENT_SUBSCRIPTION_SUCCEEDED: Final[str] = "bts:subscription_succeeded"
EVENT_DATA: Final[str] = "data"

ORDER_BOOK_CHANNEL_PREFIX: Final[str] = "order_book_"


# =============================================================================
# WebSocket Configuration
# =============================================================================

WS_WRITE_TIMEOUT: Final[float] = 10.0  # seconds, subscribe frames only
WS_MAX_MESSAGE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB

# Wait after sending the close frame before returning
CLOSE_GRACE_PERIOD: Final[float] = 1.0  # seconds

HTTP_REQUEST_TIMEOUT: Final[float] = 10.0  # seconds


# =============================================================================
# Cycle Discovery
# =============================================================================

DEFAULT_CYCLE_LENGTH: Final[int] = 3
MIN_CYCLE_LENGTH: Final[int] = 3

# Separator for the text form of a cycle key (eth-usd-btc)
CYCLE_KEY_SEPARATOR: Final[str] = "-"

TICKERS_DELIMITER: Final[str] = ","


# =============================================================================
# Trading Fees (percent, as published by the exchange)
# =============================================================================

DEFAULT_TAKER_FEE: Final[float] = 0.5
DEFAULT_TAKER_FEE_REDUCED: Final[float] = 0.2

# Alert when the cycle return is strictly above this (percent)
DEFAULT_MIN_PNL: Final[float] = 0.0

# Nominal notional a cycle is revalued with
START_AMOUNT: Final[float] = 1.0


# =============================================================================
# Default File Locations
# =============================================================================

DEFAULT_PAIRS_PATH: Final[str] = "pairs.json"
DEFAULT_TICKERS_PATH: Final[str] = "tickers.txt"
DEFAULT_CONFIG_PATH: Final[str] = "config.json"
DEFAULT_PAIR_CYCLES_PATH: Final[str] = "pair-cycles.json"
DEFAULT_FX_PATH: Final[str] = "fx.json"


# =============================================================================
# Logging & Telemetry
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Maximum log queue size
MAX_LOG_QUEUE_SIZE: Final[int] = 10_000

ALERT_COLOR: Final[str] = "\033[31m"
RESET_COLOR: Final[str] = "\033[0m"
