"""
Pydantic models and decoders for Bitstamp order book messages.

Only the best level (index 0) of bids and asks is consumed.
"""

import logging
from typing import Any

import orjson
from pydantic import BaseModel, Field, ValidationError

from arbscan.config.constants import (
    EVENT_DATA,
    EVENT_SUBSCRIBE,
    EVENT_SUBSCRIPTION_SUCCEEDED,
    ORDER_BOOK_CHANNEL_PREFIX,
)
from arbscan.core.exceptions import FeedError
from arbscan.core.types import Top1Book
from arbscan.utils.time import get_timestamp_us


logger = logging.getLogger(__name__)


class OrderBookLevels(BaseModel):
    """Bids and asks as [price, amount] string pairs, best first."""

    bids: list[list[str]] = Field(default_factory=list)
    asks: list[list[str]] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    def to_top1(self, symbol: str) -> Top1Book:
        """
        Extract the best bid and ask.

        Raises:
            FeedError: If either side is empty or not numeric.
        """
        if not self.bids or not self.asks:
            raise FeedError(f"{symbol}: empty side in order book")

        try:
            bid_price, bid_amount = (float(v) for v in self.bids[0][:2])
            ask_price, ask_amount = (float(v) for v in self.asks[0][:2])
        except ValueError as e:
            raise FeedError(f"{symbol}: malformed price level: {e}") from e

        return Top1Book(
            symbol=symbol,
            bid_price=bid_price,
            bid_amount=bid_amount,
            ask_price=ask_price,
            ask_amount=ask_amount,
            timestamp_us=get_timestamp_us(),
        )


# REST snapshot has the same shape as the websocket data payload
OrderBookSnapshot = OrderBookLevels


class WsEnvelope(BaseModel):
    """Inbound websocket frame."""

    event: str
    channel: str = ""
    data: dict[str, Any] | None = None

    model_config = {"extra": "ignore"}

    @property
    def symbol(self) -> str:
        return self.channel.removeprefix(ORDER_BOOK_CHANNEL_PREFIX)


def subscribe_frame(symbol: str) -> str:
    """Outbound subscription for a symbol's order book channel."""
    return orjson.dumps(
        {
            "event": EVENT_SUBSCRIBE,
            "data": {"channel": f"{ORDER_BOOK_CHANNEL_PREFIX}{symbol}"},
        }
    ).decode()


def parse_ws_message(raw: str | bytes) -> Top1Book | None:
    """
    Decode one websocket frame.

    Args:
        raw: Frame payload.

    Returns:
        Top of book for data events, None for any other event.

    Raises:
        FeedError: On invalid JSON or a malformed data frame.
    """
    try:
        envelope = WsEnvelope.model_validate(orjson.loads(raw))
    except orjson.JSONDecodeError as e:
        raise FeedError(f"Invalid JSON: {e}") from e
    except ValidationError as e:
        raise FeedError(f"Malformed frame: {e}") from e

    if envelope.event == EVENT_SUBSCRIPTION_SUCCEEDED:
        logger.info(f"Subscribed to {envelope.channel}")
        return None

    if envelope.event != EVENT_DATA:
        logger.debug(f"Ignoring {envelope.event} on {envelope.channel}")
        return None

    if envelope.data is None:
        raise FeedError(f"Data event without payload on {envelope.channel}")

    try:
        levels = OrderBookLevels.model_validate(envelope.data)
    except ValidationError as e:
        raise FeedError(f"Malformed order book on {envelope.channel}: {e}") from e

    return levels.to_top1(envelope.symbol)


def parse_snapshot(symbol: str, body: str | bytes) -> Top1Book:
    """
    Decode a REST order book snapshot.

    Raises:
        FeedError: On invalid JSON or an empty book.
    """
    try:
        snapshot = OrderBookSnapshot.model_validate(orjson.loads(body))
    except orjson.JSONDecodeError as e:
        raise FeedError(f"{symbol}: invalid JSON: {e}") from e
    except ValidationError as e:
        raise FeedError(f"{symbol}: malformed snapshot: {e}") from e

    return snapshot.to_top1(symbol)
