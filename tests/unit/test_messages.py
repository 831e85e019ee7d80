"""
Unit tests for Bitstamp message decoding.

Tests websocket frames, REST snapshots, and subscription frames.
"""

import orjson
import pytest

from arbscan.core.exceptions import FeedError
from arbscan.market.messages import (
    OrderBookLevels,
    parse_snapshot,
    parse_ws_message,
    subscribe_frame,
)
from tests.mocks.books import order_book_payload


def _frame(event: str, channel: str, data: object = None) -> bytes:
    payload: dict[str, object] = {"event": event, "channel": channel}
    if data is not None:
        payload["data"] = data
    return orjson.dumps(payload)


class TestSubscribeFrame:
    """Tests for outbound subscription frames."""

    def test_subscribe_frame(self) -> None:
        """Test channel naming."""
        frame = orjson.loads(subscribe_frame("ethusd"))

        assert frame == {
            "event": "bts:subscribe",
            "data": {"channel": "order_book_ethusd"},
        }


class TestParseWsMessage:
    """Tests for inbound websocket frames."""

    def test_data_frame(self) -> None:
        """Test decoding the best level of an order book frame."""
        raw = _frame("data", "order_book_ethusd", order_book_payload(2000.0, 2001.0, 0.5))

        book = parse_ws_message(raw)

        assert book is not None
        assert book.symbol == "ethusd"
        assert book.bid_price == 2000.0
        assert book.ask_price == 2001.0
        assert book.bid_amount == 0.5
        assert book.timestamp_us > 0

    def test_only_best_level_used(self) -> None:
        """Test that deeper levels are ignored."""
        data = {
            "timestamp": "1700000000",
            "bids": [["2000.0", "1.0"], ["1999.0", "5.0"]],
            "asks": [["2001.0", "1.0"], ["2002.0", "5.0"]],
        }

        book = parse_ws_message(_frame("data", "order_book_ethusd", data))

        assert book is not None
        assert book.bid_price == 2000.0
        assert book.ask_price == 2001.0

    def test_subscription_succeeded(self) -> None:
        """Test that acknowledgements produce no update."""
        raw = _frame("bts:subscription_succeeded", "order_book_ethusd", {})

        assert parse_ws_message(raw) is None

    def test_other_event_ignored(self) -> None:
        """Test that unrelated events produce no update."""
        assert parse_ws_message(_frame("bts:heartbeat", "")) is None

    def test_invalid_json(self) -> None:
        """Test that garbage is a feed error."""
        with pytest.raises(FeedError):
            parse_ws_message("{not json")

    def test_missing_event(self) -> None:
        """Test that a frame without an event is a feed error."""
        with pytest.raises(FeedError):
            parse_ws_message(orjson.dumps({"channel": "order_book_ethusd"}))

    def test_data_without_payload(self) -> None:
        """Test that a data event must carry a book."""
        with pytest.raises(FeedError):
            parse_ws_message(_frame("data", "order_book_ethusd"))

    def test_empty_side(self) -> None:
        """Test that a book missing one side is a feed error."""
        data = {"bids": [["2000.0", "1.0"]], "asks": []}

        with pytest.raises(FeedError):
            parse_ws_message(_frame("data", "order_book_ethusd", data))

    def test_non_numeric_price(self) -> None:
        """Test that an unparsable price is a feed error."""
        data = {"bids": [["abc", "1.0"]], "asks": [["2001.0", "1.0"]]}

        with pytest.raises(FeedError):
            parse_ws_message(_frame("data", "order_book_ethusd", data))


class TestParseSnapshot:
    """Tests for REST snapshots."""

    def test_snapshot(self) -> None:
        """Test decoding a snapshot body."""
        body = orjson.dumps({"timestamp": "1700000000", **order_book_payload(39990.0, 40000.0)})

        book = parse_snapshot("btcusd", body)

        assert book.symbol == "btcusd"
        assert book.bid_price == 39990.0
        assert book.ask_price == 40000.0

    def test_snapshot_invalid(self) -> None:
        """Test that an unparsable body is a feed error."""
        with pytest.raises(FeedError):
            parse_snapshot("btcusd", b"<html>")

    def test_levels_model(self) -> None:
        """Test the order book model directly."""
        levels = OrderBookLevels.model_validate(order_book_payload(1.0, 2.0))

        assert levels.to_top1("ab").ask_price == 2.0
