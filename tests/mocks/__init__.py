"""Mock implementations for testing."""

from tests.mocks.books import make_book, order_book_payload
from tests.mocks.websocket import MockBitstampSocket


__all__ = [
    "MockBitstampSocket",
    "make_book",
    "order_book_payload",
]
