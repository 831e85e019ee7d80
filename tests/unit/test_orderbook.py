"""
Unit tests for BookCache.

Tests top-of-book caching and updates.
"""

from arbscan.core.types import Top1Book
from arbscan.market.orderbook import BookCache
from tests.mocks.books import make_book


class TestBookCache:
    """Tests for BookCache."""

    def test_initialization(self) -> None:
        """Test empty initialization."""
        books = BookCache()

        assert books.size == 0
        assert books.update_count == 0
        assert len(books) == 0

    def test_upsert(self, books: BookCache, book_ethusd: Top1Book) -> None:
        """Test storing a book."""
        books.upsert(book_ethusd)

        assert books.size == 1
        assert books.update_count == 1
        assert books.has_symbol("ethusd")
        assert books.get("ethusd") == book_ethusd

    def test_last_write_wins(self, books: BookCache) -> None:
        """Test that a later update replaces the entry."""
        books.upsert(make_book("ethusd", bid=2000.0, ask=2001.0))
        books.upsert(make_book("ethusd", bid=1990.0, ask=1991.0))

        book = books.get("ethusd")
        assert book is not None
        assert book.bid_price == 1990.0
        assert books.size == 1
        assert books.update_count == 2

    def test_stale_update_overwrites(self, books: BookCache) -> None:
        """Test that update order, not timestamp, decides the entry."""
        fresh = Top1Book("ethusd", 2000.0, 1.0, 2001.0, 1.0, timestamp_us=200)
        stale = Top1Book("ethusd", 1900.0, 1.0, 1901.0, 1.0, timestamp_us=100)

        books.upsert(fresh)
        books.upsert(stale)

        assert books.get("ethusd") == stale

    def test_get_missing(self, books: BookCache) -> None:
        """Test lookups for a symbol never updated."""
        assert books.get("ethusd") is None
        assert not books.has_symbol("ethusd")

        empty = books.get_or_empty("ethusd")
        assert empty.bid_price == 0.0
        assert empty.ask_price == 0.0
        assert empty.symbol == "ethusd"

