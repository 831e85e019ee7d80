"""
Top-of-book cache with O(1) access.

Holds the latest best bid/ask for every symbol seen on the feed.
Only the dispatcher's consumer task writes to it.
"""

from arbscan.core.types import Top1Book


class BookCache:
    """
    Latest Top1Book per symbol.

    Features:
    - Dict-based storage for instant symbol lookup
    - Last write wins; no ordering or staleness checks
    - Entries are never expired or removed
    """

    __slots__ = ("_cache", "_update_count")

    def __init__(self) -> None:
        """Initialize empty cache."""
        self._cache: dict[str, Top1Book] = {}
        self._update_count: int = 0

    def upsert(self, book: Top1Book) -> None:
        """
        Replace the cached entry for `book.symbol`.

        A late, stale update silently overwrites a fresher one.

        Args:
            book: Top of book to store.
        """
        self._cache[book.symbol] = book
        self._update_count += 1

    def get(self, symbol: str) -> Top1Book | None:
        """
        Get top of book for a symbol.

        Args:
            symbol: Exchange symbol.

        Returns:
            Cached entry or None if never updated.
        """
        return self._cache.get(symbol)

    def get_or_empty(self, symbol: str) -> Top1Book:
        """Get top of book, or a zero-priced placeholder."""
        book = self._cache.get(symbol)
        return book if book is not None else Top1Book.empty(symbol)

    def has_symbol(self, symbol: str) -> bool:
        return symbol in self._cache

    @property
    def size(self) -> int:
        """Get number of cached symbols."""
        return len(self._cache)

    @property
    def update_count(self) -> int:
        """Get total number of updates received."""
        return self._update_count

    def __len__(self) -> int:
        return len(self._cache)
