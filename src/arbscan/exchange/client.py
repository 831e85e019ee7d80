"""
Async Bitstamp REST client.

Fetches order book snapshots used to prime the book cache at startup:
- Single session with connection pooling
- Fast JSON parsing with orjson
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

import aiohttp

from arbscan.config.constants import (
    BITSTAMP_REST_URL,
    ENDPOINT_ORDER_BOOK,
    HTTP_REQUEST_TIMEOUT,
)
from arbscan.core.exceptions import (
    ExchangeAPIError,
    ExchangeClientError,
    FeedError,
)
from arbscan.core.types import Top1Book
from arbscan.market.messages import parse_snapshot


logger = logging.getLogger(__name__)


class BitstampClient:
    """
    Async Bitstamp REST API client.

    Only the public order book endpoint is used.
    """

    def __init__(
        self,
        base_url: str = BITSTAMP_REST_URL,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: REST endpoint.
            session: Optional shared HTTP session.
        """
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=20,
                keepalive_timeout=30,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=HTTP_REQUEST_TIMEOUT),
            )
            self._owns_session = True

        return self._session

    async def close(self) -> None:
        """Close the client session."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @asynccontextmanager
    async def _request_context(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Context manager for making requests."""
        session = await self._get_session()
        try:
            yield session
        except aiohttp.ClientError as e:
            raise ExchangeClientError(f"Network error: {e}") from e
        except TimeoutError as e:
            raise ExchangeClientError("Request timed out") from e

    async def _get(self, endpoint: str) -> str:
        """
        GET an endpoint and return the raw body.

        Raises:
            ExchangeAPIError: On an error status.
            ExchangeClientError: On network errors.
        """
        url = f"{self._base_url}{endpoint}"

        async with self._request_context() as session:
            async with session.get(url) as response:
                text = await response.text()
                if response.status >= 400:
                    raise ExchangeAPIError(
                        f"API error {response.status}: {text[:200]}",
                        code=response.status,
                    )
                return text

    async def get_order_book(self, symbol: str) -> Top1Book:
        """
        Fetch the top of book for a symbol.

        Args:
            symbol: Exchange symbol (ethusd).

        Returns:
            Best bid and ask.

        Raises:
            ExchangeClientError: On transport or status errors.
            FeedError: On a malformed snapshot.
        """
        body = await self._get(ENDPOINT_ORDER_BOOK.format(symbol=symbol))
        return parse_snapshot(symbol, body)

    async def fetch_initial_books(
        self,
        symbols: Iterable[str],
        queue: "asyncio.Queue[Top1Book]",
    ) -> int:
        """
        Prime the dispatcher with one snapshot per symbol.

        Symbols are fetched one after another; a failed symbol is logged
        and skipped.

        Args:
            symbols: Symbols to fetch.
            queue: Dispatcher queue receiving updates.

        Returns:
            Number of snapshots enqueued.
        """
        count = 0

        for symbol in symbols:
            try:
                book = await self.get_order_book(symbol)
            except (ExchangeClientError, FeedError) as e:
                logger.error(f"{symbol} init order book: {e}")
                continue

            logger.debug(f"{symbol} snapshot bid={book.bid_price} ask={book.ask_price}")
            queue.put_nowait(book)
            count += 1

        logger.info(f"Enqueued {count} initial order book snapshots")

        return count

    async def __aenter__(self) -> "BitstampClient":
        """Async context manager entry."""
        await self._get_session()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
