"""
WebSocket feed for real-time order book data.

Reads Bitstamp order book frames and enqueues top-of-book updates:
- One connection, one reader task
- Subscribe frames sent under a write timeout
- No reconnection; a feed error ends the reader
"""

import asyncio
import logging
from enum import Enum, auto

import aiohttp

from arbscan.config.constants import (
    BITSTAMP_WS_URL,
    CLOSE_GRACE_PERIOD,
    WS_MAX_MESSAGE_SIZE,
    WS_WRITE_TIMEOUT,
)
from arbscan.core.exceptions import FeedError
from arbscan.core.types import Top1Book
from arbscan.market.messages import parse_ws_message, subscribe_frame


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """WebSocket connection state."""

    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    CLOSED = auto()


class BitstampFeed:
    """
    Producer of book updates from the streaming transport.

    Never touches shared state: every decoded update is handed to the
    dispatcher queue.
    """

    def __init__(
        self,
        queue: "asyncio.Queue[Top1Book]",
        url: str = BITSTAMP_WS_URL,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the feed.

        Args:
            queue: Dispatcher queue receiving updates.
            url: Streaming endpoint.
            session: Optional shared HTTP session.
        """
        self._queue = queue
        self._url = url
        self._session = session
        self._owns_session = session is None

        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._state = ConnectionState.DISCONNECTED
        self._task: asyncio.Task[None] | None = None
        self._closing = False
        self._message_count = 0
        self._update_count = 0

    @property
    def state(self) -> ConnectionState:
        """Get current connection state."""
        return self._state

    @property
    def message_count(self) -> int:
        """Get total frames received."""
        return self._message_count

    @property
    def update_count(self) -> int:
        """Get total book updates enqueued."""
        return self._update_count

    async def connect(self) -> None:
        """
        Establish the WebSocket connection.

        Raises:
            FeedError: If the connection cannot be opened.
        """
        self._state = ConnectionState.CONNECTING

        try:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession()
                self._owns_session = True

            logger.info(f"Connecting to {self._url}")
            self._ws = await self._session.ws_connect(
                self._url,
                max_msg_size=WS_MAX_MESSAGE_SIZE,
            )

        except aiohttp.ClientError as e:
            self._state = ConnectionState.DISCONNECTED
            raise FeedError(f"Connection to {self._url} failed: {e}") from e

        self._state = ConnectionState.CONNECTED
        logger.info("Connected successfully")

    async def subscribe(self, symbols: list[str]) -> None:
        """
        Subscribe to order book channels.

        Each frame is bounded by WS_WRITE_TIMEOUT; the first failure
        aborts the subscription phase.

        Raises:
            FeedError: If not connected or a write fails.
        """
        if self._ws is None or self._ws.closed:
            raise FeedError("Cannot subscribe: not connected")

        for symbol in symbols:
            try:
                await asyncio.wait_for(
                    self._ws.send_str(subscribe_frame(symbol)),
                    timeout=WS_WRITE_TIMEOUT,
                )
            except TimeoutError as e:
                raise FeedError(f"Subscribe {symbol}: write timed out") from e
            except (aiohttp.ClientError, ConnectionError) as e:
                raise FeedError(f"Subscribe {symbol}: {e}") from e

        logger.info(f"Sent {len(symbols)} subscriptions")

    def _handle_message(self, msg: aiohttp.WSMessage) -> bool:
        """
        Process a WebSocket message.

        Args:
            msg: WebSocket message.

        Returns:
            False if the reader should stop.
        """
        if msg.type == aiohttp.WSMsgType.TEXT:
            self._message_count += 1
            try:
                update = parse_ws_message(msg.data)
            except FeedError as e:
                logger.error(f"Feed error: {e}")
                return False

            if update is not None:
                self._queue.put_nowait(update)
                self._update_count += 1

        elif msg.type == aiohttp.WSMsgType.ERROR:
            logger.error(f"Transport error: {msg.data}")
            return False

        return True

    async def run(self) -> None:
        """
        Read frames until the connection ends or a frame is malformed.

        aiohttp ends iteration on a close frame, so a close that
        close() did not initiate is reported here.
        """
        ws = self._ws
        if ws is None:
            raise FeedError("Cannot read: not connected")

        try:
            async for msg in ws:
                if not self._handle_message(msg):
                    break
            else:
                if self._closing:
                    logger.info("Connection closed")
                else:
                    logger.error(
                        f"Feed error: connection closed unexpectedly (code {ws.close_code})"
                    )

        except aiohttp.ClientError as e:
            logger.error(f"Error in message loop: {e}")

        finally:
            if self._state == ConnectionState.CONNECTED:
                self._state = ConnectionState.DISCONNECTED
            logger.info(
                f"Reader stopped after {self._message_count} frames, "
                f"{self._update_count} updates"
            )

    def start(self) -> "asyncio.Task[None]":
        """Start the reader as a task."""
        self._task = asyncio.create_task(self.run(), name="ws-reader")
        return self._task

    async def close(self, grace_period: float = CLOSE_GRACE_PERIOD) -> None:
        """
        Send a close frame and give the server `grace_period` to answer.

        The reader task is cancelled afterwards, whatever its state.
        """
        self._closing = True

        if self._ws is not None and not self._ws.closed:
            try:
                await asyncio.wait_for(self._ws.close(), timeout=grace_period)
            except TimeoutError:
                logger.warning(f"Server did not close within {grace_period:.1f}s")

        if self._task is not None and not self._task.done():
            self._task.cancel()

        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

        self._state = ConnectionState.CLOSED
        self._ws = None

    async def __aenter__(self) -> "BitstampFeed":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
