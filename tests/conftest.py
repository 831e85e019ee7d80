"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

from unittest.mock import AsyncMock

import pytest

from arbscan.core.types import CycleConfig, Leg, OrderSide, Top1Book
from arbscan.market.orderbook import BookCache
from arbscan.strategy.calculator import ArbitrageEvaluator
from arbscan.strategy.graph import PairGraph
from arbscan.strategy.index import ArbitrageIndex
from arbscan.strategy.resolver import TickerResolver
from arbscan.telemetry.alerts import CollectingAlertSink
from tests.mocks.books import make_book


# =============================================================================
# Seed Data Fixtures
# =============================================================================


@pytest.fixture
def triangle_pairs() -> list[list[str]]:
    """Seed edges of the eth/usd/btc triangle."""
    return [["eth", "usd"], ["btc", "usd"], ["eth", "btc"]]


@pytest.fixture
def triangle_tickers() -> list[str]:
    """Symbols listed for the eth/usd/btc triangle."""
    return ["ethusd", "btcusd", "ethbtc"]


@pytest.fixture
def triangle_graph(triangle_pairs: list[list[str]]) -> PairGraph:
    """Graph with the eth/usd/btc triangle."""
    return PairGraph.from_pairs(triangle_pairs)


@pytest.fixture
def resolver(triangle_tickers: list[str]) -> TickerResolver:
    """Resolver over the triangle tickers."""
    return TickerResolver(triangle_tickers)


# =============================================================================
# Cycle Config Fixtures
# =============================================================================


@pytest.fixture
def cycle_eth_usd_btc() -> CycleConfig:
    """
    eth -> usd -> btc -> eth.

    Sell eth for usd, buy btc with usd, buy eth with btc.
    """
    return CycleConfig(
        cycle=("eth", "usd", "btc"),
        legs=(
            Leg(symbol="ethusd", side=OrderSide.SELL),
            Leg(symbol="btcusd", side=OrderSide.BUY),
            Leg(symbol="ethbtc", side=OrderSide.BUY),
        ),
    )


@pytest.fixture
def index(cycle_eth_usd_btc: CycleConfig) -> ArbitrageIndex:
    """Index holding the single eth-usd-btc cycle."""
    index = ArbitrageIndex()
    index.register(cycle_eth_usd_btc)
    return index


# =============================================================================
# Book Fixtures
# =============================================================================


@pytest.fixture
def book_ethusd() -> Top1Book:
    """ETH/USD top of book."""
    return make_book("ethusd", bid=2000.0, ask=2001.0)


@pytest.fixture
def book_btcusd() -> Top1Book:
    """BTC/USD top of book."""
    return make_book("btcusd", bid=39990.0, ask=40000.0)


@pytest.fixture
def book_ethbtc() -> Top1Book:
    """ETH/BTC top of book, priced so the triangle is flat before fees."""
    return make_book("ethbtc", bid=0.0499, ask=0.05)


@pytest.fixture
def books() -> BookCache:
    """Create empty book cache."""
    return BookCache()


@pytest.fixture
def books_populated(
    books: BookCache,
    book_ethusd: Top1Book,
    book_btcusd: Top1Book,
    book_ethbtc: Top1Book,
) -> BookCache:
    """Book cache with all triangle symbols."""
    books.upsert(book_ethusd)
    books.upsert(book_btcusd)
    books.upsert(book_ethbtc)
    return books


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def evaluator() -> ArbitrageEvaluator:
    """Evaluator without fees."""
    return ArbitrageEvaluator(fee_rate=0.0)


@pytest.fixture
def alert_sink() -> CollectingAlertSink:
    """Alert sink that records every result."""
    return CollectingAlertSink()


@pytest.fixture
def mock_bitstamp_client() -> AsyncMock:
    """Mock REST client answering with triangle snapshots."""
    client = AsyncMock()

    snapshots = {
        "ethusd": make_book("ethusd", bid=2000.0, ask=2001.0),
        "btcusd": make_book("btcusd", bid=39990.0, ask=40000.0),
        "ethbtc": make_book("ethbtc", bid=0.0499, ask=0.05),
    }

    async def get_order_book(symbol: str) -> Top1Book:
        return snapshots[symbol]

    client.get_order_book.side_effect = get_order_book
    return client
