"""
Unit tests for TickerResolver.

Tests symbol lookup in both concatenation orders and leg direction.
"""

import pytest

from arbscan.core.exceptions import InvalidPath, ResolutionError, UnknownTicker
from arbscan.core.types import OrderSide
from arbscan.strategy.resolver import TickerResolver


class TestTickerResolver:
    """Tests for TickerResolver."""

    def test_normalizes_tickers(self) -> None:
        """Test whitespace and case handling."""
        resolver = TickerResolver([" ETHUSD", "btcusd ", ""])

        assert len(resolver) == 2
        assert "ethusd" in resolver
        assert "btcusd" in resolver

    def test_resolve_cycle(self, resolver: TickerResolver) -> None:
        """Test resolution, including the closing leg."""
        symbols = resolver.resolve_cycle(("eth", "usd", "btc"))

        assert symbols == ["ethusd", "btcusd", "ethbtc"]

    def test_resolve_text_id(self, resolver: TickerResolver) -> None:
        """Test that the text form resolves the same way."""
        assert resolver.resolve_cycle("eth-usd-btc") == resolver.resolve_cycle(
            ("eth", "usd", "btc")
        )

    def test_resolve_reverse_direction(self, resolver: TickerResolver) -> None:
        """Test that the reversed walk uses the same symbols."""
        symbols = resolver.resolve_cycle(("eth", "btc", "usd"))

        assert symbols == ["ethbtc", "btcusd", "ethusd"]

    def test_unknown_ticker(self) -> None:
        """Test that a missing pair fails with both currencies named."""
        resolver = TickerResolver(["ethusd", "btcusd"])

        with pytest.raises(UnknownTicker) as exc_info:
            resolver.resolve_cycle(("eth", "usd", "btc"))

        assert exc_info.value.c1 == "btc"
        assert exc_info.value.c2 == "eth"
        assert isinstance(exc_info.value, ResolutionError)

    @pytest.mark.parametrize(
        "currency,symbol,expected",
        [
            ("eth", "ethusd", OrderSide.SELL),
            ("usd", "ethusd", OrderSide.BUY),
            ("usd", "btcusd", OrderSide.BUY),
            ("btc", "btcusd", OrderSide.SELL),
        ],
    )
    def test_classify_leg(self, currency: str, symbol: str, expected: OrderSide) -> None:
        """Test direction by currency position in the symbol."""
        assert TickerResolver.classify_leg(currency, symbol) == expected

    def test_classify_leg_invalid_path(self) -> None:
        """Test that a symbol not containing the currency fails."""
        with pytest.raises(InvalidPath) as exc_info:
            TickerResolver.classify_leg("ltc", "ethusd")

        assert exc_info.value.currency == "ltc"
        assert exc_info.value.symbol == "ethusd"

    def test_build_config(self, resolver: TickerResolver) -> None:
        """Test a fully classified config."""
        config = resolver.build_config(("eth", "usd", "btc"))

        assert config.id == "eth-usd-btc"
        assert config.pairs == ["ethusd", "btcusd", "ethbtc"]
        assert config.types == {
            "ethusd": OrderSide.SELL,
            "btcusd": OrderSide.BUY,
            "ethbtc": OrderSide.BUY,
        }

    def test_build_config_leg_count(self, resolver: TickerResolver) -> None:
        """Test that every currency gets a leg."""
        config = resolver.build_config("usd-btc-eth")

        assert len(config.legs) == len(config.cycle) == 3
        for currency, leg in zip(config.cycle, config.legs):
            assert currency in leg.symbol
