"""
End-to-end tests from seed files to alerts.

Covers the offline find-cycles build and the scanning engine with
fake producers.
"""

import asyncio
from collections.abc import Iterable
from pathlib import Path

import orjson
import pytest

from arbscan.__main__ import main
from arbscan.config.settings import Settings
from arbscan.core.engine import ScannerEngine
from arbscan.core.exceptions import InvalidDirection
from arbscan.core.types import CycleConfig, Leg, Top1Book
from arbscan.storage import load_index
from arbscan.strategy.index import ArbitrageIndex
from arbscan.telemetry.alerts import CollectingAlertSink
from tests.mocks.books import make_book


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Seed files and a .env pointing at them."""
    (tmp_path / "pairs.json").write_bytes(
        orjson.dumps([["eth", "usd"], ["btc", "usd"], ["eth", "btc"]])
    )
    (tmp_path / "tickers.txt").write_text("ethusd,btcusd,ethbtc,xrpusd")
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                f"PAIRS_PATH={tmp_path / 'pairs.json'}",
                f"TICKERS_PATH={tmp_path / 'tickers.txt'}",
                f"CONFIG_PATH={tmp_path / 'config.json'}",
                f"PAIR_CYCLES_PATH={tmp_path / 'pair-cycles.json'}",
            ]
        )
    )
    return tmp_path


class TestFindCycles:
    """Tests for the offline build command."""

    def test_find_cycles_writes_index(self, workspace: Path) -> None:
        """Test that the command writes both index files."""
        code = main(["--env-file", str(workspace / ".env"), "find-cycles"])

        assert code == 0

        index = load_index(workspace / "config.json", workspace / "pair-cycles.json")
        assert len(index) == 6
        assert sorted(index.symbols()) == ["btcusd", "ethbtc", "ethusd"]
        assert all(set(config.cycle) == {"eth", "usd", "btc"} for config in index.configs())

    def test_find_cycles_unknown_ticker(self, workspace: Path) -> None:
        """Test that an unresolvable cycle fails the build."""
        (workspace / "tickers.txt").write_text("ethusd,btcusd")

        code = main(["--env-file", str(workspace / ".env"), "find-cycles"])

        assert code == 1
        assert not (workspace / "config.json").exists()

    def test_find_cycles_missing_pairs(self, workspace: Path) -> None:
        """Test that a missing seed file fails cleanly."""
        (workspace / "pairs.json").unlink()

        assert main(["--env-file", str(workspace / ".env"), "find-cycles"]) == 1


class FakeFeed:
    """Stands in for BitstampFeed; records the lifecycle calls."""

    def __init__(self, queue: "asyncio.Queue[Top1Book]", url: str = "") -> None:
        self.queue = queue
        self.subscribed: list[str] = []
        self.started = False
        self.closed = False

    async def connect(self) -> None:
        pass

    def start(self) -> None:
        self.started = True

    async def subscribe(self, symbols: Iterable[str]) -> None:
        self.subscribed = list(symbols)

    async def close(self, grace_period: float = 0.0) -> None:
        self.closed = True


class FakeClient:
    """Stands in for BitstampClient; primes a profitable triangle."""

    books = [
        make_book("ethusd", bid=2000.0, ask=2001.0),
        make_book("btcusd", bid=39990.0, ask=40000.0),
        make_book("ethbtc", bid=0.0399, ask=0.04),
    ]

    def __init__(self, base_url: str = "") -> None:
        self.closed = False

    async def fetch_initial_books(
        self, symbols: Iterable[str], queue: "asyncio.Queue[Top1Book]"
    ) -> int:
        for book in self.books:
            queue.put_nowait(book)
        return len(self.books)

    async def close(self) -> None:
        self.closed = True


class TestScannerEngine:
    """Tests for the scanning engine with fake producers."""

    @pytest.fixture(autouse=True)
    def fake_producers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("arbscan.core.engine.BitstampFeed", FakeFeed)
        monkeypatch.setattr("arbscan.core.engine.BitstampClient", FakeClient)

    @pytest.fixture
    def settings(self) -> Settings:
        return Settings(_env_file=None, taker_fee=0.0, taker_fee_reduced=0.0)  # type: ignore[call-arg]

    @pytest.mark.asyncio
    async def test_scan_alerts_and_shuts_down(
        self, settings: Settings, index: ArbitrageIndex
    ) -> None:
        """Test snapshots flowing to an alert, then a clean shutdown."""
        sink = CollectingAlertSink()
        engine = ScannerEngine(settings, index, alert_sink=sink)
        await engine.setup()

        task = asyncio.create_task(engine.run())
        for _ in range(100):
            if engine.dispatcher.processed == 3:
                break
            await asyncio.sleep(0.01)

        engine._handle_shutdown()
        await asyncio.wait_for(task, timeout=5.0)

        assert len(sink.results) == 1
        assert sink.results[0].cycle_id == "eth-usd-btc"
        assert sink.results[0].profit_pct == pytest.approx(25.0)

        feed = engine._feed
        assert isinstance(feed, FakeFeed)
        assert feed.started
        assert feed.closed
        assert sorted(feed.subscribed) == ["btcusd", "ethbtc", "ethusd"]
        assert not engine.is_running

    @pytest.mark.asyncio
    async def test_consumer_failure_surfaces(self, settings: Settings) -> None:
        """Test that a corrupt config ends the run with its error."""
        index = ArbitrageIndex()
        index.register(CycleConfig(cycle=("eth", "usd", "btc"), legs=(Leg("ethusd", "hold"),)))
        engine = ScannerEngine(settings, index, alert_sink=CollectingAlertSink())
        await engine.setup()

        with pytest.raises(InvalidDirection):
            await asyncio.wait_for(engine.run(), timeout=5.0)

        assert isinstance(engine._feed, FakeFeed)
        assert engine._feed.closed
