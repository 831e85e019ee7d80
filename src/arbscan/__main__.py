"""
Entry point for the arbitrage scanner.

Usage:
    python -m arbscan find-cycles
    python -m arbscan scan [--combo eth-usd-btc]
    arbscan scan  # if installed via pip
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Coroutine
from typing import Any

from pydantic import ValidationError

from arbscan.config.settings import Settings


logger = logging.getLogger("arbscan.cli")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="arbscan",
        description="Triangular arbitrage scanner for Bitstamp order books",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Settings file (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override LOG_LEVEL",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "find-cycles",
        help="Enumerate cycles from pairs.json and tickers.txt, write the index",
    )

    scan = subparsers.add_parser(
        "scan",
        help="Stream order books and alert on profitable cycles",
    )
    scan.add_argument(
        "--combo",
        help="Scan a single cycle id (eth-usd-btc)",
    )

    return parser


def find_cycles(settings: Settings) -> int:
    """
    Build the pair graph, enumerate cycles, and persist the index.

    Returns:
        Number of cycles written.
    """
    from arbscan.storage import load_pairs, load_tickers, save_index
    from arbscan.strategy import ArbitrageIndex, PairGraph, TickerResolver, enumerate_cycles

    graph = PairGraph.from_pairs(load_pairs(settings.pairs_path))
    logger.debug(graph.describe())

    cycles = enumerate_cycles(graph, settings.cycle_length)

    resolver = TickerResolver(load_tickers(settings.tickers_path))
    index = ArbitrageIndex.build(cycles, resolver)

    save_index(index, settings.config_path, settings.pair_cycles_path)
    return len(index)


async def scan(settings: Settings) -> int:
    """Load the persisted index and scan until interrupted."""
    from arbscan.core.engine import create_engine
    from arbscan.storage import load_fx_pairs, load_index

    index = load_index(settings.config_path, settings.pair_cycles_path)

    if settings.combo:
        try:
            index = index.select([settings.combo])
        except KeyError:
            print(f"Cycle {settings.combo} not found in {settings.config_path}")
            return 1

    fx_pairs = load_fx_pairs(settings.fx_path)

    async with create_engine(settings, index, fx_pairs) as engine:
        await engine.run()

    return 0


def _run(coro: Coroutine[Any, Any, int], use_uvloop: bool) -> int:
    """Run the coroutine, on uvloop when available and enabled."""
    if use_uvloop:
        # Try to use uvloop for better performance
        try:
            import uvloop
        except ImportError:
            logger.debug("uvloop not installed, using the default event loop")
        else:
            return uvloop.run(coro)

    return asyncio.run(coro)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    from arbscan import __version__
    from arbscan.core.exceptions import ArbscanError, LoaderError
    from arbscan.telemetry.logger import setup_logging

    args = build_parser().parse_args(argv)

    # Print banner
    print(
        f"""
+---------------------------------------------------------------+
|     TRIANGULAR ARBITRAGE SCANNER v{__version__:<28}|
|     Bitstamp order book monitor                               |
+---------------------------------------------------------------+
    """
    )

    # Load settings
    overrides: dict[str, Any] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if getattr(args, "combo", None):
        overrides["combo"] = args.combo

    try:
        settings = Settings(_env_file=args.env_file, **overrides)  # type: ignore[call-arg]
    except ValidationError as e:
        print(f"Configuration error: {e}")
        return 1

    log_pipeline = setup_logging(settings.log_level, settings.log_file)

    try:
        if args.command == "find-cycles":
            find_cycles(settings)
            return 0

        # Print configuration summary
        print("Configuration:")
        print(f"  Index:          {settings.config_path}")
        print(f"  Taker fee:      {settings.taker_fee:.3f}%")
        print(f"  Reduced fee:    {settings.taker_fee_reduced:.3f}%")
        print(f"  Min PnL:        {settings.min_pnl:.3f}%")
        print(f"  Combo:          {settings.combo or 'all'}")
        print()

        return _run(scan(settings), settings.use_uvloop)

    except LoaderError as e:
        logger.error(f"Input error: {e}")
        return 1

    except ArbscanError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0

    finally:
        log_pipeline.stop()


if __name__ == "__main__":
    sys.exit(main())
