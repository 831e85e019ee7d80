"""
File loaders and writers for the scanner's inputs and outputs.

- pairs.json: [["eth", "usd"], ...] seed edges
- tickers.txt: ethusd,btcusd,ethbtc
- fx.json: ["EURUSD", ...] reduced-fee symbols
- config.json / pair-cycles.json: persisted arbitrage index
"""

import logging
from pathlib import Path
from typing import Any

import orjson

from arbscan.config.constants import TICKERS_DELIMITER
from arbscan.core.exceptions import LoaderError
from arbscan.strategy.index import ArbitrageIndex


logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    """Read and decode a JSON file."""
    try:
        return orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        raise LoaderError(f"File not found: {path}") from e
    except orjson.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e


def _write_json(path: Path, data: Any) -> None:
    """Write JSON with two-space indentation."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))


def load_pairs(path: Path) -> list[list[str]]:
    """
    Load the seed edge list.

    Raises:
        LoaderError: If the file is not an array of string arrays.
    """
    data = _read_json(path)

    if not isinstance(data, list) or not all(
        isinstance(pair, list) and all(isinstance(c, str) for c in pair) for pair in data
    ):
        raise LoaderError(f"{path} must be a JSON array of currency arrays")

    logger.info(f"Loaded {len(data)} pairs from {path}")
    return data


def load_tickers(path: Path) -> list[str]:
    """Load the delimited ticker list, dropping blanks and whitespace."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise LoaderError(f"File not found: {path}") from e

    tickers = [t.strip().lower() for t in text.split(TICKERS_DELIMITER) if t.strip()]

    logger.info(f"Loaded {len(tickers)} tickers from {path}")
    return tickers


def load_fx_pairs(path: Path) -> list[str]:
    """
    Load the reduced-fee symbols, lower-cased.

    A missing file means no symbol gets the reduced fee.
    """
    if not path.exists():
        logger.warning(f"{path} not found; every symbol pays the standard fee")
        return []

    data = _read_json(path)
    if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
        raise LoaderError(f"{path} must be a JSON array of symbols")

    return [s.lower() for s in data]


def save_index(index: ArbitrageIndex, config_path: Path, pair_cycles_path: Path) -> None:
    """Persist cycle configs and the symbol index."""
    _write_json(pair_cycles_path, index.to_pair_index_json())
    _write_json(config_path, index.to_config_json())

    logger.info(f"Wrote {len(index)} cycles to {config_path} and {pair_cycles_path}")


def load_index(config_path: Path, pair_cycles_path: Path | None = None) -> ArbitrageIndex:
    """
    Load a persisted index.

    The symbol index is rebuilt from the configs when its file is
    absent.

    Raises:
        LoaderError: On missing or malformed files.
    """
    config_doc = _read_json(config_path)
    if not isinstance(config_doc, dict):
        raise LoaderError(f"{config_path} must be a JSON object")

    pair_doc = None
    if pair_cycles_path is not None and pair_cycles_path.exists():
        pair_doc = _read_json(pair_cycles_path)
        if not isinstance(pair_doc, dict):
            raise LoaderError(f"{pair_cycles_path} must be a JSON object")

    index = ArbitrageIndex.from_json(config_doc, pair_doc)

    logger.info(f"Loaded {len(index)} cycles over {len(index.symbols())} symbols")
    return index
