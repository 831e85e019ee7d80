"""
Arbitrage index: resolved cycle configs and the symbol reverse index.

Built once offline, persisted to JSON, and loaded read-only by the
scanner.
"""

import logging
from collections.abc import Iterable, Mapping

from arbscan.core.exceptions import LoaderError
from arbscan.core.types import (
    ConfigDocument,
    CycleConfig,
    CycleKey,
    PairIndexDocument,
    cycle_id,
    parse_cycle_id,
)
from arbscan.strategy.resolver import TickerResolver


logger = logging.getLogger(__name__)


def _check_legs(text: str, key: CycleKey, pairs: list[object]) -> None:
    """
    One symbol per leg; leg i must trade cycle[i] against cycle[i + 1].

    Directions are not checked here. An unknown side is kept and
    raises when the cycle is evaluated.
    """
    if len(pairs) != len(key):
        raise LoaderError(f"{text}: {len(pairs)} pairs for a cycle of length {len(key)}")

    closed = key + key[:1]
    for symbol, c1, c2 in zip(pairs, closed, closed[1:]):
        if not isinstance(symbol, str) or c1 not in symbol or c2 not in symbol:
            raise LoaderError(f"{text}: {symbol!r} does not trade {c1} against {c2}")


class ArbitrageIndex:
    """
    Cycle configs plus a symbol -> cycle ids index.

    The reverse index bounds the work done per book update to the
    cycles that actually trade the updated symbol.
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._configs: dict[CycleKey, CycleConfig] = {}
        self._pair_index: dict[str, list[CycleKey]] = {}

    @classmethod
    def build(
        cls,
        cycles: Iterable[CycleKey],
        resolver: TickerResolver,
    ) -> "ArbitrageIndex":
        """
        Assemble configs for every discovered cycle.

        Any resolution or classification failure propagates and aborts
        the whole batch; no partial index is returned.

        Args:
            cycles: Cycle keys from enumeration.
            resolver: Resolver over the exchange's ticker set.

        Returns:
            Populated index.

        Raises:
            ResolutionError: If any cycle cannot be resolved.
        """
        index = cls()

        for cycle in cycles:
            index.register(resolver.build_config(cycle))

        logger.info(
            f"Assembled {len(index)} cycle configs over {len(index.symbols())} symbols"
        )

        return index

    def register(self, config: CycleConfig) -> None:
        """
        Add a config and index its symbols.

        Registering the same cycle again leaves the index unchanged.
        """
        self._configs[config.cycle] = config

        for symbol in config.pairs:
            cycles = self._pair_index.setdefault(symbol, [])
            if config.cycle not in cycles:
                cycles.append(config.cycle)

    def get(self, cycle: CycleKey) -> CycleConfig | None:
        return self._configs.get(cycle)

    def __getitem__(self, cycle: CycleKey) -> CycleConfig:
        return self._configs[cycle]

    def cycles_for_symbol(self, symbol: str) -> list[CycleKey]:
        """
        Get cycles trading a symbol.

        Args:
            symbol: Exchange symbol.

        Returns:
            Cycle keys in registration order, empty if none.
        """
        return self._pair_index.get(symbol, [])

    def symbols(self) -> list[str]:
        """Get all indexed symbols."""
        return list(self._pair_index)

    def configs(self) -> list[CycleConfig]:
        return list(self._configs.values())

    def select(self, cycle_ids: Iterable[str]) -> "ArbitrageIndex":
        """
        Restrict the index to the given cycles.

        Raises:
            KeyError: If a cycle id is not indexed.
        """
        selected = ArbitrageIndex()
        for text in cycle_ids:
            key = parse_cycle_id(text)
            if key not in self._configs:
                raise KeyError(f"Unknown cycle id: {text}")
            selected.register(self._configs[key])
        return selected

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_config_json(self) -> ConfigDocument:
        """Serialize configs as {cycle id: {pairs, types}}."""
        return {config.id: config.to_dict() for config in self._configs.values()}

    def to_pair_index_json(self) -> PairIndexDocument:
        """Serialize the reverse index as {symbol: [cycle id, ...]}."""
        return {
            symbol: [cycle_id(cycle) for cycle in cycles]
            for symbol, cycles in self._pair_index.items()
        }

    @classmethod
    def from_json(
        cls,
        config_doc: Mapping[str, object],
        pair_index_doc: Mapping[str, list[str]] | None = None,
    ) -> "ArbitrageIndex":
        """
        Load a persisted index.

        The reverse index is rebuilt from the configs when
        `pair_index_doc` is not given; when given it must only name
        known cycles.

        Raises:
            LoaderError: On a malformed document.
        """
        index = cls()

        for text, data in config_doc.items():
            if not isinstance(data, Mapping) or not isinstance(data.get("pairs"), list):
                raise LoaderError(f"Malformed config entry for {text}")
            key = parse_cycle_id(text)
            _check_legs(text, key, data["pairs"])
            index.register(CycleConfig.from_dict(key, data))  # type: ignore[arg-type]

        if pair_index_doc is not None:
            index._pair_index = {}
            for symbol, ids in pair_index_doc.items():
                keys = [parse_cycle_id(text) for text in ids]
                unknown = [cycle_id(k) for k in keys if k not in index._configs]
                if unknown:
                    raise LoaderError(f"{symbol} references unknown cycles: {unknown}")
                index._pair_index[symbol] = list(dict.fromkeys(keys))

        return index

    def __contains__(self, cycle: object) -> bool:
        return cycle in self._configs

    def __len__(self) -> int:
        return len(self._configs)
