from __future__ import annotations

import json
import logging
from collections.abc import Collection
from pathlib import Path
from threading import Lock

from clmm_yield.application.ports.pool_snapshot_port import PoolSnapshotPort
from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot
from clmm_yield.infrastructure.mappers.pool_snapshot_mapper import map_raw_to_pool_snapshot


logger = logging.getLogger(__name__)


class JsonPoolSnapshotRepository(PoolSnapshotPort):
    """Pool snapshots read from a JSON file holding a list of pool payloads (or ``{"pools": [...]}``)."""

    def __init__(
        self,
        path: str | Path,
        *,
        stable_symbols: Collection[str],
        default_tick_spacing: int,
        default_emission_decimals: int,
    ):
        self._path = Path(path)
        self._stable_symbols = tuple(stable_symbols)
        self._default_tick_spacing = default_tick_spacing
        self._default_emission_decimals = default_emission_decimals
        self._snapshots: dict[str, PoolSnapshot] | None = None
        self._lock = Lock()

    def get_snapshot(self, *, pool_id: str) -> PoolSnapshot | None:
        return self._load().get(pool_id.strip().lower())

    def _load(self) -> dict[str, PoolSnapshot]:
        with self._lock:
            if self._snapshots is None:
                self._snapshots = self._read()
            return self._snapshots

    def _read(self) -> dict[str, PoolSnapshot]:
        if not self._path.exists():
            logger.warning("pool_snapshots: file not found path=%s", self._path)
            return {}
        payload = json.loads(self._path.read_text(encoding="utf-8"))
        items = payload.get("pools", []) if isinstance(payload, dict) else payload
        snapshots: dict[str, PoolSnapshot] = {}
        for raw in items:
            snapshot = map_raw_to_pool_snapshot(
                raw,
                stable_symbols=self._stable_symbols,
                default_tick_spacing=self._default_tick_spacing,
                default_emission_decimals=self._default_emission_decimals,
            )
            snapshots[snapshot.pool_id.strip().lower()] = snapshot
        logger.info("pool_snapshots: loaded path=%s pools=%s", self._path, len(snapshots))
        return snapshots
