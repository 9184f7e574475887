from __future__ import annotations

from typing import Protocol

from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot


class PoolSnapshotPort(Protocol):
    def get_snapshot(self, *, pool_id: str) -> PoolSnapshot | None:
        ...
