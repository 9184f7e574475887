from __future__ import annotations

from dataclasses import replace

import pytest

from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot, RewardStream, TokenInfo


def _pool(**overrides) -> PoolSnapshot:
    pool = PoolSnapshot(
        pool_id="0xpool",
        token_a=TokenInfo(symbol="SUI", decimals=0, usd_price=1.0),
        token_b=TokenInfo(symbol="USDC", decimals=0, usd_price=1.0),
        current_price=1.0,
        tick_spacing=60,
        tvl_usd=1_000_000.0,
        volume_24h_usd=500_000.0,
        fees_24h_usd=1_000.0,
        emission_per_day=1_000 * 10**9,
        emission_decimals=9,
    )
    return replace(pool, **overrides)


@pytest.fixture
def make_pool():
    return _pool


@pytest.fixture
def reward_stream() -> RewardStream:
    return RewardStream(
        symbol="DEEP",
        apr=20.0,
        emissions_per_day=500.0,
        token_usd_price=2.0,
        token_decimals=6,
    )
