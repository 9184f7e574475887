from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TokenInfo:
    symbol: str
    decimals: int
    usd_price: float


@dataclass(frozen=True)
class RewardStream:
    symbol: str
    apr: float
    emissions_per_day: float
    token_usd_price: float
    token_decimals: int


@dataclass(frozen=True)
class PoolSnapshot:
    """Point-in-time view of a pool, as handed over by the pool-data collaborator.

    ``current_price`` is always quote-per-base from the user's point of view.
    ``quote_is_stable`` tells the engine that pool token A is the stable side,
    so pool-native prices (token B per token A) are the reciprocal of user prices.
    ``emission_per_day`` is the raw on-chain amount; scale it with
    ``emission_decimals`` (see ``emission_per_day_tokens``).
    """

    pool_id: str
    token_a: TokenInfo
    token_b: TokenInfo
    current_price: float
    tick_spacing: int
    tvl_usd: float
    volume_24h_usd: float
    fees_24h_usd: float
    emission_per_day: int
    emission_decimals: int
    quote_is_stable: bool = False
    has_gauge: bool = False
    reported_apr_pct: float = 0.0
    reward_list: tuple[RewardStream, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return f"{self.token_a.symbol}/{self.token_b.symbol}"

    @property
    def emission_per_day_tokens(self) -> float:
        if self.emission_per_day <= 0:
            return 0.0
        return self.emission_per_day / (10**self.emission_decimals)
