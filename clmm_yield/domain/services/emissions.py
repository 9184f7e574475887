from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from clmm_yield.domain.entities.pool_snapshot import RewardStream


DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class ExternalRewardProjection:
    symbol: str
    apr: float
    projected_value_usd: float
    projected_tokens: float


def project_emissions(
    deposit_usd: float,
    pool_tvl_usd: float,
    daily_emission_amount: float,
    timeline_days: float,
) -> float:
    """Pro-rata share of the pool's daily emissions over the timeline, in reward tokens."""
    if pool_tvl_usd <= 0 or deposit_usd <= 0:
        return 0.0
    share = deposit_usd / pool_tvl_usd
    daily_emissions = daily_emission_amount * share
    return daily_emissions * timeline_days


def calculate_emission_apr(daily_emission_amount: float, token_usd_price: float, pool_tvl_usd: float) -> float:
    if pool_tvl_usd <= 0:
        return 0.0
    daily_value_usd = daily_emission_amount * token_usd_price
    return (daily_value_usd * DAYS_PER_YEAR) / pool_tvl_usd


def calculate_fee_apr(fees_24h_usd: float, pool_tvl_usd: float) -> float:
    if pool_tvl_usd <= 0 or fees_24h_usd <= 0:
        return 0.0
    return (fees_24h_usd / pool_tvl_usd) * DAYS_PER_YEAR


def project_external_rewards(
    deposit_usd: float,
    reward_list: Iterable[RewardStream],
    timeline_days: float,
    *,
    multiplier: float = 1.0,
) -> tuple[ExternalRewardProjection, ...]:
    if deposit_usd <= 0:
        return ()
    projections: list[ExternalRewardProjection] = []
    for stream in reward_list:
        if not stream.apr or stream.apr <= 0:
            continue
        value = deposit_usd * (stream.apr / 100) * (timeline_days / DAYS_PER_YEAR) * multiplier
        tokens = value / stream.token_usd_price if stream.token_usd_price > 0 else 0.0
        projections.append(
            ExternalRewardProjection(
                symbol=stream.symbol,
                apr=stream.apr,
                projected_value_usd=value,
                projected_tokens=tokens,
            )
        )
    return tuple(projections)


def external_rewards_apr_pct(reward_list: Iterable[RewardStream]) -> float:
    return sum((stream.apr for stream in reward_list if stream.apr and stream.apr > 0), 0.0)
