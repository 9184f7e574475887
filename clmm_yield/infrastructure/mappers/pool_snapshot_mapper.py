from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot, RewardStream, TokenInfo
from clmm_yield.domain.services.pair_orientation import orient_price
from clmm_yield.domain.services.tick_math import sqrt_price_x64_to_price


def map_token(raw: Mapping[str, Any]) -> TokenInfo:
    return TokenInfo(
        symbol=str(raw["symbol"]),
        decimals=int(raw["decimals"]),
        usd_price=float(raw.get("current_price") or 0),
    )


def map_reward(raw: Mapping[str, Any]) -> RewardStream:
    token = raw.get("token") or {}
    return RewardStream(
        symbol=str(token.get("symbol", "")),
        apr=float(raw.get("apr") or 0),
        emissions_per_day=float(raw.get("emissions_per_day") or 0),
        token_usd_price=float(token.get("current_price") or 0),
        token_decimals=int(token.get("decimals") or 0),
    )


def is_quote_stable(token_a: TokenInfo, token_b: TokenInfo, stable_symbols: Collection[str]) -> bool:
    stables = {symbol.upper() for symbol in stable_symbols}
    return token_a.symbol.upper() in stables and token_b.symbol.upper() not in stables


def map_raw_to_pool_snapshot(
    raw: Mapping[str, Any],
    *,
    stable_symbols: Collection[str],
    default_tick_spacing: int,
    default_emission_decimals: int,
) -> PoolSnapshot:
    """Pool API payload -> PoolSnapshot.

    ``current_sqrt_price`` is Q64.64 and gives a B-per-A price; when token A
    is the stable side the user-facing price is its reciprocal. An explicit
    ``current_price`` is taken as already user-oriented.
    """
    token_a = map_token(raw["token_a"])
    token_b = map_token(raw["token_b"])
    quote_is_stable = is_quote_stable(token_a, token_b, stable_symbols)

    current_price = raw.get("current_price")
    if current_price is not None:
        current_price = float(current_price)
    elif raw.get("current_sqrt_price"):
        native_price = sqrt_price_x64_to_price(
            int(raw["current_sqrt_price"]),
            token_a.decimals,
            token_b.decimals,
        )
        current_price = orient_price(native_price, quote_is_stable=quote_is_stable, field_name="current_price")
    else:
        current_price = 0.0

    stats = raw.get("dinamic_stats") or {}
    tick_spacing = raw.get("tick_spacing")
    emission_decimals = raw.get("emission_decimals")
    rewards = tuple(map_reward(item) for item in raw.get("rewards") or ())

    return PoolSnapshot(
        pool_id=str(raw["address"]),
        token_a=token_a,
        token_b=token_b,
        current_price=current_price,
        tick_spacing=int(tick_spacing) if tick_spacing else default_tick_spacing,
        tvl_usd=float(stats.get("tvl") or 0),
        volume_24h_usd=float(stats.get("volume_usd_24h") or 0),
        fees_24h_usd=float(stats.get("fees_usd_24h") or 0),
        emission_per_day=int(raw.get("distributed_osail_24h") or 0),
        emission_decimals=int(emission_decimals) if emission_decimals is not None else default_emission_decimals,
        quote_is_stable=quote_is_stable,
        has_gauge=bool(raw.get("gauge_id")),
        reported_apr_pct=float(stats.get("apr") or 0),
        reward_list=tuple(reward for reward in rewards if reward.apr > 0),
    )
