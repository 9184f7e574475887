from __future__ import annotations

import math
from dataclasses import dataclass

from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot
from clmm_yield.domain.services.pair_orientation import orient_price, orient_price_range


@dataclass(frozen=True)
class LiquidityEstimate:
    liquidity: float
    amount_a: float
    amount_b: float
    in_range: bool


def estimate_liquidity(
    deposit_usd: float,
    price_low: float,
    price_high: float,
    pool: PoolSnapshot,
) -> LiquidityEstimate:
    """Liquidity and token amounts for a USD-budgeted deposit in [price_low, price_high].

    Prices are user-oriented; the math runs on decimal-adjusted pool-native
    prices. Current price outside the range is a flagged result
    (``in_range=False``), not an error.
    """
    price_a = pool.token_a.usd_price
    price_b = pool.token_b.usd_price
    if not _all_positive(deposit_usd, price_low, price_high, pool.current_price, price_a, price_b):
        return _empty()
    if price_low >= price_high:
        return _empty()

    current = orient_price(pool.current_price, quote_is_stable=pool.quote_is_stable)
    low, high = orient_price_range(price_low, price_high, quote_is_stable=pool.quote_is_stable)

    decimal_adjust = 10 ** (pool.token_a.decimals - pool.token_b.decimals)
    scale_a = 10**pool.token_a.decimals
    scale_b = 10**pool.token_b.decimals
    sa = math.sqrt(low / decimal_adjust)
    sb = math.sqrt(high / decimal_adjust)
    sp = math.sqrt(current / decimal_adjust)

    if sp <= sa:
        amount_a = deposit_usd / price_a
        liquidity = (amount_a * scale_a) * sa * sb / (sb - sa)
        return LiquidityEstimate(
            liquidity=liquidity,
            amount_a=amount_a,
            amount_b=0.0,
            in_range=sp == sa,
        )

    if sp >= sb:
        amount_b = deposit_usd / price_b
        liquidity = (amount_b * scale_b) / (sb - sa)
        return LiquidityEstimate(
            liquidity=liquidity,
            amount_a=0.0,
            amount_b=amount_b,
            in_range=sp == sb,
        )

    amount_a = (deposit_usd / 2.0) / price_a
    liquidity = (amount_a * scale_a) * sp * sb / (sb - sp)
    amount_b = liquidity * (sp - sa) / scale_b
    return LiquidityEstimate(
        liquidity=liquidity,
        amount_a=amount_a,
        amount_b=amount_b,
        in_range=True,
    )


def _all_positive(*values: float) -> bool:
    return all(value is not None and math.isfinite(value) and value > 0 for value in values)


def _empty() -> LiquidityEstimate:
    return LiquidityEstimate(liquidity=0.0, amount_a=0.0, amount_b=0.0, in_range=False)
