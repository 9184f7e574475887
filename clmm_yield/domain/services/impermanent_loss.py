from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PriceChangeScenarios:
    optimistic: float
    expected: float
    pessimistic: float


@dataclass(frozen=True)
class VolatilityIlEstimate:
    optimistic: float
    expected: float
    pessimistic: float
    price_changes: PriceChangeScenarios


def calculate_il(p0: float, p1: float) -> float:
    """Full-range impermanent loss as a non-positive fraction (-0.05 == 5% loss)."""
    if p0 <= 0 or p1 <= 0 or p0 == p1:
        return 0.0
    ratio = p1 / p0
    return (2.0 * math.sqrt(ratio)) / (1.0 + ratio) - 1.0


def calculate_concentrated_il(p0: float, p1: float, pa: float, pb: float) -> float:
    """Impermanent loss of a position bounded to [pa, pb], entered at p0 and marked at p1.

    Entry outside the range falls back to the full-range formula; the
    single-token entry is not modelled.
    """
    if p0 <= 0 or p1 <= 0 or pa <= 0 or pb <= 0:
        return 0.0
    if pa >= pb:
        return 0.0
    if p0 < pa or p0 > pb:
        return calculate_il(p0, p1)

    sqrt_pa = math.sqrt(pa)
    sqrt_pb = math.sqrt(pb)
    x0, y0 = _amounts_in_range(math.sqrt(p0), sqrt_pa, sqrt_pb)
    initial_value = x0 * p0 + y0
    if initial_value <= 0:
        return 0.0

    if p1 <= pa:
        x1 = 1.0 / sqrt_pa - 1.0 / sqrt_pb
        y1 = 0.0
    elif p1 >= pb:
        x1 = 0.0
        y1 = sqrt_pb - sqrt_pa
    else:
        x1, y1 = _amounts_in_range(math.sqrt(p1), sqrt_pa, sqrt_pb)

    lp_value = x1 * p1 + y1
    hodl_value = x0 * p1 + y0
    if hodl_value <= 0:
        return 0.0
    return lp_value / hodl_value - 1.0


def estimate_il_from_volatility(annualized_volatility: float, timeline_days: float) -> VolatilityIlEstimate:
    time_scale = math.sqrt(max(0.0, timeline_days) / 365)
    scaled_vol = annualized_volatility * time_scale

    # 0.5, 1 and 2 standard-deviation moves
    price_changes = PriceChangeScenarios(
        optimistic=1 + scaled_vol * 0.5,
        expected=1 + scaled_vol * 1.0,
        pessimistic=1 + scaled_vol * 2.0,
    )
    return VolatilityIlEstimate(
        optimistic=calculate_il(1, price_changes.optimistic),
        expected=calculate_il(1, price_changes.expected),
        pessimistic=calculate_il(1, price_changes.pessimistic),
        price_changes=price_changes,
    )


def calculate_il_dollar_value(deposit_usd: float, il_pct: float) -> float:
    return abs(il_pct) * max(0.0, deposit_usd)


def _amounts_in_range(sqrt_p: float, sqrt_pa: float, sqrt_pb: float) -> tuple[float, float]:
    return 1.0 / sqrt_p - 1.0 / sqrt_pb, sqrt_p - sqrt_pa
