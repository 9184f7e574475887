from __future__ import annotations

import math
from dataclasses import dataclass


# Externally reported range rates are calibrated to a +/-10% range (~20x).
BASELINE_LEVERAGE = 20


@dataclass(frozen=True)
class RangeRate:
    leverage: float
    estimated_rate_pct: float
    base_rate_pct: float
    is_concentrated: bool


@dataclass(frozen=True)
class RangePreset:
    label: str
    lower_pct: float
    upper_pct: float
    description: str


RANGE_PRESETS: tuple[RangePreset, ...] = (
    RangePreset("±10%", -10, 10, "±10% from current price"),
    RangePreset("±1%", -1, 1, "±1% from current price"),
    RangePreset("-50%/+100%", -50, 100, "Wide asymmetric range"),
    RangePreset("Full", -99, 10000, "Full Range"),
)


def calculate_leverage(current_price: float, price_low: float, price_high: float) -> float:
    if current_price is None or current_price <= 0:
        return 1.0
    if price_low is None or price_high is None:
        return 1.0
    if price_low <= 0 or price_high <= 0:
        return 1.0
    if price_low >= price_high:
        return 1.0

    if current_price < price_low or current_price > price_high:
        # out of range: only the range width is left to measure concentration
        leverage = 1.0 / (math.sqrt(price_high / price_low) - 1.0)
        return max(1.0, leverage)

    sqrt_low = math.sqrt(price_low / current_price)
    sqrt_high = math.sqrt(price_high / current_price)
    leverage = 1.0 / (sqrt_high - sqrt_low)
    return max(1.0, leverage)


def derive_base_rate(reported_rate_pct: float) -> float:
    if not reported_rate_pct or reported_rate_pct <= 0:
        return 0.0
    return reported_rate_pct / BASELINE_LEVERAGE


def calculate_estimated_rate(base_rate_pct: float, leverage: float) -> float:
    if not base_rate_pct or base_rate_pct <= 0:
        return 0.0
    if not leverage or leverage <= 0:
        return base_rate_pct
    return base_rate_pct * leverage


def calculate_range_rate(
    reported_rate_pct: float,
    current_price: float,
    price_low: float,
    price_high: float,
) -> RangeRate:
    base_rate = derive_base_rate(reported_rate_pct)
    leverage = calculate_leverage(current_price, price_low, price_high)
    return RangeRate(
        leverage=leverage,
        estimated_rate_pct=calculate_estimated_rate(base_rate, leverage),
        base_rate_pct=base_rate,
        is_concentrated=leverage > 1,
    )


def price_range_from_percent(
    current_price: float,
    lower_pct: float,
    upper_pct: float,
) -> tuple[float, float]:
    if not current_price or current_price <= 0:
        return 0.0, 0.0
    price_low = current_price * (1 + lower_pct / 100)
    price_high = current_price * (1 + upper_pct / 100)
    return max(0.0, price_low), price_high
