from __future__ import annotations

import math
from typing import Literal

from clmm_yield.domain.exceptions import InvalidPriceError, InvalidRangeError
from clmm_yield.domain.services.pair_orientation import (
    orient_price,
    orient_price_range,
    require_valid_price,
)


LOG_BASE = math.log(1.0001)
Q64 = 2**64
MIN_TICK = -443636
MAX_TICK = 443636
_TICK_SNAP_EPSILON = 1e-9


def tick_to_price(tick: int | float, decimals_a: int, decimals_b: int) -> float:
    decimal_adjust = 10 ** (decimals_a - decimals_b)
    return math.exp(float(tick) * LOG_BASE) * decimal_adjust


def tick_to_sqrt_price_x64(tick: int | float) -> int:
    return int(math.exp(float(tick) * LOG_BASE / 2.0) * Q64)


def align_tick_floor(tick: int, tick_spacing: int) -> int:
    if tick_spacing <= 0:
        raise ValueError("tick_spacing must be positive.")
    return math.floor(tick / tick_spacing) * tick_spacing


def align_tick_ceil(tick: int, tick_spacing: int) -> int:
    if tick_spacing <= 0:
        raise ValueError("tick_spacing must be positive.")
    return math.ceil(tick / tick_spacing) * tick_spacing


def usable_tick_bounds(tick_spacing: int) -> tuple[int, int]:
    return align_tick_ceil(MIN_TICK, tick_spacing), align_tick_floor(MAX_TICK, tick_spacing)


def price_to_tick(
    price: float,
    decimals_a: int,
    decimals_b: int,
    tick_spacing: int,
    *,
    round_up: bool = False,
) -> int:
    """Pool-native price -> initializable tick.

    Lower bounds round down and upper bounds round up (``round_up=True``) so a
    range built from two calls is never narrower than the prices asked for.
    """
    value = _price_to_tick_value(price, decimals_a, decimals_b)
    if round_up:
        tick = align_tick_ceil(math.ceil(value), tick_spacing)
    else:
        tick = align_tick_floor(math.floor(value), tick_spacing)
    min_usable, max_usable = usable_tick_bounds(tick_spacing)
    return max(min_usable, min(max_usable, tick))


def price_range_to_ticks(
    price_low: float,
    price_high: float,
    decimals_a: int,
    decimals_b: int,
    tick_spacing: int,
    *,
    quote_is_stable: bool = False,
) -> tuple[int, int]:
    effective_low, effective_high = orient_price_range(
        price_low,
        price_high,
        quote_is_stable=quote_is_stable,
    )
    if effective_low >= effective_high:
        raise InvalidRangeError("price_low must be lower than price_high.")
    tick_lower = price_to_tick(effective_low, decimals_a, decimals_b, tick_spacing)
    tick_upper = price_to_tick(effective_high, decimals_a, decimals_b, tick_spacing, round_up=True)
    if tick_lower >= tick_upper:
        raise InvalidRangeError(
            f"tick_lower ({tick_lower}) must be lower than tick_upper ({tick_upper})."
        )
    return tick_lower, tick_upper


def ticks_to_price_range(
    tick_lower: int,
    tick_upper: int,
    decimals_a: int,
    decimals_b: int,
    *,
    quote_is_stable: bool = False,
) -> tuple[float, float]:
    if tick_lower >= tick_upper:
        raise InvalidRangeError("tick_lower must be lower than tick_upper.")
    price_lower = tick_to_price(tick_lower, decimals_a, decimals_b)
    price_upper = tick_to_price(tick_upper, decimals_a, decimals_b)
    return orient_price_range(price_lower, price_upper, quote_is_stable=quote_is_stable)


def sqrt_price_x64_to_price(sqrt_price_x64: int, decimals_a: int, decimals_b: int) -> float:
    if sqrt_price_x64 is None or sqrt_price_x64 <= 0:
        raise InvalidPriceError("Invalid sqrt_price_x64.")
    sqrt_price = sqrt_price_x64 / Q64
    return sqrt_price * sqrt_price * (10 ** (decimals_a - decimals_b))


def current_tick(sqrt_price_x64: int) -> int:
    if sqrt_price_x64 is None or sqrt_price_x64 <= 0:
        raise InvalidPriceError("Invalid sqrt_price_x64.")
    value = 2.0 * (math.log(sqrt_price_x64) - math.log(Q64)) / LOG_BASE
    return math.floor(_snap(value))


def preset_price_range(
    *,
    preset: Literal["stable", "wide"],
    current_price: float,
    tick_spacing: int,
    decimals_a: int,
    decimals_b: int,
    quote_is_stable: bool = False,
) -> tuple[float, float, int, int]:
    """Default range presets around the current (user-oriented) price.

    ``stable`` spans 3 usable ticks each side of the current tick, ``wide``
    spans 0.5x-2x of the current price. Returned prices are user-oriented,
    ticks are pool-native.
    """
    if tick_spacing <= 0:
        raise ValueError("tick_spacing must be positive.")
    ref_price = orient_price(current_price, quote_is_stable=quote_is_stable, field_name="current_price")

    if preset == "stable":
        current = align_tick_floor(
            math.floor(_price_to_tick_value(ref_price, decimals_a, decimals_b)),
            tick_spacing,
        )
        min_tick = current - (3 * tick_spacing)
        max_tick = current + (3 * tick_spacing)
    elif preset == "wide":
        min_tick = price_to_tick(ref_price * 0.5, decimals_a, decimals_b, tick_spacing)
        max_tick = price_to_tick(ref_price * 2.0, decimals_a, decimals_b, tick_spacing, round_up=True)
    else:
        raise ValueError("preset must be one of: stable, wide.")

    if min_tick >= max_tick:
        max_tick = min_tick + tick_spacing

    min_price, max_price = ticks_to_price_range(
        min_tick,
        max_tick,
        decimals_a,
        decimals_b,
        quote_is_stable=quote_is_stable,
    )
    return min_price, max_price, min_tick, max_tick


def _price_to_tick_value(price: float, decimals_a: int, decimals_b: int) -> float:
    price = require_valid_price(price)
    decimal_adjust = 10 ** (decimals_a - decimals_b)
    raw_price = price / decimal_adjust
    if raw_price <= 0 or not math.isfinite(raw_price):
        raise InvalidPriceError("price produced invalid raw value.")
    return _snap(math.log(raw_price) / LOG_BASE)


def _snap(value: float) -> float:
    # float noise at exact tick prices
    nearest = round(value)
    if abs(value - nearest) < _TICK_SNAP_EPSILON:
        return float(nearest)
    return value
