from __future__ import annotations

import math

from clmm_yield.domain.exceptions import InvalidPriceError


def require_valid_price(price: float, *, field_name: str = "price") -> float:
    if price is None or not math.isfinite(price):
        raise InvalidPriceError(f"{field_name} must be a finite number.")
    if price <= 0:
        raise InvalidPriceError(f"{field_name} must be positive.")
    return float(price)


def invert_price(price: float, *, field_name: str = "price") -> float:
    return 1.0 / require_valid_price(price, field_name=field_name)


def orient_price(price: float, *, quote_is_stable: bool, field_name: str = "price") -> float:
    """Map a price between user orientation and pool-native orientation.

    The mapping is its own inverse, so the same call converts in both directions.
    """
    if quote_is_stable:
        return invert_price(price, field_name=field_name)
    return require_valid_price(price, field_name=field_name)


def orient_price_range(
    price_low: float,
    price_high: float,
    *,
    quote_is_stable: bool,
    low_field_name: str = "price_low",
    high_field_name: str = "price_high",
) -> tuple[float, float]:
    if quote_is_stable:
        # bounds swap when inverted: effective_low = 1/high, effective_high = 1/low
        return (
            invert_price(price_high, field_name=high_field_name),
            invert_price(price_low, field_name=low_field_name),
        )
    return (
        require_valid_price(price_low, field_name=low_field_name),
        require_valid_price(price_high, field_name=high_field_name),
    )
