from __future__ import annotations

from dataclasses import dataclass


# Redeeming pays out half the spot value; locking keeps the full value.
REDEEM_DISCOUNT = 0.5


@dataclass(frozen=True)
class StrategyValue:
    lock_amount: float
    lock_value: float
    redeem_amount: float
    redeem_value: float
    total_value: float
    value_multiplier: float


@dataclass(frozen=True)
class StrategyComparison:
    value_diff: float
    percent_diff: float
    winner: int


@dataclass(frozen=True)
class StrategyPreset:
    name: str
    lock_fraction: float


STRATEGY_PRESETS: dict[str, StrategyPreset] = {
    "lock_all": StrategyPreset("100% Lock", 1.0),
    "redeem_all": StrategyPreset("100% Redeem", 0.0),
    "balanced": StrategyPreset("50/50", 0.5),
    "mostly_lock": StrategyPreset("70% Lock", 0.7),
}


def calculate_strategy_value(reward_amount: float, token_usd_price: float, lock_fraction: float) -> StrategyValue:
    redeem_fraction = 1 - lock_fraction

    lock_amount = reward_amount * lock_fraction
    lock_value = lock_amount * token_usd_price

    redeem_amount = reward_amount * redeem_fraction
    redeem_value = redeem_amount * token_usd_price * REDEEM_DISCOUNT

    total_value = lock_value + redeem_value

    baseline_redeem_all = reward_amount * token_usd_price * REDEEM_DISCOUNT
    value_multiplier = total_value / baseline_redeem_all if baseline_redeem_all > 0 else 1.0

    return StrategyValue(
        lock_amount=lock_amount,
        lock_value=lock_value,
        redeem_amount=redeem_amount,
        redeem_value=redeem_value,
        total_value=total_value,
        value_multiplier=value_multiplier,
    )


def compare_strategies(a: StrategyValue, b: StrategyValue) -> StrategyComparison:
    value_diff = a.total_value - b.total_value
    percent_diff = (value_diff / b.total_value) * 100 if b.total_value != 0 else 0.0
    if value_diff > 0:
        winner = 1
    elif value_diff < 0:
        winner = 2
    else:
        winner = 0
    return StrategyComparison(value_diff=value_diff, percent_diff=percent_diff, winner=winner)


def lock_apr(rate_pct: float) -> float:
    return rate_pct


def redeem_apr(rate_pct: float) -> float:
    return rate_pct * REDEEM_DISCOUNT


def blended_apr(rate_pct: float, lock_fraction: float) -> float:
    return lock_apr(rate_pct) * lock_fraction + redeem_apr(rate_pct) * (1 - lock_fraction)


def strategy_value_factor(lock_fraction: float) -> float:
    """Share of full spot value realised for a given lock fraction (1.0 lock-all, 0.5 redeem-all)."""
    return lock_fraction + (1 - lock_fraction) * REDEEM_DISCOUNT
