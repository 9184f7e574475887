from __future__ import annotations

from dataclasses import dataclass

from clmm_yield.domain.services.reward_strategy import StrategyComparison, StrategyValue


@dataclass(frozen=True)
class CompareRewardStrategiesInput:
    reward_amount: float
    lock_fraction_a: float
    lock_fraction_b: float
    token_usd_price: float | None = None
    rate_pct: float | None = None


@dataclass(frozen=True)
class CompareRewardStrategiesOutput:
    token_usd_price: float
    strategy_a: StrategyValue
    strategy_b: StrategyValue
    comparison: StrategyComparison
    blended_apr_factor_a: float
    blended_apr_factor_b: float
    blended_apr_pct_a: float | None = None
    blended_apr_pct_b: float | None = None
