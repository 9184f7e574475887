from __future__ import annotations

import logging

from clmm_yield.application.dto.reward_strategy import (
    CompareRewardStrategiesInput,
    CompareRewardStrategiesOutput,
)
from clmm_yield.application.ports.reward_token_price_port import RewardTokenPricePort
from clmm_yield.domain.exceptions import InvalidScenarioInputError
from clmm_yield.domain.services.reward_strategy import (
    blended_apr,
    calculate_strategy_value,
    compare_strategies,
    strategy_value_factor,
)


logger = logging.getLogger(__name__)


class CompareRewardStrategiesUseCase:
    def __init__(self, *, reward_price_port: RewardTokenPricePort):
        self._reward_price_port = reward_price_port

    def execute(self, command: CompareRewardStrategiesInput) -> CompareRewardStrategiesOutput:
        if command.reward_amount < 0:
            raise InvalidScenarioInputError("reward_amount must be zero or greater.")
        for name, fraction in (
            ("lock_fraction_a", command.lock_fraction_a),
            ("lock_fraction_b", command.lock_fraction_b),
        ):
            if not 0 <= fraction <= 1:
                raise InvalidScenarioInputError(f"{name} must be between 0 and 1.")

        token_usd_price = command.token_usd_price
        if token_usd_price is None:
            token_usd_price = self._reward_price_port.get_reward_token_price_usd()
        elif token_usd_price < 0:
            raise InvalidScenarioInputError("token_usd_price must be zero or greater.")
        if command.rate_pct is not None and command.rate_pct < 0:
            raise InvalidScenarioInputError("rate_pct must be zero or greater.")
        logger.info(
            "compare_reward_strategies: start reward_amount=%s lock_a=%s lock_b=%s price=%s",
            command.reward_amount,
            command.lock_fraction_a,
            command.lock_fraction_b,
            token_usd_price,
        )

        strategy_a = calculate_strategy_value(command.reward_amount, token_usd_price, command.lock_fraction_a)
        strategy_b = calculate_strategy_value(command.reward_amount, token_usd_price, command.lock_fraction_b)
        return CompareRewardStrategiesOutput(
            token_usd_price=token_usd_price,
            strategy_a=strategy_a,
            strategy_b=strategy_b,
            comparison=compare_strategies(strategy_a, strategy_b),
            blended_apr_factor_a=strategy_value_factor(command.lock_fraction_a),
            blended_apr_factor_b=strategy_value_factor(command.lock_fraction_b),
            blended_apr_pct_a=_blended_rate(command.rate_pct, command.lock_fraction_a),
            blended_apr_pct_b=_blended_rate(command.rate_pct, command.lock_fraction_b),
        )


def _blended_rate(rate_pct: float | None, lock_fraction: float) -> float | None:
    if rate_pct is None:
        return None
    return blended_apr(rate_pct, lock_fraction)
