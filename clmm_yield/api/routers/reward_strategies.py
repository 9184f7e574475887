from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from clmm_yield.api.deps import get_compare_reward_strategies_use_case
from clmm_yield.api.schemas.reward_strategies import (
    CompareRewardStrategiesRequest,
    CompareRewardStrategiesResponse,
    StrategyValueResponse,
)
from clmm_yield.application.dto.reward_strategy import CompareRewardStrategiesInput
from clmm_yield.application.use_cases.compare_reward_strategies import CompareRewardStrategiesUseCase
from clmm_yield.domain.exceptions import InvalidScenarioInputError, PriceLookupDomainError
from clmm_yield.domain.services.reward_strategy import StrategyValue

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/v1/reward-strategies/compare", response_model=CompareRewardStrategiesResponse)
def compare_reward_strategies(
    req: CompareRewardStrategiesRequest,
    use_case: CompareRewardStrategiesUseCase = Depends(get_compare_reward_strategies_use_case),
):
    try:
        result = use_case.execute(
            CompareRewardStrategiesInput(
                reward_amount=req.reward_amount,
                lock_fraction_a=req.lock_fraction_a,
                lock_fraction_b=req.lock_fraction_b,
                token_usd_price=req.token_usd_price,
                rate_pct=req.rate_pct,
            )
        )
    except InvalidScenarioInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PriceLookupDomainError as exc:
        logger.warning("reward_strategies_router: price_lookup_failed detail=%s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return CompareRewardStrategiesResponse(
        token_usd_price=result.token_usd_price,
        strategy_a=_to_strategy_response(result.strategy_a, result.blended_apr_factor_a, result.blended_apr_pct_a),
        strategy_b=_to_strategy_response(result.strategy_b, result.blended_apr_factor_b, result.blended_apr_pct_b),
        value_diff=result.comparison.value_diff,
        percent_diff=result.comparison.percent_diff,
        winner=result.comparison.winner,
    )


def _to_strategy_response(
    value: StrategyValue,
    apr_factor: float,
    blended_apr_pct: float | None,
) -> StrategyValueResponse:
    return StrategyValueResponse(
        lock_amount=value.lock_amount,
        lock_value=value.lock_value,
        redeem_amount=value.redeem_amount,
        redeem_value=value.redeem_value,
        total_value=value.total_value,
        value_multiplier=value.value_multiplier,
        apr_factor=apr_factor,
        blended_apr_pct=blended_apr_pct,
    )
