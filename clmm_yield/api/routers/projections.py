from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from clmm_yield.api.deps import get_project_portfolio_use_case
from clmm_yield.api.schemas.projections import (
    PortfolioSummaryResponse,
    PositionResponse,
    ProjectionResponse,
    ProjectionsRequest,
    ProjectionsResponse,
    ScenarioProjectionResponse,
    TickRangeResponse,
    VolatilityIlResponse,
)
from clmm_yield.application.dto.projection import (
    ProjectPortfolioInput,
    ScenarioInput,
    ScenarioProjectionOutput,
)
from clmm_yield.application.use_cases.project_portfolio import ProjectPortfolioUseCase
from clmm_yield.domain.exceptions import (
    InvalidPriceError,
    InvalidRangeError,
    InvalidScenarioInputError,
    PriceLookupDomainError,
    ScenarioLimitError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/v1/projections", response_model=ProjectionsResponse)
def project_portfolio(
    req: ProjectionsRequest,
    use_case: ProjectPortfolioUseCase = Depends(get_project_portfolio_use_case),
):
    try:
        result = use_case.execute(
            ProjectPortfolioInput(
                scenarios=tuple(
                    ScenarioInput(
                        pool_id=item.pool_id,
                        deposit_usd=item.deposit_usd,
                        price_low=item.price_low,
                        price_high=item.price_high,
                        timeline_days=item.timeline_days,
                        reward_split_pct=item.reward_split_pct,
                        apr_override=item.apr_override,
                        exit_price=item.exit_price,
                    )
                    for item in req.scenarios
                )
            )
        )
    except (InvalidScenarioInputError, InvalidRangeError, InvalidPriceError, ScenarioLimitError) as exc:
        logger.warning("projections_router: invalid_input scenarios=%s detail=%s", len(req.scenarios), exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PriceLookupDomainError as exc:
        logger.warning("projections_router: price_lookup_failed detail=%s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return ProjectionsResponse(
        reward_token_price_usd=result.reward_token_price_usd,
        scenarios=[_to_scenario_response(item) for item in result.scenarios],
        summary=PortfolioSummaryResponse(
            scenario_count=result.summary.scenario_count,
            total_deposit=result.summary.total_deposit,
            total_fee_yield_usd=result.summary.total_fee_yield_usd,
            total_emission_yield_usd=result.summary.total_emission_yield_usd,
            total_external_reward_yield_usd=result.summary.total_external_reward_yield_usd,
            total_il_usd=result.summary.total_il_usd,
            total_net_yield_usd=result.summary.total_net_yield_usd,
            avg_estimated_apr_pct=result.summary.avg_estimated_apr_pct,
            avg_net_rate=result.summary.avg_net_rate,
        ),
        warnings=list(result.warnings),
    )


def _to_scenario_response(item: ScenarioProjectionOutput) -> ScenarioProjectionResponse:
    projection = item.projection
    volatility = item.volatility_il
    return ScenarioProjectionResponse(
        scenario_id=item.scenario_id,
        pool_id=item.pool_id,
        pool_name=item.pool_name,
        deposit_usd=item.deposit_usd,
        price_low=item.price_low,
        price_high=item.price_high,
        timeline_days=item.timeline_days,
        reward_split_pct=item.reward_split_pct,
        projection=(
            ProjectionResponse(
                leverage=projection.leverage,
                in_range=projection.in_range,
                estimated_apr_pct=projection.estimated_apr_pct,
                base_apr_pct=projection.base_apr_pct,
                time_in_range=projection.time_in_range,
                il_pct=projection.il_pct,
                emission_tokens=projection.emission_tokens,
                fee_yield_usd=projection.fee_yield_usd,
                emission_yield_usd=projection.emission_yield_usd,
                external_reward_yield_usd=projection.external_reward_yield_usd,
                il_usd=projection.il_usd,
                net_yield_usd=projection.net_yield_usd,
            )
            if projection is not None
            else None
        ),
        tick_range=(
            TickRangeResponse(
                tick_lower=item.tick_range.tick_lower,
                tick_upper=item.tick_range.tick_upper,
                price_low=item.tick_range.price_low,
                price_high=item.tick_range.price_high,
            )
            if item.tick_range is not None
            else None
        ),
        position=(
            PositionResponse(
                liquidity=item.position.liquidity,
                amount_a=item.position.amount_a,
                amount_b=item.position.amount_b,
            )
            if item.position is not None
            else None
        ),
        volatility_il=VolatilityIlResponse(
            optimistic=volatility.optimistic,
            expected=volatility.expected,
            pessimistic=volatility.pessimistic,
            price_change_optimistic=volatility.price_changes.optimistic,
            price_change_expected=volatility.price_changes.expected,
            price_change_pessimistic=volatility.price_changes.pessimistic,
        ),
    )
