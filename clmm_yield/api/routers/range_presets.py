from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from clmm_yield.api.deps import get_range_presets_use_case
from clmm_yield.api.schemas.range_presets import RangePresetResponse, RangePresetsResponse
from clmm_yield.application.dto.range_presets import RangePresetsInput
from clmm_yield.application.use_cases.get_range_presets import GetRangePresetsUseCase
from clmm_yield.domain.exceptions import InvalidScenarioInputError

router = APIRouter()


@router.get("/v1/range-presets", response_model=RangePresetsResponse)
def get_range_presets(
    current_price: float = Query(..., gt=0, description="Preco atual (quote por base)."),
    reported_rate_pct: float = Query(
        0.0,
        ge=0,
        description="APR reportado em % para a faixa de referencia de +/-10%.",
    ),
    use_case: GetRangePresetsUseCase = Depends(get_range_presets_use_case),
):
    try:
        result = use_case.execute(
            RangePresetsInput(current_price=current_price, reported_rate_pct=reported_rate_pct)
        )
    except InvalidScenarioInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return RangePresetsResponse(
        current_price=result.current_price,
        presets=[
            RangePresetResponse(
                label=item.label,
                description=item.description,
                lower_pct=item.lower_pct,
                upper_pct=item.upper_pct,
                price_low=item.price_low,
                price_high=item.price_high,
                leverage=item.leverage,
                base_rate_pct=item.base_rate_pct,
                estimated_rate_pct=item.estimated_rate_pct,
                is_concentrated=item.is_concentrated,
            )
            for item in result.presets
        ],
    )
