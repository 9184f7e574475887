from __future__ import annotations

from clmm_yield.application.dto.range_presets import RangePresetOutput, RangePresetsInput, RangePresetsOutput
from clmm_yield.domain.exceptions import InvalidScenarioInputError
from clmm_yield.domain.services.leverage import RANGE_PRESETS, calculate_range_rate, price_range_from_percent


class GetRangePresetsUseCase:
    def execute(self, command: RangePresetsInput) -> RangePresetsOutput:
        if command.current_price <= 0:
            raise InvalidScenarioInputError("current_price must be greater than zero.")
        if command.reported_rate_pct < 0:
            raise InvalidScenarioInputError("reported_rate_pct must be zero or greater.")

        presets: list[RangePresetOutput] = []
        for preset in RANGE_PRESETS:
            price_low, price_high = price_range_from_percent(
                command.current_price,
                preset.lower_pct,
                preset.upper_pct,
            )
            rate = calculate_range_rate(command.reported_rate_pct, command.current_price, price_low, price_high)
            presets.append(
                RangePresetOutput(
                    label=preset.label,
                    description=preset.description,
                    lower_pct=preset.lower_pct,
                    upper_pct=preset.upper_pct,
                    price_low=price_low,
                    price_high=price_high,
                    leverage=rate.leverage,
                    base_rate_pct=rate.base_rate_pct,
                    estimated_rate_pct=rate.estimated_rate_pct,
                    is_concentrated=rate.is_concentrated,
                )
            )
        return RangePresetsOutput(current_price=command.current_price, presets=tuple(presets))
