from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RangePresetsInput:
    current_price: float
    reported_rate_pct: float = 0.0


@dataclass(frozen=True)
class RangePresetOutput:
    label: str
    description: str
    lower_pct: float
    upper_pct: float
    price_low: float
    price_high: float
    leverage: float
    base_rate_pct: float
    estimated_rate_pct: float
    is_concentrated: bool


@dataclass(frozen=True)
class RangePresetsOutput:
    current_price: float
    presets: tuple[RangePresetOutput, ...]
