from __future__ import annotations

from pydantic import BaseModel


class RangePresetResponse(BaseModel):
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


class RangePresetsResponse(BaseModel):
    current_price: float
    presets: list[RangePresetResponse]
