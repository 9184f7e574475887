from __future__ import annotations

from dataclasses import dataclass

from clmm_yield.domain.entities.projection import PortfolioSummary, Projection
from clmm_yield.domain.services.impermanent_loss import VolatilityIlEstimate


@dataclass(frozen=True)
class ScenarioInput:
    pool_id: str
    deposit_usd: float = 10_000.0
    price_low: float | None = None
    price_high: float | None = None
    timeline_days: int = 30
    reward_split_pct: float = 0.5
    apr_override: float | None = None
    exit_price: float | None = None


@dataclass(frozen=True)
class ProjectPortfolioInput:
    scenarios: tuple[ScenarioInput, ...]


@dataclass(frozen=True)
class TickRangeOutput:
    tick_lower: int
    tick_upper: int
    price_low: float
    price_high: float


@dataclass(frozen=True)
class PositionOutput:
    liquidity: float
    amount_a: float
    amount_b: float


@dataclass(frozen=True)
class ScenarioProjectionOutput:
    scenario_id: int
    pool_id: str
    pool_name: str | None
    deposit_usd: float
    price_low: float | None
    price_high: float | None
    timeline_days: int
    reward_split_pct: float
    projection: Projection | None
    tick_range: TickRangeOutput | None
    position: PositionOutput | None
    volatility_il: VolatilityIlEstimate


@dataclass(frozen=True)
class ProjectPortfolioOutput:
    reward_token_price_usd: float
    scenarios: tuple[ScenarioProjectionOutput, ...]
    summary: PortfolioSummary
    warnings: tuple[str, ...]
