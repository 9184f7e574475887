from __future__ import annotations

from pydantic import BaseModel, Field


class ScenarioRequest(BaseModel):
    pool_id: str = Field(..., min_length=1, description="Endereco da pool.")
    deposit_usd: float = Field(10_000.0, gt=0, description="Valor depositado em USD.")
    price_low: float | None = Field(
        None,
        gt=0,
        description="Preco minimo (quote por base). Omitido usa o preset amplo 0.5x-2x.",
    )
    price_high: float | None = Field(None, gt=0, description="Preco maximo (quote por base).")
    timeline_days: int = Field(30, gt=0, description="Horizonte da projecao em dias.")
    reward_split_pct: float = Field(
        0.5,
        ge=0,
        le=1,
        description="Fracao das recompensas travada (lock); o restante e resgatado com desconto.",
    )
    apr_override: float | None = Field(None, ge=0, description="APR manual em % que substitui a estimativa.")
    exit_price: float | None = Field(None, gt=0, description="Preco de saida; padrao e o preco atual.")


class ProjectionsRequest(BaseModel):
    scenarios: list[ScenarioRequest] = Field(..., min_length=1, max_length=3)


class TickRangeResponse(BaseModel):
    tick_lower: int
    tick_upper: int
    price_low: float
    price_high: float


class PositionResponse(BaseModel):
    liquidity: float
    amount_a: float
    amount_b: float


class VolatilityIlResponse(BaseModel):
    optimistic: float
    expected: float
    pessimistic: float
    price_change_optimistic: float
    price_change_expected: float
    price_change_pessimistic: float


class ProjectionResponse(BaseModel):
    leverage: float
    in_range: bool
    estimated_apr_pct: float
    base_apr_pct: float
    time_in_range: float
    il_pct: float
    emission_tokens: float
    fee_yield_usd: float
    emission_yield_usd: float
    external_reward_yield_usd: float
    il_usd: float
    net_yield_usd: float


class ScenarioProjectionResponse(BaseModel):
    scenario_id: int
    pool_id: str
    pool_name: str | None
    deposit_usd: float
    price_low: float | None
    price_high: float | None
    timeline_days: int
    reward_split_pct: float
    projection: ProjectionResponse | None
    tick_range: TickRangeResponse | None
    position: PositionResponse | None
    volatility_il: VolatilityIlResponse


class PortfolioSummaryResponse(BaseModel):
    scenario_count: int
    total_deposit: float
    total_fee_yield_usd: float
    total_emission_yield_usd: float
    total_external_reward_yield_usd: float
    total_il_usd: float
    total_net_yield_usd: float
    avg_estimated_apr_pct: float
    avg_net_rate: float


class ProjectionsResponse(BaseModel):
    reward_token_price_usd: float
    scenarios: list[ScenarioProjectionResponse]
    summary: PortfolioSummaryResponse
    warnings: list[str]
