from __future__ import annotations

from pydantic import BaseModel, Field


class CompareRewardStrategiesRequest(BaseModel):
    reward_amount: float = Field(..., ge=0, description="Quantidade de tokens de recompensa.")
    lock_fraction_a: float = Field(..., ge=0, le=1, description="Fracao travada na estrategia A.")
    lock_fraction_b: float = Field(..., ge=0, le=1, description="Fracao travada na estrategia B.")
    token_usd_price: float | None = Field(
        None,
        ge=0,
        description="Preco do token em USD; omitido usa o preco de mercado configurado.",
    )
    rate_pct: float | None = Field(
        None,
        ge=0,
        description="APR de emissao em %; quando informado, devolve o APR combinado de cada estrategia.",
    )


class StrategyValueResponse(BaseModel):
    lock_amount: float
    lock_value: float
    redeem_amount: float
    redeem_value: float
    total_value: float
    value_multiplier: float
    apr_factor: float
    blended_apr_pct: float | None = None


class CompareRewardStrategiesResponse(BaseModel):
    token_usd_price: float
    strategy_a: StrategyValueResponse
    strategy_b: StrategyValueResponse
    value_diff: float
    percent_diff: float
    winner: int = Field(..., description="1 quando A vale mais, 2 quando B vale mais, 0 em empate.")
