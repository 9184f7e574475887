from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Projection:
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


@dataclass(frozen=True)
class PortfolioSummary:
    scenario_count: int
    total_deposit: float
    total_fee_yield_usd: float
    total_emission_yield_usd: float
    total_external_reward_yield_usd: float
    total_il_usd: float
    total_net_yield_usd: float
    avg_estimated_apr_pct: float
    avg_net_rate: float
