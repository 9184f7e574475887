from __future__ import annotations

from collections.abc import Sequence

from clmm_yield.domain.entities.projection import PortfolioSummary, Projection


def aggregate(projections: Sequence[Projection | None], deposits: Sequence[float]) -> PortfolioSummary:
    """Fold per-scenario projections into portfolio totals.

    ``None`` stands for a scenario whose pool could not be resolved: it adds 0
    to every total (its deposit included) but still counts as a scenario.
    Average rates are deposit-weighted and 0 when no deposit is counted.
    """
    if len(projections) != len(deposits):
        raise ValueError("projections and deposits must have the same length.")

    total_deposit = 0.0
    total_fee = 0.0
    total_emission = 0.0
    total_external = 0.0
    total_il = 0.0
    total_net = 0.0
    weighted_apr = 0.0

    for projection, deposit in zip(projections, deposits):
        if projection is None:
            continue
        total_deposit += deposit
        total_fee += projection.fee_yield_usd
        total_emission += projection.emission_yield_usd
        total_external += projection.external_reward_yield_usd
        total_il += projection.il_usd
        total_net += projection.net_yield_usd
        weighted_apr += projection.estimated_apr_pct * deposit

    avg_apr = weighted_apr / total_deposit if total_deposit != 0 else 0.0
    avg_net_rate = total_net / total_deposit if total_deposit != 0 else 0.0

    return PortfolioSummary(
        scenario_count=len(projections),
        total_deposit=total_deposit,
        total_fee_yield_usd=total_fee,
        total_emission_yield_usd=total_emission,
        total_external_reward_yield_usd=total_external,
        total_il_usd=total_il,
        total_net_yield_usd=total_net,
        avg_estimated_apr_pct=avg_apr,
        avg_net_rate=avg_net_rate,
    )
