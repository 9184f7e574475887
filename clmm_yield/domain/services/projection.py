from __future__ import annotations

from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot
from clmm_yield.domain.entities.projection import Projection
from clmm_yield.domain.entities.scenario import Scenario
from clmm_yield.domain.services.emissions import (
    DAYS_PER_YEAR,
    calculate_emission_apr,
    calculate_fee_apr,
    external_rewards_apr_pct,
    project_emissions,
    project_external_rewards,
)
from clmm_yield.domain.services.impermanent_loss import calculate_concentrated_il, calculate_il_dollar_value
from clmm_yield.domain.services.leverage import calculate_estimated_rate, calculate_leverage, derive_base_rate
from clmm_yield.domain.services.reward_strategy import calculate_strategy_value


def is_in_range(current_price: float, price_low: float | None, price_high: float | None) -> bool:
    if price_low is None or price_high is None:
        return False
    if current_price <= 0 or price_low <= 0 or price_low >= price_high:
        return False
    return price_low <= current_price <= price_high


def time_in_range_fraction(
    entry_price: float,
    exit_price: float,
    price_low: float | None,
    price_high: float | None,
) -> float:
    """Share of a straight entry -> exit price path that stays inside [low, high]."""
    if not is_in_range(entry_price, price_low, price_high):
        return 0.0
    if exit_price == entry_price or price_low <= exit_price <= price_high:
        return 1.0
    boundary = price_high if exit_price > price_high else price_low
    return (boundary - entry_price) / (exit_price - entry_price)


def base_rate_pct(pool: PoolSnapshot, reward_token_price_usd: float) -> float:
    if pool.reported_apr_pct > 0:
        return derive_base_rate(pool.reported_apr_pct)
    fee_apr = 0.0 if pool.has_gauge else calculate_fee_apr(pool.fees_24h_usd, pool.tvl_usd)
    emission_apr = calculate_emission_apr(pool.emission_per_day_tokens, reward_token_price_usd, pool.tvl_usd)
    return (fee_apr + emission_apr) * 100 + external_rewards_apr_pct(pool.reward_list)


def project_scenario(scenario: Scenario, pool: PoolSnapshot, reward_token_price_usd: float) -> Projection:
    """Project one scenario against a pool snapshot.

    A single rate drives the dollars: ``estimated_apr_pct`` (override, or base
    rate times leverage) is applied to the deposit for the time in range, then
    split across fees, emissions and external rewards in proportion to the
    pool's component rates. Emissions are valued through the lock/redeem split,
    so ``estimated_apr_pct`` is the rate at full spot value.

    Yields are zero whenever the entry price sits outside the range; IL is
    still marked from entry to exit so a drifting position shows its loss.
    """
    deposit = scenario.deposit_usd
    current = pool.current_price
    low = scenario.price_low
    high = scenario.price_high
    exit_price = scenario.exit_price if scenario.exit_price is not None else current

    in_range = is_in_range(current, low, high)
    leverage = calculate_leverage(current, low, high)
    time_in_range = time_in_range_fraction(current, exit_price, low, high)
    base_apr = base_rate_pct(pool, reward_token_price_usd)
    if scenario.apr_override is not None:
        estimated_apr = scenario.apr_override
    else:
        estimated_apr = calculate_estimated_rate(base_apr, leverage)

    fee_yield = 0.0
    emission_yield = 0.0
    emission_tokens = 0.0
    external_yield = 0.0
    if in_range and deposit > 0:
        days = scenario.timeline_days
        gross = deposit * (max(estimated_apr, 0.0) / 100) * (days / DAYS_PER_YEAR) * time_in_range

        # unleveraged component yields, used only as weights for the split
        fee_weight = 0.0
        if not pool.has_gauge:
            fee_weight = deposit * calculate_fee_apr(pool.fees_24h_usd, pool.tvl_usd) * (days / DAYS_PER_YEAR)
        emission_weight_tokens = project_emissions(deposit, pool.tvl_usd, pool.emission_per_day_tokens, days)
        emission_weight = emission_weight_tokens * max(reward_token_price_usd, 0.0)
        external_weight = sum(
            (reward.projected_value_usd for reward in project_external_rewards(deposit, pool.reward_list, days)),
            0.0,
        )
        total_weight = fee_weight + emission_weight + external_weight
        if total_weight <= 0:
            if pool.has_gauge and reward_token_price_usd > 0:
                emission_weight = total_weight = 1.0
            else:
                fee_weight = total_weight = 1.0

        fee_yield = gross * fee_weight / total_weight
        external_yield = gross * external_weight / total_weight
        emission_gross = gross * emission_weight / total_weight
        if reward_token_price_usd > 0:
            emission_tokens = emission_gross / reward_token_price_usd
        emission_yield = calculate_strategy_value(
            emission_tokens, reward_token_price_usd, scenario.reward_split_pct
        ).total_value

    il_pct = calculate_concentrated_il(current, exit_price, low or 0.0, high or 0.0)
    il_usd = calculate_il_dollar_value(deposit, il_pct)

    return Projection(
        leverage=leverage,
        in_range=in_range,
        estimated_apr_pct=estimated_apr,
        base_apr_pct=base_apr,
        time_in_range=time_in_range,
        il_pct=il_pct,
        emission_tokens=emission_tokens,
        fee_yield_usd=fee_yield,
        emission_yield_usd=emission_yield,
        external_reward_yield_usd=external_yield,
        il_usd=il_usd,
        net_yield_usd=fee_yield + emission_yield + external_yield - il_usd,
    )
