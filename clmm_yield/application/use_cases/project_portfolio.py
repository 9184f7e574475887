from __future__ import annotations

import logging
import math

from clmm_yield.application.dto.projection import (
    PositionOutput,
    ProjectPortfolioInput,
    ProjectPortfolioOutput,
    ScenarioInput,
    ScenarioProjectionOutput,
    TickRangeOutput,
)
from clmm_yield.application.ports.pool_snapshot_port import PoolSnapshotPort
from clmm_yield.application.ports.reward_token_price_port import RewardTokenPricePort
from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot
from clmm_yield.domain.entities.projection import Projection
from clmm_yield.domain.entities.scenario import MAX_SCENARIOS, Scenario, ScenarioSet
from clmm_yield.domain.exceptions import InvalidPriceError, InvalidScenarioInputError, ScenarioLimitError
from clmm_yield.domain.services.impermanent_loss import estimate_il_from_volatility
from clmm_yield.domain.services.liquidity import estimate_liquidity
from clmm_yield.domain.services.portfolio import aggregate
from clmm_yield.domain.services.projection import project_scenario
from clmm_yield.domain.services.tick_math import price_range_to_ticks, ticks_to_price_range


logger = logging.getLogger(__name__)


class ProjectPortfolioUseCase:
    def __init__(
        self,
        *,
        pool_port: PoolSnapshotPort,
        reward_price_port: RewardTokenPricePort,
        annualized_volatility: float,
        max_scenarios: int = MAX_SCENARIOS,
    ):
        self._pool_port = pool_port
        self._reward_price_port = reward_price_port
        self._annualized_volatility = annualized_volatility
        self._max_scenarios = max_scenarios

    def execute(self, command: ProjectPortfolioInput) -> ProjectPortfolioOutput:
        logger.info("project_portfolio: start scenarios=%s", len(command.scenarios))
        if not command.scenarios:
            raise InvalidScenarioInputError("At least one scenario is required.")
        if len(command.scenarios) > self._max_scenarios:
            raise ScenarioLimitError(f"At most {self._max_scenarios} scenarios can be compared.")
        for item in command.scenarios:
            _validate_scenario(item)

        reward_price = self._reward_price_port.get_reward_token_price_usd()
        scenario_set = ScenarioSet(max_scenarios=self._max_scenarios)
        outputs: list[ScenarioProjectionOutput] = []
        projections: list[Projection | None] = []
        deposits: list[float] = []
        warnings: list[str] = []

        for item in command.scenarios:
            pool = self._pool_port.get_snapshot(pool_id=item.pool_id)
            if pool is None:
                logger.warning("project_portfolio: unknown pool pool_id=%s", item.pool_id)
                warnings.append(f"Pool {item.pool_id} not found; scenario contributes zero to totals.")
            scenario = scenario_set.add(pool, **_scenario_changes(item))
            output = self._project(item, scenario, pool, reward_price)
            outputs.append(output)
            projections.append(output.projection)
            deposits.append(scenario.deposit_usd)
            if output.projection is not None and not output.projection.in_range:
                warnings.append(f"Scenario {scenario.scenario_id} is out of range; yields are zero.")

        summary = aggregate(projections, deposits)
        logger.info(
            "project_portfolio: done scenarios=%s total_net_yield_usd=%s",
            summary.scenario_count,
            summary.total_net_yield_usd,
        )
        return ProjectPortfolioOutput(
            reward_token_price_usd=reward_price,
            scenarios=tuple(outputs),
            summary=summary,
            warnings=tuple(warnings),
        )

    def _project(
        self,
        item: ScenarioInput,
        scenario: Scenario,
        pool: PoolSnapshot | None,
        reward_price: float,
    ) -> ScenarioProjectionOutput:
        volatility_il = estimate_il_from_volatility(self._annualized_volatility, scenario.timeline_days)
        if pool is None:
            return ScenarioProjectionOutput(
                scenario_id=scenario.scenario_id,
                pool_id=item.pool_id,
                pool_name=None,
                deposit_usd=scenario.deposit_usd,
                price_low=scenario.price_low,
                price_high=scenario.price_high,
                timeline_days=scenario.timeline_days,
                reward_split_pct=scenario.reward_split_pct,
                projection=None,
                tick_range=None,
                position=None,
                volatility_il=volatility_il,
            )

        if scenario.price_low is None or scenario.price_high is None:
            raise InvalidPriceError(f"Pool {pool.pool_id} has no current price to derive a default range.")

        tick_lower, tick_upper = price_range_to_ticks(
            scenario.price_low,
            scenario.price_high,
            pool.token_a.decimals,
            pool.token_b.decimals,
            pool.tick_spacing,
            quote_is_stable=pool.quote_is_stable,
        )
        realized_low, realized_high = ticks_to_price_range(
            tick_lower,
            tick_upper,
            pool.token_a.decimals,
            pool.token_b.decimals,
            quote_is_stable=pool.quote_is_stable,
        )
        estimate = estimate_liquidity(scenario.deposit_usd, scenario.price_low, scenario.price_high, pool)

        return ScenarioProjectionOutput(
            scenario_id=scenario.scenario_id,
            pool_id=pool.pool_id,
            pool_name=pool.name,
            deposit_usd=scenario.deposit_usd,
            price_low=scenario.price_low,
            price_high=scenario.price_high,
            timeline_days=scenario.timeline_days,
            reward_split_pct=scenario.reward_split_pct,
            projection=project_scenario(scenario, pool, reward_price),
            tick_range=TickRangeOutput(
                tick_lower=tick_lower,
                tick_upper=tick_upper,
                price_low=realized_low,
                price_high=realized_high,
            ),
            position=PositionOutput(
                liquidity=estimate.liquidity,
                amount_a=estimate.amount_a,
                amount_b=estimate.amount_b,
            ),
            volatility_il=volatility_il,
        )


def _validate_scenario(item: ScenarioInput) -> None:
    if not item.pool_id or not item.pool_id.strip():
        raise InvalidScenarioInputError("pool_id is required.")
    if not _is_positive(item.deposit_usd):
        raise InvalidScenarioInputError("deposit_usd must be greater than zero.")
    if item.timeline_days <= 0:
        raise InvalidScenarioInputError("timeline_days must be greater than zero.")
    if not 0 <= item.reward_split_pct <= 1:
        raise InvalidScenarioInputError("reward_split_pct must be between 0 and 1.")
    if (item.price_low is None) != (item.price_high is None):
        raise InvalidScenarioInputError("price_low and price_high must be provided together.")
    if item.exit_price is not None and not _is_positive(item.exit_price):
        raise InvalidScenarioInputError("exit_price must be greater than zero.")
    if item.apr_override is not None and (not math.isfinite(item.apr_override) or item.apr_override < 0):
        raise InvalidScenarioInputError("apr_override must be zero or greater.")


def _scenario_changes(item: ScenarioInput) -> dict:
    changes = {
        "deposit_usd": item.deposit_usd,
        "timeline_days": item.timeline_days,
        "reward_split_pct": item.reward_split_pct,
        "apr_override": item.apr_override,
        "exit_price": item.exit_price,
    }
    if item.price_low is not None and item.price_high is not None:
        changes["price_low"] = item.price_low
        changes["price_high"] = item.price_high
    return changes


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0
