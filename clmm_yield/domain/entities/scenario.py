from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, fields

from clmm_yield.domain.entities.pool_snapshot import PoolSnapshot
from clmm_yield.domain.exceptions import ScenarioLimitError, ScenarioNotFoundError
from clmm_yield.domain.services.tick_math import preset_price_range


MAX_SCENARIOS = 3
DEFAULT_DEPOSIT_USD = 10_000.0
DEFAULT_TIMELINE_DAYS = 30
DEFAULT_REWARD_SPLIT_PCT = 0.5


@dataclass
class Scenario:
    """One comparison slot. Mutated field by field by the caller."""

    scenario_id: int
    pool_id: str | None = None
    deposit_usd: float = DEFAULT_DEPOSIT_USD
    price_low: float | None = None
    price_high: float | None = None
    timeline_days: int = DEFAULT_TIMELINE_DAYS
    reward_split_pct: float = DEFAULT_REWARD_SPLIT_PCT
    apr_override: float | None = None
    exit_price: float | None = None

    def select_pool(self, pool: PoolSnapshot | None) -> None:
        # leverage and APR are pool-relative; neither the range nor an override survives a pool change
        self.pool_id = pool.pool_id if pool is not None else None
        self.exit_price = None
        self.apr_override = None
        if pool is None or pool.current_price <= 0:
            self.price_low = None
            self.price_high = None
            return
        self.price_low, self.price_high = default_price_range(pool)

    def update(self, **changes) -> None:
        allowed = {item.name for item in fields(self)} - {"scenario_id", "pool_id"}
        unknown = set(changes) - allowed
        if unknown:
            raise TypeError(f"Unknown scenario fields: {', '.join(sorted(unknown))}.")
        for name, value in changes.items():
            setattr(self, name, value)


def default_price_range(pool: PoolSnapshot) -> tuple[float, float]:
    price_low, price_high, _, _ = preset_price_range(
        preset="wide",
        current_price=pool.current_price,
        tick_spacing=pool.tick_spacing,
        decimals_a=pool.token_a.decimals,
        decimals_b=pool.token_b.decimals,
        quote_is_stable=pool.quote_is_stable,
    )
    return price_low, price_high


class ScenarioSet:
    """Up to ``MAX_SCENARIOS`` scenarios with ids drawn from a per-set counter."""

    def __init__(self, *, max_scenarios: int = MAX_SCENARIOS):
        self._max_scenarios = max_scenarios
        self._ids = itertools.count(1)
        self._scenarios: dict[int, Scenario] = {}

    def add(self, pool: PoolSnapshot | None = None, **changes) -> Scenario:
        if len(self._scenarios) >= self._max_scenarios:
            raise ScenarioLimitError(f"At most {self._max_scenarios} scenarios can be compared.")
        scenario = Scenario(scenario_id=next(self._ids))
        scenario.select_pool(pool)
        if changes:
            scenario.update(**changes)
        self._scenarios[scenario.scenario_id] = scenario
        return scenario

    def get(self, scenario_id: int) -> Scenario:
        scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            raise ScenarioNotFoundError(f"Scenario {scenario_id} not found.")
        return scenario

    def remove(self, scenario_id: int) -> None:
        if scenario_id not in self._scenarios:
            raise ScenarioNotFoundError(f"Scenario {scenario_id} not found.")
        del self._scenarios[scenario_id]

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self._scenarios.values())

    def __len__(self) -> int:
        return len(self._scenarios)
