from __future__ import annotations

import pytest

from clmm_yield.domain.entities.scenario import Scenario
from clmm_yield.domain.services.leverage import calculate_leverage
from clmm_yield.domain.services.projection import base_rate_pct, project_scenario, time_in_range_fraction


REWARD_PRICE = 0.5


def _scenario(**overrides) -> Scenario:
    scenario = Scenario(scenario_id=1, pool_id="0xpool", price_low=0.9, price_high=1.1)
    scenario.update(**overrides)
    return scenario


def _assert_net_identity(projection):
    assert projection.net_yield_usd == pytest.approx(
        projection.fee_yield_usd
        + projection.emission_yield_usd
        + projection.external_reward_yield_usd
        - projection.il_usd
    )


def _implied_apr_pct(projection, deposit: float = 10_000.0, days: int = 30) -> float:
    earned = projection.fee_yield_usd + projection.emission_yield_usd + projection.external_reward_yield_usd
    return earned / deposit * 365 / days * 100


def test_reported_rate_end_to_end(make_pool):
    projection = project_scenario(_scenario(), make_pool(reported_apr_pct=200.0), REWARD_PRICE)

    gross = 10_000.0 * projection.estimated_apr_pct / 100 * 30 / 365
    assert projection.in_range is True
    assert projection.base_apr_pct == 10.0
    assert projection.leverage == pytest.approx(9.987, abs=0.01)
    assert projection.estimated_apr_pct == pytest.approx(100.0, abs=0.5)
    assert projection.time_in_range == 1.0
    # fees run at 36.5% and emissions at 18.25%, so fees take two thirds
    assert projection.fee_yield_usd == pytest.approx(gross * 2 / 3)
    assert projection.emission_tokens == pytest.approx(gross / 3 / REWARD_PRICE)
    assert projection.emission_yield_usd == pytest.approx(projection.emission_tokens * REWARD_PRICE * 0.75)
    assert projection.il_usd == pytest.approx(0.0, abs=1e-6)
    _assert_net_identity(projection)


def test_yields_imply_the_estimated_rate_with_a_reported_rate(make_pool, reward_stream):
    scenario = _scenario(reward_split_pct=1.0)
    pool = make_pool(reported_apr_pct=200.0, reward_list=(reward_stream,))

    projection = project_scenario(scenario, pool, REWARD_PRICE)

    assert _implied_apr_pct(projection) == pytest.approx(projection.estimated_apr_pct)


def test_yields_imply_the_estimated_rate_from_components(make_pool, reward_stream):
    projection = project_scenario(
        _scenario(reward_split_pct=1.0), make_pool(reward_list=(reward_stream,)), REWARD_PRICE
    )

    assert projection.base_apr_pct == pytest.approx(36.5 + 18.25 + 20.0)
    assert projection.estimated_apr_pct == pytest.approx(projection.base_apr_pct * projection.leverage)
    assert _implied_apr_pct(projection) == pytest.approx(projection.estimated_apr_pct)


def test_reported_rate_without_components_is_booked_as_fees(make_pool):
    pool = make_pool(reported_apr_pct=200.0, fees_24h_usd=0.0, emission_per_day=0)

    projection = project_scenario(_scenario(), pool, REWARD_PRICE)

    assert projection.emission_yield_usd == 0.0
    assert projection.external_reward_yield_usd == 0.0
    assert _implied_apr_pct(projection) == pytest.approx(projection.estimated_apr_pct)


def test_base_rate_from_components_when_nothing_is_reported(make_pool, reward_stream):
    pool = make_pool(reward_list=(reward_stream,))

    assert base_rate_pct(pool, REWARD_PRICE) == pytest.approx(36.5 + 18.25 + 20.0)
    assert base_rate_pct(make_pool(reward_list=(reward_stream,), has_gauge=True), REWARD_PRICE) == pytest.approx(
        18.25 + 20.0
    )


def test_gauge_pool_earns_no_fees(make_pool):
    projection = project_scenario(_scenario(), make_pool(has_gauge=True), REWARD_PRICE)

    assert projection.fee_yield_usd == 0.0
    assert projection.emission_yield_usd > 0


def test_external_rewards_scale_with_leverage(make_pool, reward_stream):
    projection = project_scenario(_scenario(), make_pool(reward_list=(reward_stream,)), REWARD_PRICE)

    expected = 10_000.0 * 0.2 * (30 / 365) * projection.leverage
    assert projection.external_reward_yield_usd == pytest.approx(expected)
    _assert_net_identity(projection)


def test_out_of_range_position_earns_nothing(make_pool, reward_stream):
    scenario = _scenario(price_low=1.2, price_high=1.5)

    projection = project_scenario(scenario, make_pool(reward_list=(reward_stream,)), REWARD_PRICE)

    assert projection.in_range is False
    assert projection.leverage == pytest.approx(calculate_leverage(1.0, 1.2, 1.5))
    assert projection.time_in_range == 0.0
    assert projection.fee_yield_usd == 0.0
    assert projection.emission_yield_usd == 0.0
    assert projection.emission_tokens == 0.0
    assert projection.external_reward_yield_usd == 0.0
    assert projection.net_yield_usd == 0.0


def test_exit_price_outside_range_halves_yield_and_books_il(make_pool):
    pool = make_pool()
    held = project_scenario(_scenario(), pool, REWARD_PRICE)

    drifted = project_scenario(_scenario(exit_price=1.2), pool, REWARD_PRICE)

    assert drifted.time_in_range == pytest.approx(0.5)
    assert drifted.fee_yield_usd == pytest.approx(held.fee_yield_usd / 2)
    assert drifted.emission_yield_usd == pytest.approx(held.emission_yield_usd / 2)
    assert drifted.il_pct < 0
    assert drifted.il_usd == pytest.approx(abs(drifted.il_pct) * 10_000.0)
    _assert_net_identity(drifted)


def test_apr_override_drives_the_yield(make_pool):
    locked = project_scenario(_scenario(apr_override=50.0, reward_split_pct=1.0), make_pool(), REWARD_PRICE)
    redeemed = project_scenario(_scenario(apr_override=50.0, reward_split_pct=0.0), make_pool(), REWARD_PRICE)

    gross = 10_000.0 * 0.5 * 30 / 365
    assert locked.estimated_apr_pct == 50.0
    assert locked.fee_yield_usd == pytest.approx(gross * 2 / 3)
    assert locked.emission_yield_usd == pytest.approx(gross / 3)
    assert locked.emission_tokens == pytest.approx(gross / 3 / REWARD_PRICE)
    assert _implied_apr_pct(locked) == pytest.approx(50.0)
    assert redeemed.emission_yield_usd == pytest.approx(gross / 6)


def test_missing_range_is_treated_as_out_of_range(make_pool):
    scenario = Scenario(scenario_id=1, pool_id="0xpool")

    projection = project_scenario(scenario, make_pool(), REWARD_PRICE)

    assert projection.in_range is False
    assert projection.leverage == 1.0
    assert projection.il_pct == 0.0
    assert projection.net_yield_usd == 0.0


@pytest.mark.parametrize(
    ("entry", "exit_price", "expected"),
    [
        (1.0, 1.0, 1.0),
        (1.0, 1.05, 1.0),
        (1.0, 1.2, 0.5),
        (1.0, 0.8, 0.5),
        (1.0, 1.5, 0.2),
        (1.3, 1.0, 0.0),
    ],
)
def test_time_in_range_fraction(entry, exit_price, expected):
    assert time_in_range_fraction(entry, exit_price, 0.9, 1.1) == pytest.approx(expected)
