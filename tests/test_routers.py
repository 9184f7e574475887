from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from clmm_yield.api import deps
from clmm_yield.api.deps import (
    get_compare_reward_strategies_use_case,
    get_project_portfolio_use_case,
)
from clmm_yield.application.use_cases.compare_reward_strategies import CompareRewardStrategiesUseCase
from clmm_yield.application.use_cases.project_portfolio import ProjectPortfolioUseCase
from clmm_yield.domain.exceptions import PriceLookupDomainError
from clmm_yield.main import app


class FakePoolSnapshotPort:
    def __init__(self, pool):
        self._pool = pool

    def get_snapshot(self, *, pool_id: str):
        return self._pool if pool_id == self._pool.pool_id else None


class FakeRewardTokenPricePort:
    def __init__(self, price: float = 0.5, error: Exception | None = None):
        self._price = price
        self._error = error

    def get_reward_token_price_usd(self) -> float:
        if self._error is not None:
            raise self._error
        return self._price


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_projection_ports(pool, price_port: FakeRewardTokenPricePort | None = None) -> None:
    app.dependency_overrides[get_project_portfolio_use_case] = lambda: ProjectPortfolioUseCase(
        pool_port=FakePoolSnapshotPort(pool),
        reward_price_port=price_port or FakeRewardTokenPricePort(),
        annualized_volatility=0.8,
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_projections_return_scenarios_and_summary(client, make_pool):
    _use_projection_ports(make_pool(reported_apr_pct=200.0))

    response = client.post(
        "/v1/projections",
        json={
            "scenarios": [
                {"pool_id": "0xpool", "deposit_usd": 10000, "price_low": 0.9, "price_high": 1.1},
                {"pool_id": "0xmissing"},
            ]
        },
    )

    assert response.status_code == 200
    body = response.json()
    first, missing = body["scenarios"]
    assert first["projection"]["base_apr_pct"] == 10.0
    assert first["projection"]["in_range"] is True
    assert first["tick_range"]["tick_lower"] < first["tick_range"]["tick_upper"]
    assert missing["projection"] is None
    assert missing["tick_range"] is None
    assert body["summary"]["scenario_count"] == 2
    assert body["summary"]["total_deposit"] == 10000.0
    assert body["reward_token_price_usd"] == 0.5
    assert len(body["warnings"]) == 1


def test_projections_swapped_bounds_return_400(client, make_pool):
    _use_projection_ports(make_pool())

    response = client.post(
        "/v1/projections",
        json={"scenarios": [{"pool_id": "0xpool", "price_low": 1.1, "price_high": 0.9}]},
    )

    assert response.status_code == 400


def test_projections_price_failure_returns_502(client, make_pool):
    _use_projection_ports(make_pool(), FakeRewardTokenPricePort(error=PriceLookupDomainError("down")))

    response = client.post("/v1/projections", json={"scenarios": [{"pool_id": "0xpool"}]})

    assert response.status_code == 502
    assert response.json()["detail"] == "down"


def test_projections_reject_too_many_scenarios(client, make_pool):
    _use_projection_ports(make_pool())

    response = client.post("/v1/projections", json={"scenarios": [{"pool_id": "0xpool"}] * 4})

    assert response.status_code == 422


def test_reward_strategies_compare(client):
    app.dependency_overrides[get_compare_reward_strategies_use_case] = lambda: CompareRewardStrategiesUseCase(
        reward_price_port=FakeRewardTokenPricePort(0.5)
    )

    response = client.post(
        "/v1/reward-strategies/compare",
        json={"reward_amount": 1000, "lock_fraction_a": 0.5, "lock_fraction_b": 0.0},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["strategy_a"]["total_value"] == 375.0
    assert body["strategy_a"]["value_multiplier"] == 1.5
    assert body["strategy_b"]["total_value"] == 250.0
    assert body["percent_diff"] == 50.0
    assert body["winner"] == 1


def test_reward_strategies_compare_with_default_config(client, monkeypatch):
    for name in (
        "PRICE_OVERRIDES",
        "REWARD_TOKEN_SYMBOL",
        "REWARD_TOKEN_COINGECKO_ID",
        "REWARD_TOKEN_FALLBACK_PRICE_USD",
    ):
        monkeypatch.delenv(name, raising=False)
    deps._get_price_service.cache_clear()

    response = client.post(
        "/v1/reward-strategies/compare",
        json={"reward_amount": 1000, "lock_fraction_a": 1.0, "lock_fraction_b": 0.0, "rate_pct": 80},
    )

    deps._get_price_service.cache_clear()
    assert response.status_code == 200
    body = response.json()
    assert body["token_usd_price"] == 0.5
    assert body["strategy_a"]["total_value"] == 500.0
    assert body["strategy_a"]["blended_apr_pct"] == 80.0
    assert body["strategy_b"]["blended_apr_pct"] == 40.0


def test_range_presets(client):
    response = client.get("/v1/range-presets", params={"current_price": 2.0, "reported_rate_pct": 200})

    assert response.status_code == 200
    body = response.json()
    assert body["current_price"] == 2.0
    assert len(body["presets"]) == 4
    assert body["presets"][0]["price_low"] == pytest.approx(1.8)
    assert body["presets"][0]["base_rate_pct"] == 10.0


def test_range_presets_require_positive_price(client):
    response = client.get("/v1/range-presets", params={"current_price": 0})
    assert response.status_code == 422
