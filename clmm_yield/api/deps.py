from __future__ import annotations

from functools import lru_cache

from clmm_yield.application.use_cases.compare_reward_strategies import CompareRewardStrategiesUseCase
from clmm_yield.application.use_cases.get_range_presets import GetRangePresetsUseCase
from clmm_yield.application.use_cases.project_portfolio import ProjectPortfolioUseCase
from clmm_yield.infrastructure.clients.pricing import CoingeckoPriceProvider, PriceOverrides, PriceService
from clmm_yield.infrastructure.clients.reward_price_provider import RewardTokenPriceAdapter
from clmm_yield.infrastructure.repositories.json_pool_snapshot_repository import JsonPoolSnapshotRepository
from clmm_yield.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_price_service() -> PriceService:
    settings = get_settings()
    overrides = PriceOverrides(settings.price_overrides)
    coingecko = CoingeckoPriceProvider(
        api_base=settings.coingecko_api_base,
        timeout_seconds=settings.coingecko_timeout_seconds,
        cache_ttl_seconds=settings.coingecko_cache_ttl_seconds,
    )
    return PriceService(overrides=overrides, coingecko=coingecko)


@lru_cache(maxsize=1)
def _get_pool_snapshot_repository() -> JsonPoolSnapshotRepository:
    settings = get_settings()
    return JsonPoolSnapshotRepository(
        settings.pool_snapshots_path,
        stable_symbols=settings.stable_symbols,
        default_tick_spacing=settings.default_tick_spacing,
        default_emission_decimals=settings.default_emission_decimals,
    )


def _get_reward_price_adapter() -> RewardTokenPriceAdapter:
    settings = get_settings()
    return RewardTokenPriceAdapter(
        _get_price_service(),
        symbol=settings.reward_token_symbol,
        coingecko_id=settings.reward_token_coingecko_id or None,
        fallback_price_usd=settings.reward_token_fallback_price_usd,
    )


def get_project_portfolio_use_case() -> ProjectPortfolioUseCase:
    settings = get_settings()
    return ProjectPortfolioUseCase(
        pool_port=_get_pool_snapshot_repository(),
        reward_price_port=_get_reward_price_adapter(),
        annualized_volatility=settings.default_annualized_volatility,
    )


def get_compare_reward_strategies_use_case() -> CompareRewardStrategiesUseCase:
    return CompareRewardStrategiesUseCase(reward_price_port=_get_reward_price_adapter())


def get_range_presets_use_case() -> GetRangePresetsUseCase:
    return GetRangePresetsUseCase()
