from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json(name: str) -> dict:
    value = _env(name)
    if not value:
        return {}
    return json.loads(value)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip().upper() for item in value.split(",") if item.strip())


def _optional_float(name: str, default: str | None = None) -> float | None:
    value = _env(name, default)
    if not value:
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    price_overrides: dict
    coingecko_api_base: str
    coingecko_timeout_seconds: float
    coingecko_cache_ttl_seconds: float
    reward_token_symbol: str
    reward_token_coingecko_id: str
    reward_token_fallback_price_usd: float | None
    pool_snapshots_path: str
    default_annualized_volatility: float
    default_tick_spacing: int
    default_emission_decimals: int
    stable_symbols: tuple[str, ...]


def get_settings() -> Settings:
    return Settings(
        price_overrides=_json("PRICE_OVERRIDES"),
        coingecko_api_base=_env("COINGECKO_API_BASE", "https://api.coingecko.com/api/v3"),
        coingecko_timeout_seconds=float(_env("COINGECKO_TIMEOUT_SECONDS", "10")),
        coingecko_cache_ttl_seconds=float(_env("COINGECKO_CACHE_TTL_SECONDS", "300")),
        reward_token_symbol=_env("REWARD_TOKEN_SYMBOL", "SAIL"),
        reward_token_coingecko_id=_env("REWARD_TOKEN_COINGECKO_ID", ""),
        reward_token_fallback_price_usd=_optional_float("REWARD_TOKEN_FALLBACK_PRICE_USD", "0.5"),
        pool_snapshots_path=_env("POOL_SNAPSHOTS_PATH", "data/pools.json"),
        default_annualized_volatility=float(_env("DEFAULT_ANNUALIZED_VOLATILITY", "0.8")),
        default_tick_spacing=int(_env("DEFAULT_TICK_SPACING", "60")),
        default_emission_decimals=int(_env("DEFAULT_EMISSION_DECIMALS", "9")),
        stable_symbols=_csv("STABLE_SYMBOLS", "USDC,USDT"),
    )
