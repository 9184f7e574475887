from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
import time

import httpx


class PriceLookupError(RuntimeError):
    pass


def _normalize_symbol(value: str) -> str:
    return value.strip().upper()


@dataclass(frozen=True)
class PriceOverrides:
    data: dict

    def get_price(self, symbol: str) -> float | None:
        if not isinstance(self.data, dict):
            return None
        value = self.data.get(symbol)
        if value is None:
            value = self.data.get(_normalize_symbol(symbol))
        if value is None:
            return None
        return float(value)


class CoingeckoPriceProvider:
    def __init__(self, api_base: str, timeout_seconds: float, cache_ttl_seconds: float = 300):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: dict[str, tuple[float, float]] = {}
        self._lock = Lock()

    def _cache_get(self, *, coin_id: str) -> float | None:
        if self.cache_ttl_seconds <= 0:
            return None
        now = time.monotonic()
        with self._lock:
            cached = self._cache.get(coin_id)
            if cached is None:
                return None
            expires_at, value = cached
            if expires_at <= now:
                self._cache.pop(coin_id, None)
                return None
            return value

    def _cache_set(self, *, coin_id: str, value: float) -> None:
        if self.cache_ttl_seconds <= 0:
            return
        expires_at = time.monotonic() + self.cache_ttl_seconds
        with self._lock:
            self._cache[coin_id] = (expires_at, value)

    def get_price_usd(self, coin_id: str) -> float:
        coin_key = coin_id.strip().lower()
        if not coin_key:
            raise PriceLookupError("Coingecko pricing requires a coin id.")

        cached = self._cache_get(coin_id=coin_key)
        if cached is not None:
            return cached

        url = f"{self.api_base}/simple/price"
        params = {
            "ids": coin_key,
            "vs_currencies": "usd",
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            raise PriceLookupError(f"Coingecko request failed: {exc}") from exc
        if coin_key not in payload or "usd" not in payload[coin_key]:
            raise PriceLookupError(f"Price not found for coin: {coin_key}")
        value = float(payload[coin_key]["usd"])
        self._cache_set(coin_id=coin_key, value=value)
        return value


class PriceService:
    def __init__(self, overrides: PriceOverrides, coingecko: CoingeckoPriceProvider):
        self.overrides = overrides
        self.coingecko = coingecko

    def get_price_usd(self, *, symbol: str, coingecko_id: str | None = None) -> float:
        override = self.overrides.get_price(symbol)
        if override is not None:
            return override
        if coingecko_id:
            return self.coingecko.get_price_usd(coingecko_id)
        raise PriceLookupError(
            "Token price unavailable. Provide PRICE_OVERRIDES or a Coingecko id."
        )
