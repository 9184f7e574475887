from __future__ import annotations

import logging

from clmm_yield.application.ports.reward_token_price_port import RewardTokenPricePort
from clmm_yield.domain.exceptions import PriceLookupDomainError
from clmm_yield.infrastructure.clients.pricing import PriceLookupError, PriceService


logger = logging.getLogger(__name__)


class RewardTokenPriceAdapter(RewardTokenPricePort):
    def __init__(
        self,
        price_service: PriceService,
        *,
        symbol: str,
        coingecko_id: str | None,
        fallback_price_usd: float | None = None,
    ):
        self._price_service = price_service
        self._symbol = symbol
        self._coingecko_id = coingecko_id
        self._fallback_price_usd = fallback_price_usd

    def get_reward_token_price_usd(self) -> float:
        try:
            return self._price_service.get_price_usd(symbol=self._symbol, coingecko_id=self._coingecko_id)
        except PriceLookupError as exc:
            if self._fallback_price_usd is not None and self._fallback_price_usd > 0:
                logger.warning(
                    "reward_price: fallback symbol=%s price=%s reason=%s",
                    self._symbol,
                    self._fallback_price_usd,
                    exc,
                )
                return self._fallback_price_usd
            raise PriceLookupDomainError(str(exc)) from exc
