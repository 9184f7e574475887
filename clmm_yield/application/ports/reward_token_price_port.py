from __future__ import annotations

from typing import Protocol


class RewardTokenPricePort(Protocol):
    def get_reward_token_price_usd(self) -> float:
        ...
