"""
Token Price Table - 토큰 심볼별 USD 가격 조회

vDPP 보상 추정에서 예치 가치를 평가할 때 쓰는 외부 가격 공급자.
기본값은 dapp에 내장된 mock 가격표, YAML 파일로 교체 가능.

YAML 형식:
    ETH: 2000
    DAI: 1
    vDPP: 1.5
"""

import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

import yaml

from ..constants import DEFAULT_TOKEN_PRICES

logger = logging.getLogger(__name__)


class TokenPriceTable:
    """심볼 → USD 가격 (불변)

    사용법:
        prices = TokenPriceTable.default()
        prices.price_of("ETH")   # 2000.0
        prices.price_of("???")   # 0.0
    """

    def __init__(self, prices: Optional[Mapping[str, float]] = None):
        self._prices: Mapping[str, float] = MappingProxyType(
            {symbol: float(price) for symbol, price in (prices or {}).items()}
        )

    @classmethod
    def default(cls) -> "TokenPriceTable":
        return cls(DEFAULT_TOKEN_PRICES)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "TokenPriceTable":
        """YAML 파일에서 가격표 로드

        Raises:
            ValueError: 최상위가 {symbol: price} 매핑이 아니거나 가격이 숫자가 아닌 경우
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"가격표는 {{symbol: price}} 매핑이어야 합니다: {path}")

        prices: Dict[str, float] = {}
        for symbol, price in data.items():
            try:
                prices[str(symbol)] = float(price)
            except (TypeError, ValueError):
                raise ValueError(f"{symbol}의 가격이 숫자가 아닙니다: {price!r}") from None

        logger.debug("loaded %d token prices from %s", len(prices), path)
        return cls(prices)

    def price_of(self, symbol: str) -> float:
        """USD 가격 조회. 모르는 심볼이나 음수/nan 가격은 0.0"""
        price = self._prices.get(symbol)
        if price is None:
            logger.debug("no USD price for %s", symbol)
            return 0.0
        if not math.isfinite(price) or price < 0:
            logger.warning("ignoring invalid USD price for %s: %s", symbol, price)
            return 0.0
        return price

    def value_of(self, symbol: str, amount: float) -> float:
        """amount × USD 가격"""
        return self.price_of(symbol) * amount

    def as_dict(self) -> Dict[str, float]:
        return dict(self._prices)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._prices

    def __len__(self) -> int:
        return len(self._prices)
