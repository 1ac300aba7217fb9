"""
Dynamic Fee - 동적 거래 수수료 추정

스왑 전에 UI에 보여줄 예상 수수료. 풀 깊이(reserve)를 쓰지 않는 단순화된
가격 영향 모델:

    impact = 0.0005 × sqrt(sell_amount)
    token_a 매도: price_after = price_before × (1 - impact)
    token_b 매도: price_after = price_before / (1 - impact)

목표 가격 쪽으로 움직이면 할인(×0.5), 멀어지면 할증(×2.0), 그 외 기본(×1.0).
결과는 [MIN_FEE, MAX_FEE]로 clamp.
"""

import logging
import math
from typing import Optional

from ..constants import (
    MIN_FEE,
    MAX_FEE,
    PRICE_IMPACT_COEFFICIENT,
    MIN_PRICE_AFTER,
    FEE_MULTIPLIER_TOWARD,
    FEE_MULTIPLIER_AWAY,
    FEE_MULTIPLIER_NEUTRAL,
)
from ..data.types import PoolState, FeeEstimate, PriceMove
from ..math.price_move import classify_price_move

logger = logging.getLogger(__name__)

_FEE_MULTIPLIERS = {
    PriceMove.TOWARD: FEE_MULTIPLIER_TOWARD,
    PriceMove.AWAY: FEE_MULTIPLIER_AWAY,
    PriceMove.NEUTRAL: FEE_MULTIPLIER_NEUTRAL,
}

_EXPLANATION_SUFFIXES = {
    PriceMove.TOWARD: " (discounted - moved towards desired)",
    PriceMove.AWAY: " (increased - moved away from desired)",
    PriceMove.NEUTRAL: "",
}


def clamp_fee(fee: float) -> float:
    """수수료 비율을 [MIN_FEE, MAX_FEE]로 제한"""
    if math.isnan(fee):
        return MIN_FEE
    return max(MIN_FEE, min(MAX_FEE, fee))


def simulate_price_after_sell(sell_amount: float, sell_token_symbol: str, pool: PoolState) -> float:
    """매도 후 가격 (token_b per token_a) 추정

    풀에 없는 토큰이면 가격 변화 없음.
    """
    price_before = pool.current_price
    impact_factor = PRICE_IMPACT_COEFFICIENT * math.sqrt(sell_amount)

    if sell_token_symbol == pool.token_a:
        # A 매도 → A/B 가격 하락
        return price_before * (1 - impact_factor)

    if sell_token_symbol == pool.token_b:
        # B 매도 → A/B 가격 상승
        divisor = 1 - impact_factor
        if divisor == 0:
            return math.inf
        if divisor < 0:
            return MIN_PRICE_AFTER
        return max(price_before / divisor, MIN_PRICE_AFTER)

    logger.warning(
        "sell token %s is not part of pool %s/%s, assuming no price impact",
        sell_token_symbol, pool.token_a, pool.token_b
    )
    return price_before


def estimate_dynamic_fee(
    sell_amount: float,
    sell_token_symbol: str,
    pool: Optional[PoolState]
) -> FeeEstimate:
    """매도 수량에 대한 동적 수수료 추정

    풀이 없으면 0, 매도 수량이 0 이하면 기본 수수료를 반환 (오류 아님).

    Args:
        sell_amount: 매도 토큰 수량 (human-readable 단위)
        sell_token_symbol: 매도 토큰 심볼
        pool: 풀 상태

    Returns:
        FeeEstimate (fee_percentage는 풀이 있으면 항상 [0.0001, 0.05])

    Example:
        >>> pool = PoolState("ETH", "DAI", current_price=2000, desired_price=2100, base_fee=0.003)
        >>> estimate_dynamic_fee(1000, "ETH", pool).fee_percentage
        0.006
    """
    if pool is None:
        return FeeEstimate(fee_percentage=0.0, explanation="No pool selected")

    if not sell_amount > 0:
        base_fee = clamp_fee(pool.base_fee)
        return FeeEstimate(
            fee_percentage=base_fee,
            explanation=f"Base Fee: {base_fee * 100:.2f}%",
        )

    price_before = pool.current_price
    price_after = simulate_price_after_sell(sell_amount, sell_token_symbol, pool)

    direction = classify_price_move(price_before, price_after, pool.desired_price)
    fee_percentage = clamp_fee(pool.base_fee * _FEE_MULTIPLIERS[direction])

    logger.debug(
        "fee estimate: sell %s %s, price %s -> %s (desired %s), %s, fee %s",
        sell_amount, sell_token_symbol, price_before, price_after,
        pool.desired_price, direction.value, fee_percentage
    )

    return FeeEstimate(
        fee_percentage=fee_percentage,
        explanation=f"Est. Fee: {fee_percentage * 100:.3f}%{_EXPLANATION_SUFFIXES[direction]}",
        direction=direction,
    )
