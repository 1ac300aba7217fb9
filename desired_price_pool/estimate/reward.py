"""
Deposit Reward - 유동성 예치 vDPP 보상 추정

예치 비율(amount_a / amount_b)이 현재 풀 가격보다 목표 가격에 더 가까우면
보상 계수를 높인다 (0.02 → 0.05). 보상 = 예치 USD 가치 × 보상 계수.
즉시 보상의 단순 추정치이며 락업 기간 등은 반영하지 않는다.
"""

import logging
from typing import Optional

from ..constants import PRICE_TOLERANCE, REWARD_FACTOR_BASE, REWARD_FACTOR_TOWARD
from ..data.prices import TokenPriceTable
from ..data.types import PoolState, RewardEstimate, PriceMove
from ..math.price_move import classify_price_move

logger = logging.getLogger(__name__)

EXPLANATION_ENTER_AMOUNTS = "Enter amounts to estimate rewards."
EXPLANATION_BASE = "Base vDPP reward estimate based on deposit value."
EXPLANATION_TOWARD = (
    "Estimated reward increased: Deposit ratio is closer to the desired price "
    "than the current pool price."
)
EXPLANATION_DIFFERS = "Deposit ratio differs from current price. Base reward estimate applied."


def deposit_ratio(amount_a: float, amount_b: float, current_price: float) -> float:
    """예치 비율 A/B. amount_b가 양수가 아니면 현재 가격으로 대체"""
    if amount_b > 0:
        return amount_a / amount_b
    return current_price


def estimate_deposit_reward(
    amount_a: float,
    amount_b: float,
    pool: Optional[PoolState],
    prices: Optional[TokenPriceTable] = None
) -> RewardEstimate:
    """예치 수량에 대한 vDPP 보상 추정

    Args:
        amount_a: token_a 예치 수량
        amount_b: token_b 예치 수량
        pool: 풀 상태
        prices: USD 가격표 (None이면 기본 가격표)

    Returns:
        RewardEstimate (reward는 항상 >= 0)
    """
    if pool is None or (not amount_a > 0 and not amount_b > 0):
        return RewardEstimate(reward=0.0, explanation=EXPLANATION_ENTER_AMOUNTS)

    if prices is None:
        prices = TokenPriceTable.default()

    ratio = deposit_ratio(amount_a, amount_b, pool.current_price)
    direction = classify_price_move(pool.current_price, ratio, pool.desired_price)

    if direction is PriceMove.TOWARD:
        reward_factor = REWARD_FACTOR_TOWARD
        explanation = EXPLANATION_TOWARD
    elif abs(ratio - pool.current_price) > PRICE_TOLERANCE:
        reward_factor = REWARD_FACTOR_BASE
        explanation = EXPLANATION_DIFFERS
    else:
        reward_factor = REWARD_FACTOR_BASE
        explanation = EXPLANATION_BASE

    total_value = prices.value_of(pool.token_a, amount_a) + prices.value_of(pool.token_b, amount_b)
    reward = total_value * reward_factor

    logger.debug(
        "reward estimate: deposit %s %s + %s %s, ratio %s (current %s, desired %s), value %s, factor %s",
        amount_a, pool.token_a, amount_b, pool.token_b, ratio,
        pool.current_price, pool.desired_price, total_value, reward_factor
    )

    # 음수 수량/가격, nan 모두 0으로
    if not reward > 0:
        reward = 0.0

    return RewardEstimate(reward=reward, explanation=explanation, direction=direction)
