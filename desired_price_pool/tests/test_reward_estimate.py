"""
Deposit Reward 테스트

vDPP 보상 추정 (estimate/reward.py)
"""

import math

import pytest

from ..constants import REWARD_FACTOR_BASE, REWARD_FACTOR_TOWARD
from ..data.prices import TokenPriceTable
from ..data.types import PoolState, PriceMove
from ..estimate.reward import (
    estimate_deposit_reward,
    deposit_ratio,
    EXPLANATION_ENTER_AMOUNTS,
    EXPLANATION_BASE,
    EXPLANATION_TOWARD,
    EXPLANATION_DIFFERS,
)


@pytest.fixture
def prices() -> TokenPriceTable:
    return TokenPriceTable({"AAA": 10, "BBB": 1})


def make_pool(current_price: float, desired_price: float) -> PoolState:
    return PoolState(
        token_a="AAA",
        token_b="BBB",
        current_price=current_price,
        desired_price=desired_price,
        base_fee=0.003,
    )


class TestDepositRatio:

    def test_ratio(self):
        assert deposit_ratio(3, 2, 100) == 1.5

    def test_fallback_to_current_price(self):
        assert deposit_ratio(1, 0, 5) == 5
        assert deposit_ratio(1, -2, 5) == 5


class TestEstimateDepositReward:

    def test_no_pool(self, prices):
        estimate = estimate_deposit_reward(1, 1, None, prices)
        assert estimate.reward == 0
        assert estimate.explanation == EXPLANATION_ENTER_AMOUNTS

    def test_no_amounts(self, prices):
        pool = make_pool(2, 3)
        for amount_a, amount_b in ((0, 0), (-1, 0), (0, -1), (-1, -1)):
            estimate = estimate_deposit_reward(amount_a, amount_b, pool, prices)
            assert estimate.reward == 0
            assert estimate.explanation == EXPLANATION_ENTER_AMOUNTS

    def test_ratio_helps_desired_price(self, prices):
        """예치 비율 3이 현재 2보다 목표 3에 가까움 → 0.05"""
        estimate = estimate_deposit_reward(3, 1, make_pool(2, 3), prices)
        # 가치 = 3 × 10 + 1 × 1 = 31
        assert estimate.reward == pytest.approx(31 * REWARD_FACTOR_TOWARD)
        assert estimate.direction is PriceMove.TOWARD
        assert estimate.explanation == EXPLANATION_TOWARD

    def test_ratio_differs_from_current(self, prices):
        """예치 비율 1은 목표 3에서 더 멀어짐 → 기본 0.02"""
        estimate = estimate_deposit_reward(1, 1, make_pool(2, 3), prices)
        assert estimate.reward == pytest.approx(11 * REWARD_FACTOR_BASE)
        assert estimate.direction is PriceMove.AWAY
        assert estimate.explanation == EXPLANATION_DIFFERS

    def test_zero_amount_b_falls_back_to_current_price(self, prices):
        """amount_b = 0 → 비율 = 현재 가격 5 → 거리 변화 없음 → 0.02 (0.05 아님)"""
        estimate = estimate_deposit_reward(1, 0, make_pool(5, 10), prices)
        assert estimate.direction is PriceMove.NEUTRAL
        assert estimate.reward == pytest.approx(10 * REWARD_FACTOR_BASE)
        assert estimate.explanation == EXPLANATION_BASE

    def test_default_price_table(self):
        """가격표 미지정 시 기본 가격표 (ETH 2000, DAI 1)"""
        pool = PoolState("ETH", "DAI", current_price=2005.5, desired_price=2000, base_fee=0.003)
        estimate = estimate_deposit_reward(1, 0, pool)
        assert estimate.reward == pytest.approx(2000 * REWARD_FACTOR_BASE)

    def test_unknown_tokens_zero_reward(self):
        pool = PoolState("FOO", "BAR", current_price=1, desired_price=2, base_fee=0.003)
        assert estimate_deposit_reward(10, 10, pool).reward == 0

    def test_negative_amount_clamped(self, prices):
        """음수 가치는 0으로"""
        estimate = estimate_deposit_reward(-5, 1, make_pool(2, 3), prices)
        assert estimate.reward == 0

    def test_never_negative(self, prices):
        values = (-1e6, -1, 0, 1e-9, 0.5, 1, 3, 1e6, math.nan)
        for current in (0.0025, 2, 2000):
            for desired in (0.0026, 3, 2100):
                pool = make_pool(current, desired)
                for amount_a in values:
                    for amount_b in values:
                        reward = estimate_deposit_reward(amount_a, amount_b, pool, prices).reward
                        assert reward >= 0, (current, desired, amount_a, amount_b)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
