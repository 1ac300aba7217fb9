"""
Tick Math 테스트

tick_math.py의 함수들을 테스트합니다.
부동소수점 근사 결과를 온체인 비트 연산 결과와 비교합니다.
"""

import math

import pytest

from ..constants import Q96, SQRT_RATIO_APPROX_TOLERANCE
from ..math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_sqrt_ratio_at_tick_exact,
    get_price_at_sqrt_ratio,
    get_price_at_tick,
    is_valid_price,
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
)


SAMPLE_TICKS = [MIN_TICK, -500000, -196256, -50000, -1000, -1, 0, 1, 1000, 50000, 196256, 500000, MAX_TICK]


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick 테스트 (부동소수점 근사)"""

    def test_tick_0(self):
        """틱 0에서의 sqrtPrice = 2^96"""
        assert get_sqrt_ratio_at_tick(0) == Q96

    def test_positive_tick(self):
        assert get_sqrt_ratio_at_tick(1) > Q96
        assert get_sqrt_ratio_at_tick(100) > get_sqrt_ratio_at_tick(1)

    def test_negative_tick(self):
        assert get_sqrt_ratio_at_tick(-1) < Q96
        assert get_sqrt_ratio_at_tick(-100) < get_sqrt_ratio_at_tick(-1)

    def test_bounds_at_min_and_max_tick(self):
        """유효 범위 양 끝에서도 결과는 [MIN_SQRT_RATIO, MAX_SQRT_RATIO]"""
        for tick in (MIN_TICK, MAX_TICK):
            result = get_sqrt_ratio_at_tick(tick)
            assert MIN_SQRT_RATIO <= result <= MAX_SQRT_RATIO

    def test_bounds_across_range(self):
        for tick in range(MIN_TICK, MAX_TICK + 1, 7919):
            result = get_sqrt_ratio_at_tick(tick)
            assert MIN_SQRT_RATIO <= result <= MAX_SQRT_RATIO

    def test_monotonic(self):
        """틱이 커지면 sqrtPrice는 같거나 커진다"""
        ticks = list(range(MIN_TICK, MAX_TICK + 1, 4999)) + [MAX_TICK]
        ticks += list(range(-50, 51))
        ticks.sort()

        previous = get_sqrt_ratio_at_tick(ticks[0])
        for tick in ticks[1:]:
            current = get_sqrt_ratio_at_tick(tick)
            assert current >= previous, f"not monotonic at tick {tick}"
            previous = current

    def test_out_of_range_clamped_not_raised(self):
        """범위 밖 틱은 예외 없이 경계값으로 clamp"""
        # exp() 결과가 크지만 유한한 경우 → 계산 후 clamp
        assert get_sqrt_ratio_at_tick(10_000_000) == MAX_SQRT_RATIO
        assert get_sqrt_ratio_at_tick(-10_000_000) == MIN_SQRT_RATIO

    def test_scaled_ratio_not_finite(self):
        """ratio × 10^18 이 inf가 되는 경우 경계값 - 1"""
        assert get_sqrt_ratio_at_tick(14_000_000) == MAX_SQRT_RATIO - 1
        assert get_sqrt_ratio_at_tick(-14_000_000) == MIN_SQRT_RATIO + 1

    def test_exponent_overflow_short_circuit(self):
        """지수가 709를 넘으면 exp() 호출 없이 경계값 ± 1"""
        assert get_sqrt_ratio_at_tick(20_000_000) == MAX_SQRT_RATIO - 1
        assert get_sqrt_ratio_at_tick(-20_000_000) == MIN_SQRT_RATIO + 1

    def test_close_to_exact(self):
        """온체인 값 대비 상대 오차 SQRT_RATIO_APPROX_TOLERANCE 이내"""
        ticks = SAMPLE_TICKS + list(range(MIN_TICK, MAX_TICK + 1, 30011))
        for tick in ticks:
            approx = get_sqrt_ratio_at_tick(tick)
            exact = get_sqrt_ratio_at_tick_exact(tick)
            assert abs(approx - exact) / exact < SQRT_RATIO_APPROX_TOLERANCE, f"tick {tick}"


class TestGetSqrtRatioAtTickExact:
    """get_sqrt_ratio_at_tick_exact 테스트 (온체인 비트 연산)"""

    def test_min_tick(self):
        assert get_sqrt_ratio_at_tick_exact(MIN_TICK) == MIN_SQRT_RATIO

    def test_max_tick(self):
        assert get_sqrt_ratio_at_tick_exact(MAX_TICK) == MAX_SQRT_RATIO

    def test_tick_0(self):
        assert get_sqrt_ratio_at_tick_exact(0) == Q96

    def test_symmetry(self):
        """sqrt(1.0001^t) × sqrt(1.0001^-t) ≈ 1"""
        for tick in (1, 100, 50000):
            up = get_sqrt_ratio_at_tick_exact(tick)
            down = get_sqrt_ratio_at_tick_exact(-tick)
            assert abs(up * down - Q96 * Q96) / (Q96 * Q96) < 1e-18

    def test_invalid_tick_too_low(self):
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick_exact(MIN_TICK - 1)

    def test_invalid_tick_too_high(self):
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick_exact(MAX_TICK + 1)


class TestGetPriceAtSqrtRatio:
    """get_price_at_sqrt_ratio 테스트"""

    def test_price_one(self):
        assert get_price_at_sqrt_ratio(Q96, 18, 18) == 1.0

    def test_price_four(self):
        """sqrtPrice 2배 → 가격 4배"""
        assert get_price_at_sqrt_ratio(2 * Q96, 18, 18) == 4.0

    def test_decimal_adjustment(self):
        """price × 10^(decimals0 - decimals1)"""
        assert get_price_at_sqrt_ratio(Q96, 6, 18) == 1e-12
        assert get_price_at_sqrt_ratio(Q96, 18, 6) == 1e12

    def test_fractional_price(self):
        """sqrtPrice 절반 → 가격 0.25"""
        assert get_price_at_sqrt_ratio(Q96 // 2, 18, 18) == 0.25

    def test_below_display_precision(self):
        """10^-18 미만의 가격은 0.0"""
        assert get_price_at_sqrt_ratio(MIN_SQRT_RATIO, 18, 18) == 0.0

    def test_max_sqrt_ratio(self):
        result = get_price_at_sqrt_ratio(MAX_SQRT_RATIO, 18, 18)
        expected = (MAX_SQRT_RATIO / Q96) ** 2
        assert abs(result - expected) / expected < 1e-12

    def test_out_of_range_is_nan(self):
        assert math.isnan(get_price_at_sqrt_ratio(MIN_SQRT_RATIO - 1, 18, 18))
        assert math.isnan(get_price_at_sqrt_ratio(MAX_SQRT_RATIO + 1, 18, 18))
        assert math.isnan(get_price_at_sqrt_ratio(None, 18, 18))

    def test_negative_decimals_is_nan(self):
        assert math.isnan(get_price_at_sqrt_ratio(Q96, -1, 18))

    def test_huge_price_is_inf(self):
        """float 범위를 넘는 가격은 inf (예외 아님)"""
        result = get_price_at_sqrt_ratio(2 * Q96, 5000, 0)
        assert math.isinf(result) and result > 0

    def test_tiny_price_is_zero(self):
        assert get_price_at_sqrt_ratio(Q96, 0, 5000) == 0.0


class TestGetPriceAtTick:
    """get_price_at_tick 테스트"""

    def test_tick_0_same_decimals(self):
        """틱 0, 동일 소수점 (가격 = 정확히 1)"""
        for decimals in (0, 6, 8, 18):
            assert get_price_at_tick(0, decimals, decimals) == 1

    def test_tick_0_different_decimals(self):
        """틱 0, 다른 소수점 (USDC 6 / WETH 18)"""
        assert get_price_at_tick(0, 6, 18) == 1e-12
        assert get_price_at_tick(0, 18, 6) == 1e12

    def test_positive_tick(self):
        result = get_price_at_tick(1000, 18, 18)
        expected = 1.0001 ** 1000
        assert abs(result - expected) / expected < 1e-9

    def test_negative_tick(self):
        result = get_price_at_tick(-1000, 18, 18)
        expected = 1.0001 ** (-1000)
        assert abs(result - expected) / expected < 1e-9

    def test_weth_usdt(self):
        """WETH(18)/USDT(6) 틱 -196256 ≈ 3000 USDT"""
        result = get_price_at_tick(-196256, 18, 6)
        expected = 1.0001 ** (-196256) * 1e12
        assert abs(result - expected) / expected < 1e-9
        assert 2990 < result < 3010

    def test_out_of_range_is_nan(self):
        assert math.isnan(get_price_at_tick(MIN_TICK - 1, 18, 18))
        assert math.isnan(get_price_at_tick(MAX_TICK + 1, 18, 18))
        assert math.isnan(get_price_at_tick(None, 18, 18))

    def test_negative_decimals_is_nan(self):
        """음수 소수점은 틱 0 포함 모든 틱에서 nan"""
        assert math.isnan(get_price_at_tick(0, -1, 18))
        assert math.isnan(get_price_at_tick(0, 18, -1))
        assert math.isnan(get_price_at_tick(1, -1, 18))


class TestIsValidPrice:

    def test_sentinels(self):
        assert not is_valid_price(math.nan)
        assert not is_valid_price(math.inf)
        assert not is_valid_price(-1.0)

    def test_valid(self):
        assert is_valid_price(0.0)
        assert is_valid_price(get_price_at_tick(100, 18, 18))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
