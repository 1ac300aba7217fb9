"""
Price Move 테스트

목표 가격까지의 거리 변화 판정 (수수료/보상 공용 기준)
"""

import math

import pytest

from ..data.types import PriceMove
from ..math.price_move import classify_price_move


class TestClassifyPriceMove:

    def test_toward_from_below(self):
        assert classify_price_move(2000, 2050, 2100) is PriceMove.TOWARD

    def test_toward_from_above(self):
        assert classify_price_move(2100, 2050, 2000) is PriceMove.TOWARD

    def test_away(self):
        assert classify_price_move(2000, 1968.38, 2100) is PriceMove.AWAY

    def test_overshoot_counts_by_distance(self):
        """목표를 지나쳐도 거리가 줄면 TOWARD"""
        assert classify_price_move(2000, 2150, 2100) is PriceMove.TOWARD
        assert classify_price_move(2000, 2300, 2100) is PriceMove.AWAY

    def test_no_change_is_neutral(self):
        assert classify_price_move(5, 5, 10) is PriceMove.NEUTRAL

    def test_within_tolerance_is_neutral(self):
        assert classify_price_move(1.0, 1.0 + 1e-12, 2.0) is PriceMove.NEUTRAL

    def test_custom_tolerance(self):
        assert classify_price_move(1.0, 1.01, 2.0, tolerance=0.1) is PriceMove.NEUTRAL
        assert classify_price_move(1.0, 1.01, 2.0, tolerance=0.001) is PriceMove.TOWARD

    def test_same_distance_opposite_side_is_neutral(self):
        assert classify_price_move(90, 110, 100) is PriceMove.NEUTRAL

    def test_nan_is_neutral(self):
        assert classify_price_move(math.nan, 1.0, 2.0) is PriceMove.NEUTRAL
        assert classify_price_move(1.0, math.nan, 2.0) is PriceMove.NEUTRAL

    def test_infinite_price_is_away(self):
        assert classify_price_move(2000, -math.inf, 2100) is PriceMove.AWAY


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
