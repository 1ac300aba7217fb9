"""
Math layer for Desired Price Pool estimator

- tick_math: Tick ↔ sqrtPriceX96 ↔ Price 변환
- balance_delta: 패킹된 int256 스왑 델타 디코딩
- price_move: 목표 가격 대비 이동 방향 판정 (수수료/보상 공용)
"""

from .tick_math import (
    get_sqrt_ratio_at_tick,
    get_sqrt_ratio_at_tick_exact,
    get_price_at_sqrt_ratio,
    get_price_at_tick,
    is_valid_tick,
    is_valid_sqrt_ratio,
    is_valid_price,
)
from .balance_delta import (
    get_amount0_delta,
    get_amount1_delta,
    decode_balance_delta,
    to_balance_delta,
)
from .price_move import classify_price_move
