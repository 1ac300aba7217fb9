"""
Tick Math - Tick ↔ sqrtPriceX96 ↔ Price 변환

UI에서 매 입력마다 호출되는 가격 코덱. 온체인 TickMath는 정수 연산만
사용하지만, 여기서는 부동소수점 지수 근사 + 정수(arbitrary precision)
스케일링으로 같은 값을 재현한다.

References:
- Uniswap V4 Core: src/libraries/TickMath.sol

핵심 공식:
    sqrtPrice = 1.0001^(tick / 2) = exp(|tick| × ln(1.0001) / 2)
    sqrtPriceX96 = sqrtPrice × 2^96
    price = sqrtPriceX96² / 2^192 × 10^(decimals0 - decimals1)

오차 계약:
    get_sqrt_ratio_at_tick()는 유효 틱 범위 전체에서 온체인 값
    (get_sqrt_ratio_at_tick_exact) 대비 상대 오차 SQRT_RATIO_APPROX_TOLERANCE
    (1e-9) 이내. 비트 단위 일치가 필요한 곳에서는 exact 버전을 사용할 것.
"""

import logging
import math
from decimal import Decimal
from typing import Optional

from ..constants import (
    Q96,
    Q192,
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    TICK_BASE,
    MAX_EXP_EXPONENT,
    PRICE_DISPLAY_DECIMALS,
)

logger = logging.getLogger(__name__)

_LN_TICK_BASE: float = math.log(TICK_BASE)

# 양수 틱: floor(ratio × 10^18) × Q96 / 10^18
_POSITIVE_SCALE: int = 10 ** 18
# 음수 틱: Q96 × 10^36 / floor(ratio × 10^36)
_NEGATIVE_SCALE: int = 10 ** 36

# TickMath.sol 매직 넘버 (비트 i가 켜져 있으면 ratio × factor >> 128)
_TICK_BIT_FACTORS = (
    (0x2, 0xfff97272373d413259a46990580e213a),
    (0x4, 0xfff2e50f5f656932ef12357cf3c7fdcc),
    (0x8, 0xffe5caca7e10e4e61c3624eaa0941cd0),
    (0x10, 0xffcb9843d60f6159c9db58835c926644),
    (0x20, 0xff973b41fa98c081472e6896dfb254c0),
    (0x40, 0xff2ea16466c96a3843ec78b326b52861),
    (0x80, 0xfe5dee046a99a2a811c461f1969c3053),
    (0x100, 0xfcbe86c7900a88aedcffc83b479aa3a4),
    (0x200, 0xf987a7253ac413176f2b074cf7815e54),
    (0x400, 0xf3392b0822b70005940c7a398e4b70f3),
    (0x800, 0xe7159475a2c29b7443b29c7fa6e889d9),
    (0x1000, 0xd097f3bdfd2022b8845ad8f792aa5825),
    (0x2000, 0xa9f746462d870fdf8a65dc1f90e061e5),
    (0x4000, 0x70d869a156d2a1b890bb3df62baf32f7),
    (0x8000, 0x31be135f97d08fd981231505542fcfa6),
    (0x10000, 0x9aa508b5b7a84e1c677de54f3e99bc9),
    (0x20000, 0x5d6af8dedb81196699c329225ee604),
    (0x40000, 0x2216e584f5fa1ea926041bedfe98),
    (0x80000, 0x48a170391f7dc42444e8fa2),
)


def is_valid_tick(tick: Optional[int]) -> bool:
    """틱이 [MIN_TICK, MAX_TICK] 범위 안에 있는지 확인"""
    return tick is not None and MIN_TICK <= tick <= MAX_TICK


def is_valid_sqrt_ratio(sqrt_ratio_x96: Optional[int]) -> bool:
    """sqrtPriceX96이 [MIN_SQRT_RATIO, MAX_SQRT_RATIO] 범위 안에 있는지 확인"""
    return sqrt_ratio_x96 is not None and MIN_SQRT_RATIO <= sqrt_ratio_x96 <= MAX_SQRT_RATIO


def is_valid_price(price: float) -> bool:
    """가격 함수 결과가 sentinel(nan/inf)이 아닌 사용 가능한 값인지 확인"""
    return math.isfinite(price) and price >= 0


def _clamp_sqrt_ratio(value: int) -> int:
    if value < MIN_SQRT_RATIO:
        logger.debug("sqrt ratio %d below MIN_SQRT_RATIO, clamped", value)
        return MIN_SQRT_RATIO
    if value > MAX_SQRT_RATIO:
        logger.debug("sqrt ratio %d above MAX_SQRT_RATIO, clamped", value)
        return MAX_SQRT_RATIO
    return value


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산 (부동소수점 근사)

    ratio = exp(|tick| × ln(1.0001) / 2)를 구한 뒤 정수 스케일링으로
    Q64.96 값을 만든다. 유효 범위 밖의 틱도 예외 없이 경계값으로 clamp 되지만,
    정확도는 유효 범위 안에서만 보장된다.

    Args:
        tick: 틱 인덱스 (-887272 ~ 887272)

    Returns:
        sqrtPriceX96 (항상 [MIN_SQRT_RATIO, MAX_SQRT_RATIO] 범위)
    """
    exponent = abs(tick) * _LN_TICK_BASE / 2

    # exp() 오버플로우 전에 차단 (경계값보다 1만큼 안쪽)
    if exponent > MAX_EXP_EXPONENT:
        logger.warning("tick %s exponent %.1f exceeds exp() range, using boundary ratio", tick, exponent)
        return MIN_SQRT_RATIO + 1 if tick < 0 else MAX_SQRT_RATIO - 1

    ratio = math.exp(exponent)

    if tick < 0:
        scaled_ratio = ratio * float(_NEGATIVE_SCALE)
        if not math.isfinite(scaled_ratio):
            return MIN_SQRT_RATIO + 1
        denominator = math.floor(scaled_ratio)
        if denominator == 0:
            return MIN_SQRT_RATIO + 1
        result = (Q96 * _NEGATIVE_SCALE) // denominator
    else:
        scaled_ratio = ratio * float(_POSITIVE_SCALE)
        if not math.isfinite(scaled_ratio):
            return MAX_SQRT_RATIO - 1
        result = (math.floor(scaled_ratio) * Q96) // _POSITIVE_SCALE

    return _clamp_sqrt_ratio(result)


def get_sqrt_ratio_at_tick_exact(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산 (온체인 비트 연산, 비트 단위 일치)

    TickMath.getSqrtRatioAtTick()과 동일한 알고리즘. 근사 버전의 검증 및
    온체인 값과 정확히 비교해야 하는 경우에 사용.

    Raises:
        ValueError: 틱이 유효 범위를 벗어난 경우
    """
    if not is_valid_tick(tick):
        raise ValueError(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    abs_tick = abs(tick)

    ratio = 0xfffcb933bd6fad37aa2d162d1a594001 if abs_tick & 0x1 else 1 << 128
    for bit, factor in _TICK_BIT_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = ((1 << 256) - 1) // ratio

    # Q128.128 -> Q64.96 (올림)
    return (ratio >> 32) + (1 if ratio % (1 << 32) else 0)


def _scaled_to_decimal_string(value: int, decimals: int) -> str:
    """10^decimals 로 스케일된 정수를 소수 문자열로 변환

    소수부 끝의 0은 제거한다. 정수 결과는 소수부 없이, 0은 "0.0"으로 표현.
    """
    digits = str(abs(value))
    sign = "-" if value < 0 else ""

    if len(digits) <= decimals:
        integer_part = "0"
        fraction_part = digits.rjust(decimals, "0")
    else:
        integer_part = digits[:-decimals]
        fraction_part = digits[-decimals:]

    fraction_part = fraction_part.rstrip("0")
    if not fraction_part:
        if integer_part == "0" and not sign:
            return "0.0"
        return f"{sign}{integer_part}"

    return f"{sign}{integer_part}.{fraction_part}"


def get_price_at_sqrt_ratio(
    sqrt_ratio_x96: Optional[int],
    decimals0: int,
    decimals1: int
) -> float:
    """sqrtPriceX96을 human-readable 가격(token1/token0)으로 변환

    정수 연산으로 계산:
        numerator   = sqrtPriceX96² × 10^decimals0
        denominator = 2^192 × 10^decimals1
        scaled      = numerator × 10^18 // denominator

    scaled를 소수점 18자리 문자열로 만든 뒤 float로 파싱한다.

    Args:
        sqrt_ratio_x96: sqrtPriceX96 값
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        가격. 입력이 범위 밖이면 nan, 변환 오버플로우 시 inf 또는 0.0
    """
    if not is_valid_sqrt_ratio(sqrt_ratio_x96) or decimals0 < 0 or decimals1 < 0:
        return math.nan

    numerator = sqrt_ratio_x96 * sqrt_ratio_x96 * 10 ** decimals0
    denominator = Q192 * 10 ** decimals1

    try:
        scaled_price = numerator * 10 ** PRICE_DISPLAY_DECIMALS // denominator
        price = float(_scaled_to_decimal_string(scaled_price, PRICE_DISPLAY_DECIMALS))
    except (OverflowError, ValueError) as e:
        # str(int) 자릿수 한도 초과 등. 가격 크기로 sentinel 결정
        logger.warning("price conversion overflow for sqrt ratio %d: %s", sqrt_ratio_x96, e)
        return math.inf if numerator >= denominator else 0.0

    # float 범위를 넘는 문자열은 inf로 파싱된다
    return price


def get_price_at_tick(tick: Optional[int], decimals0: int, decimals1: int) -> float:
    """틱을 human-readable 가격(token1/token0)으로 변환

    tick 0은 sqrtPrice 왕복 없이 10^(decimals0 - decimals1)을 바로 반환.

    Example:
        >>> get_price_at_tick(0, 6, 18)
        1e-12
    """
    if not is_valid_tick(tick):
        return math.nan

    if decimals0 < 0 or decimals1 < 0:
        return math.nan

    if tick == 0:
        return float(Decimal(10) ** (decimals0 - decimals1))

    sqrt_ratio_x96 = get_sqrt_ratio_at_tick(tick)
    return get_price_at_sqrt_ratio(sqrt_ratio_x96, decimals0, decimals1)
