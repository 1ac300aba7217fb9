"""
Swap Output - 스왑 예상 수령량 추정

온체인 호출 없이 UI에서 보여주는 예상 출력. DesiredPricePool 훅의 수수료
구조를 따른다:

    gross    = sell_amount × price(desired_tick)        (zero_for_one)
             = sell_amount / price(desired_tick)        (one_for_zero)
    lp_fee   = gross × base_fee_per_tick × tick_spacing / 1e6
    hook_fee = lp_fee × hook_fee% × dynamic_multiplier
    net      = gross - lp_fee - hook_fee

동적 배수 (훅 컨트랙트와 동일한 시프트 상수):
    factor     = floor(sqrt(tick_spacing) × 2^116) << 2
    multiplier = (factor << 16) / (factor + (|tick_diff| << 116))
    hook       = base_hook × multiplier >> 16
    tick_diff > 0 (목표 가격에서 멀어짐) 이면 hook = 2 × base_hook - hook

tick_diff는 풀 상태 없이 매도량/잔고 비율로 대충 추정한다.
"""

import logging
import math
from decimal import Decimal, ROUND_DOWN, localcontext

from ..constants import (
    DEFAULT_BASE_FEE_PER_TICK,
    DEFAULT_HOOK_FEE,
    FEE_RATE_DENOMINATOR,
    HOOK_FEE_PERCENT_DENOMINATOR,
    TICK_SPACING_SQRT_FACTOR_SHIFT,
    DYNAMIC_FEE_MULTIPLIER_SHIFT,
    MAX_TICK_IMPACT_ESTIMATE,
)
from ..data.types import SwapEstimate
from ..math.tick_math import get_price_at_tick, is_valid_price

logger = logging.getLogger(__name__)

# Q128 수준 정수를 손실 없이 다루기 위한 정밀도
_DECIMAL_PRECISION = 78


def estimate_tick_diff(
    sell_amount: int,
    sell_balance: int,
    tick_spacing: int,
    max_tick_impact: int = MAX_TICK_IMPACT_ESTIMATE
) -> int:
    """매도량이 움직일 틱 수 추정 (tick_spacing 배수)

    잔고 전체를 팔면 max_tick_impact 틱 이동한다고 가정한 선형 근사.

    Args:
        sell_amount: 매도 수량 (최소 단위)
        sell_balance: 매도 토큰 잔고 (최소 단위)
        tick_spacing: 풀 틱 간격
        max_tick_impact: 잔고 100% 매도 시 이동 틱 수

    Returns:
        추정 틱 이동량
    """
    if tick_spacing <= 0:
        raise ValueError(f"tick_spacing은 양수여야 합니다: {tick_spacing}")
    if sell_balance <= 0:
        return 0

    # 퍼센트 × 100
    percentage_scaled = sell_amount * 10000 // sell_balance
    estimated_diff = max_tick_impact * percentage_scaled // 10000

    # 가장 가까운 tick_spacing 배수 (0.5는 올림)
    return math.floor(estimated_diff / tick_spacing + 0.5) * tick_spacing


def dynamic_hook_fee(base_hook_fee: Decimal, tick_diff: int, tick_spacing: int) -> Decimal:
    """틱 이동량에 따라 훅 수수료 조정

    tick_diff가 0이면 기본 훅 수수료 그대로. 결과는 음수가 되지 않는다.
    """
    if tick_diff == 0 or tick_spacing <= 0:
        return base_hook_fee

    factor = math.floor(math.sqrt(tick_spacing) * 2 ** TICK_SPACING_SQRT_FACTOR_SHIFT) << 2
    denominator = factor + (abs(tick_diff) << TICK_SPACING_SQRT_FACTOR_SHIFT)

    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        multiplier = Decimal(factor << DYNAMIC_FEE_MULTIPLIER_SHIFT) / Decimal(denominator)
        adjusted = base_hook_fee * multiplier / (1 << DYNAMIC_FEE_MULTIPLIER_SHIFT)

        if tick_diff > 0:
            adjusted = base_hook_fee * 2 - adjusted

    return max(adjusted, Decimal(0))


def estimate_swap_output(
    sell_amount: int,
    sell_balance: int,
    zero_for_one: bool,
    desired_price_tick: int,
    sell_decimals: int,
    buy_decimals: int,
    tick_spacing: int,
    base_fee_per_tick: int = DEFAULT_BASE_FEE_PER_TICK,
    hook_fee: int = DEFAULT_HOOK_FEE
) -> SwapEstimate:
    """스왑 예상 수령량 추정

    Args:
        sell_amount: 매도 수량 (최소 단위, wei)
        sell_balance: 사용자의 매도 토큰 잔고 (최소 단위)
        zero_for_one: token0 → token1 스왑 여부
        desired_price_tick: 거버넌스 목표 가격 틱
        sell_decimals: 매도 토큰 소수점 자릿수
        buy_decimals: 매수 토큰 소수점 자릿수
        tick_spacing: 풀 틱 간격
        base_fee_per_tick: 틱 간격 단위당 LP 수수료 (pips)
        hook_fee: LP 수수료 대비 훅 수수료 (%)

    Returns:
        SwapEstimate (buy 토큰 human-readable 단위, buy_decimals 자리에서 내림)

    Raises:
        ValueError: 목표 틱의 가격을 계산할 수 없거나 tick_spacing이 양수가 아닌 경우
    """
    if tick_spacing <= 0:
        raise ValueError(f"tick_spacing은 양수여야 합니다: {tick_spacing}")
    if sell_amount <= 0:
        return SwapEstimate.zero()

    decimals0, decimals1 = (sell_decimals, buy_decimals) if zero_for_one else (buy_decimals, sell_decimals)
    ideal_price = get_price_at_tick(desired_price_tick, decimals0, decimals1)
    if not is_valid_price(ideal_price) or ideal_price <= 0:
        raise ValueError(f"목표 틱의 가격을 계산할 수 없습니다: {desired_price_tick}")

    quantum = Decimal(1).scaleb(-buy_decimals)

    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION

        price = Decimal(repr(ideal_price))
        amount = Decimal(sell_amount).scaleb(-sell_decimals)

        # token1/token0 가격 기준
        gross = amount * price if zero_for_one else amount / price
        gross = gross.quantize(quantum, rounding=ROUND_DOWN)

        lp_fee_rate = Decimal(base_fee_per_tick * tick_spacing) / FEE_RATE_DENOMINATOR
        lp_fee = (gross * lp_fee_rate).quantize(quantum, rounding=ROUND_DOWN)

        base_hook_fee = lp_fee * hook_fee / HOOK_FEE_PERCENT_DENOMINATOR

        tick_diff = estimate_tick_diff(sell_amount, sell_balance, tick_spacing)
        hook = dynamic_hook_fee(base_hook_fee, tick_diff, tick_spacing).quantize(quantum, rounding=ROUND_DOWN)

        net = max(gross - lp_fee - hook, Decimal(0))

    logger.debug(
        "swap estimate: gross %s, lp fee %s, hook fee %s (base %s, tick diff %d), net %s",
        gross, lp_fee, hook, base_hook_fee, tick_diff, net
    )

    return SwapEstimate(
        gross_output=gross,
        lp_fee=lp_fee,
        hook_fee=hook,
        net_output=net,
        estimated_tick_diff=tick_diff,
    )
