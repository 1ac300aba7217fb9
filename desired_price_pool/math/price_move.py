"""
Price Move - 목표 가격(desired price) 대비 이동 방향 판정

동적 수수료 추정과 vDPP 보상 추정이 같은 기준을 쓰도록 한 곳에 둔다.
"""

from ..constants import PRICE_TOLERANCE
from ..data.types import PriceMove


def classify_price_move(
    price_before: float,
    price_after: float,
    target_price: float,
    tolerance: float = PRICE_TOLERANCE
) -> PriceMove:
    """목표 가격까지의 거리 변화로 이동 방향 판정

    dist_before = |price_before - target|
    dist_after  = |price_after - target|

    tolerance 이내의 변화는 NEUTRAL. nan이 섞이면 비교가 모두 거짓이므로 NEUTRAL.

    Args:
        price_before: 이동 전 가격
        price_after: 이동 후 (또는 비교 대상) 가격
        target_price: 목표 가격
        tolerance: 부동소수점 비교 허용 오차

    Returns:
        PriceMove
    """
    dist_before = abs(price_before - target_price)
    dist_after = abs(price_after - target_price)

    if dist_after < dist_before - tolerance:
        return PriceMove.TOWARD
    if dist_after > dist_before + tolerance:
        return PriceMove.AWAY
    return PriceMove.NEUTRAL
