"""
BalanceDelta - 패킹된 int256 스왑 델타 디코딩

PoolManager.swap()을 staticcall/시뮬레이션 하면 int256 하나에
두 토큰의 int128 변화량이 패킹되어 반환된다:

    bits [0, 128)   : amount0 delta (int128, 2의 보수)
    bits [128, 256) : amount1 delta (int128, 2의 보수)

부호 규약은 스왑하는 쪽 기준: 음수 = 지불(풀로 들어감), 양수 = 수령.

입력 계약:
    packed 값은 [-2^255, 2^256 - 1] 범위여야 한다 (부호 있는 int256 이거나
    같은 비트의 uint256 원시 워드). 범위를 벗어나면 부호 디코딩이 조용히
    깨지므로 ValueError를 발생시킨다.
"""

from typing import Union

from ..constants import MASK_128, MASK_256, INT128_MIN, INT128_MAX, INT256_MIN, UINT256_MAX
from ..data.types import AmountDelta

PackedDelta = Union[int, str]


def _to_int256_word(packed: PackedDelta) -> int:
    """packed 값을 정수로 변환하고 256비트 워드로 마스킹"""
    if isinstance(packed, str):
        # eth_call 결과: "0x..." 또는 10진 문자열
        packed = int(packed, 0)

    if not INT256_MIN <= packed <= UINT256_MAX:
        raise ValueError(f"packed delta does not fit in 256 bits: {packed}")

    return packed & MASK_256


def _sign_extend_128(value: int) -> int:
    """128비트 필드를 2의 보수 부호 있는 정수로 확장"""
    value &= MASK_128
    if value & (1 << 127):
        return value - (1 << 128)
    return value


def get_amount0_delta(packed: PackedDelta) -> int:
    """하위 128비트 → amount0 delta (int128)"""
    return _sign_extend_128(_to_int256_word(packed))


def get_amount1_delta(packed: PackedDelta) -> int:
    """상위 128비트 → amount1 delta (int128)"""
    return _sign_extend_128(_to_int256_word(packed) >> 128)


def decode_balance_delta(packed: PackedDelta) -> AmountDelta:
    """packed int256을 (amount0, amount1) 쌍으로 디코딩"""
    word = _to_int256_word(packed)
    return AmountDelta(
        amount0=_sign_extend_128(word),
        amount1=_sign_extend_128(word >> 128),
    )


def to_balance_delta(amount0: int, amount1: int) -> int:
    """두 int128 변화량을 부호 있는 int256 하나로 패킹

    (amount1 << 128) | (amount0 & MASK_128) 와 같은 값.

    Args:
        amount0: token0 변화량 (int128)
        amount1: token1 변화량 (int128)

    Returns:
        부호 있는 int256

    Raises:
        ValueError: amount0 또는 amount1이 int128 범위를 벗어날 때
    """
    if not INT128_MIN <= amount0 <= INT128_MAX:
        raise ValueError(f"amount0 does not fit in int128: {amount0}")
    if not INT128_MIN <= amount1 <= INT128_MAX:
        raise ValueError(f"amount1 does not fit in int128: {amount1}")

    word = ((amount1 & MASK_128) << 128) | (amount0 & MASK_128)
    if word & (1 << 255):
        return word - (1 << 256)
    return word
