"""
Desired Price Pool 데이터 타입 정의

UI/풀 상태 공급자와 주고받는 불변 값 타입들.
모든 값은 호출마다 새로 만들어지며 호출 간에 공유되지 않는다.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ..constants import DEFAULT_TICK_SPACING


class PriceMove(Enum):
    """가격이 목표 가격 쪽으로 움직였는지 여부"""
    TOWARD = "toward"
    AWAY = "away"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class PoolState:
    """풀 상태 (외부 공급, 읽기 전용)

    - current_price: 현재 가격 (1 token_a = X token_b)
    - desired_price: 거버넌스가 정한 목표 가격 (1 token_a = X token_b)
    - base_fee: 동적 조정 전 기본 수수료 비율 (0 ~ 1)
    """
    token_a: str  # 심볼 (예: "ETH")
    token_b: str  # 심볼 (예: "DAI")
    current_price: float
    desired_price: float
    base_fee: float
    decimals0: int = 18
    decimals1: int = 18
    tick_spacing: int = DEFAULT_TICK_SPACING

    @classmethod
    def from_dict(cls, data: dict) -> "PoolState":
        """dapp 풀 객체 (camelCase 키)에서 생성"""
        return cls(
            token_a=data["tokenA"],
            token_b=data["tokenB"],
            current_price=float(data["currentPrice"]),
            desired_price=float(data["desiredPrice"]),
            base_fee=float(data["baseFee"]),
            decimals0=int(data.get("decimals0", 18)),
            decimals1=int(data.get("decimals1", 18)),
            tick_spacing=int(data.get("tickSpacing", DEFAULT_TICK_SPACING)),
        )


@dataclass(frozen=True)
class AmountDelta:
    """스왑 결과 토큰별 변화량 (int128 쌍)"""
    amount0: int
    amount1: int

    def amount_out(self, zero_for_one: bool) -> int:
        """스왑하는 쪽이 받는 출력 토큰 수량 (없으면 0)"""
        out = self.amount1 if zero_for_one else self.amount0
        return out if out > 0 else 0


@dataclass(frozen=True)
class FeeEstimate:
    """동적 수수료 추정 결과"""
    fee_percentage: float  # 비율 (0.003 = 0.3%)
    explanation: str
    direction: PriceMove = PriceMove.NEUTRAL


@dataclass(frozen=True)
class RewardEstimate:
    """vDPP 보상 추정 결과"""
    reward: float  # 항상 >= 0
    explanation: str
    direction: PriceMove = PriceMove.NEUTRAL


@dataclass(frozen=True)
class SwapEstimate:
    """스왑 출력 추정 결과 (buy 토큰 단위)"""
    gross_output: Decimal
    lp_fee: Decimal
    hook_fee: Decimal
    net_output: Decimal
    estimated_tick_diff: int = 0

    @classmethod
    def zero(cls) -> "SwapEstimate":
        return cls(
            gross_output=Decimal(0),
            lp_fee=Decimal(0),
            hook_fee=Decimal(0),
            net_output=Decimal(0),
        )

    @property
    def total_fee(self) -> Decimal:
        return self.lp_fee + self.hook_fee
