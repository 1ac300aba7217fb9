"""
Desired Price Pool 상수 정의

온체인 컨트랙트와 일치해야 하는 프로토콜 상수들 (설정값이 아님):
- Q96 / Q192: sqrtPriceX96 인코딩 (2^96, 2^192)
- MIN_TICK / MAX_TICK, MIN_SQRT_RATIO / MAX_SQRT_RATIO: TickMath 범위
- MASK_128 / MASK_256: BalanceDelta (int256 = int128 × 2) 디코딩
- 동적 수수료 / vDPP 보상 추정 계수
"""

from typing import Dict

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# Uniswap TickMath 상수
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# 1 tick = 0.01% 가격 변화
TICK_BASE: float = 1.0001

# math.exp 인자 상한 (IEEE-754 double 기준, 다른 부동소수점 정밀도에서는 재계산 필요)
MAX_EXP_EXPONENT: float = 709.0

# 부동소수점 근사 sqrtPriceX96의 정확 알고리즘 대비 허용 상대 오차
SQRT_RATIO_APPROX_TOLERANCE: float = 1e-9

# 가격 문자열 변환 시 유지하는 소수점 자릿수
PRICE_DISPLAY_DECIMALS: int = 18

# BalanceDelta 비트 마스크
MASK_128: int = (1 << 128) - 1
MASK_256: int = (1 << 256) - 1
INT128_MIN: int = -(2 ** 127)
INT128_MAX: int = 2 ** 127 - 1
INT256_MIN: int = -(2 ** 255)
UINT256_MAX: int = 2 ** 256 - 1

# 동적 수수료 추정 (estimate.fee)
MIN_FEE: float = 0.0001  # 0.01%
MAX_FEE: float = 0.05    # 5%
PRICE_IMPACT_COEFFICIENT: float = 0.0005
MIN_PRICE_AFTER: float = 0.000001
PRICE_TOLERANCE: float = 1e-9

FEE_MULTIPLIER_TOWARD: float = 0.5  # 50% 할인
FEE_MULTIPLIER_AWAY: float = 2.0    # 200% 할증
FEE_MULTIPLIER_NEUTRAL: float = 1.0

# vDPP 보상 추정 (estimate.reward)
REWARD_FACTOR_BASE: float = 0.02
REWARD_FACTOR_TOWARD: float = 0.05

# 스왑 출력 추정 (estimate.swap), DesiredPricePool 훅 기본값
DEFAULT_TICK_SPACING: int = 64
DEFAULT_BASE_FEE_PER_TICK: int = 30  # pips per tick spacing unit
DEFAULT_HOOK_FEE: int = 25           # LP 수수료 대비 %
FEE_RATE_DENOMINATOR: int = 1_000_000
HOOK_FEE_PERCENT_DENOMINATOR: int = 100
TICK_SPACING_SQRT_FACTOR_SHIFT: int = 116
DYNAMIC_FEE_MULTIPLIER_SHIFT: int = 16
MAX_TICK_IMPACT_ESTIMATE: int = 10

# 기본 USD 가격표 (가치 평가용 mock 가격)
DEFAULT_TOKEN_PRICES: Dict[str, float] = {
    "ETH": 2000,
    "DAI": 1,
    "BTC": 30000,
    "USDT": 1,
    "USDC": 1,
    "UNI": 5,
    "DPP": 0.5,   # 풀 토큰
    "vDPP": 1.5,  # 거버넌스 토큰
}
