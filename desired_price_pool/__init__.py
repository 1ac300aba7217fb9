"""
Desired Price Pool Estimator

DPP(Desired Price Pool) dapp의 트랜잭션 전 추정 코어.
온체인 고정소수점 연산을 Python 정수/부동소수점으로 재현:
- Tick ↔ sqrtPriceX96 ↔ Price 변환
- 패킹된 int256 스왑 델타 디코딩
- 동적 수수료 / vDPP 보상 / 스왑 출력 추정
"""

__version__ = "0.1.0"

from .constants import Q96, Q192, MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO
