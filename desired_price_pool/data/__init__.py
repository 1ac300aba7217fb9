"""
Data layer for Desired Price Pool estimator

풀 상태 / 추정 결과 타입 및 USD 가격표
"""

from .types import PriceMove, PoolState, AmountDelta, FeeEstimate, RewardEstimate, SwapEstimate
from .prices import TokenPriceTable
