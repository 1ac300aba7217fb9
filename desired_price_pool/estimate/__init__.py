"""
Estimate layer for Desired Price Pool

트랜잭션 전에 UI에 보여줄 추정치:
- fee: 동적 거래 수수료
- reward: 유동성 예치 vDPP 보상
- swap: 스왑 예상 수령량
"""

from .fee import estimate_dynamic_fee, clamp_fee, simulate_price_after_sell
from .reward import estimate_deposit_reward, deposit_ratio
from .swap import estimate_swap_output, estimate_tick_diff, dynamic_hook_fee
