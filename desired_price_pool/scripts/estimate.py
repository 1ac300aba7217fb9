#!/usr/bin/env python3
"""
Estimate - 추정 코어를 커맨드라인에서 실행

Usage:
    # 틱 → sqrtPriceX96 / 가격
    python -m desired_price_pool.scripts.estimate price --tick -196256 --decimals0 18 --decimals1 6

    # 패킹된 스왑 델타 디코딩
    python -m desired_price_pool.scripts.estimate delta 0xffff...

    # 동적 수수료
    python -m desired_price_pool.scripts.estimate fee --pool ETH/DAI --current 2000 --desired 2100 --amount 1000 --sell ETH

    # vDPP 보상
    python -m desired_price_pool.scripts.estimate reward --pool ETH/DAI --current 2005.5 --desired 2000 --amount-a 1 --amount-b 2000

    # 스왑 예상 수령량
    python -m desired_price_pool.scripts.estimate swap --amount 1000000000000000000 --balance 10000000000000000000 --desired-tick 0
"""

import argparse
from typing import List, Optional

from ..config import settings, configure_logging
from ..data.types import PoolState
from ..estimate import estimate_dynamic_fee, estimate_deposit_reward, estimate_swap_output
from ..math import (
    get_sqrt_ratio_at_tick,
    get_sqrt_ratio_at_tick_exact,
    get_price_at_tick,
    decode_balance_delta,
    is_valid_tick,
)
from ..constants import DEFAULT_TICK_SPACING


def parse_pool(args: argparse.Namespace) -> PoolState:
    """--pool A/B --current --desired --base-fee → PoolState"""
    try:
        token_a, token_b = args.pool.split("/")
    except ValueError:
        raise SystemExit(f"--pool 형식은 TOKEN_A/TOKEN_B 입니다: {args.pool}")

    return PoolState(
        token_a=token_a,
        token_b=token_b,
        current_price=args.current,
        desired_price=args.desired,
        base_fee=args.base_fee,
    )


def cmd_price(args: argparse.Namespace) -> None:
    sqrt_ratio = get_sqrt_ratio_at_tick(args.tick)
    price = get_price_at_tick(args.tick, args.decimals0, args.decimals1)

    print(f"tick:          {args.tick}")
    print(f"sqrtPriceX96:  {sqrt_ratio}")
    if is_valid_tick(args.tick):
        exact = get_sqrt_ratio_at_tick_exact(args.tick)
        print(f"  (on-chain):  {exact}")
    print(f"price (t1/t0): {price}")


def cmd_delta(args: argparse.Namespace) -> None:
    delta = decode_balance_delta(args.packed)
    print(f"amount0: {delta.amount0}")
    print(f"amount1: {delta.amount1}")


def cmd_fee(args: argparse.Namespace) -> None:
    pool = parse_pool(args)
    estimate = estimate_dynamic_fee(args.amount, args.sell, pool)
    print(f"fee: {estimate.fee_percentage:.6f} ({estimate.direction.value})")
    print(estimate.explanation)


def cmd_reward(args: argparse.Namespace) -> None:
    pool = parse_pool(args)
    prices = settings.load_price_table(args.prices)
    estimate = estimate_deposit_reward(args.amount_a, args.amount_b, pool, prices)
    print(f"reward: {estimate.reward:.6f} vDPP ({estimate.direction.value})")
    print(estimate.explanation)


def cmd_swap(args: argparse.Namespace) -> None:
    estimate = estimate_swap_output(
        sell_amount=args.amount,
        sell_balance=args.balance,
        zero_for_one=not args.one_for_zero,
        desired_price_tick=args.desired_tick,
        sell_decimals=args.sell_decimals,
        buy_decimals=args.buy_decimals,
        tick_spacing=args.tick_spacing,
    )
    print(f"gross:     {estimate.gross_output}")
    print(f"lp fee:    {estimate.lp_fee}")
    print(f"hook fee:  {estimate.hook_fee} (tick diff {estimate.estimated_tick_diff})")
    print(f"net:       {estimate.net_output}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Desired Price Pool 추정 도구",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", type=str, default=None, help="로그 레벨 (기본: DPP_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # price
    p = subparsers.add_parser("price", help="틱 → sqrtPriceX96 / 가격")
    p.add_argument("--tick", type=int, required=True, help="틱 인덱스")
    p.add_argument("--decimals0", type=int, default=18, help="token0 소수점 자릿수")
    p.add_argument("--decimals1", type=int, default=18, help="token1 소수점 자릿수")
    p.set_defaults(func=cmd_price)

    # delta
    p = subparsers.add_parser("delta", help="패킹된 int256 스왑 델타 디코딩")
    p.add_argument("packed", type=str, help="10진 또는 0x 16진 문자열")
    p.set_defaults(func=cmd_delta)

    # fee / reward 공통 풀 인자
    pool_args = argparse.ArgumentParser(add_help=False)
    pool_args.add_argument("--pool", type=str, required=True, help="TOKEN_A/TOKEN_B")
    pool_args.add_argument("--current", type=float, required=True, help="현재 가격 (A 기준 B)")
    pool_args.add_argument("--desired", type=float, required=True, help="목표 가격 (A 기준 B)")
    pool_args.add_argument("--base-fee", type=float, default=0.003, help="기본 수수료 (기본: 0.003)")

    p = subparsers.add_parser("fee", parents=[pool_args], help="동적 수수료 추정")
    p.add_argument("--amount", type=float, required=True, help="매도 수량")
    p.add_argument("--sell", type=str, required=True, help="매도 토큰 심볼")
    p.set_defaults(func=cmd_fee)

    p = subparsers.add_parser("reward", parents=[pool_args], help="vDPP 보상 추정")
    p.add_argument("--amount-a", type=float, required=True, help="token A 예치 수량")
    p.add_argument("--amount-b", type=float, required=True, help="token B 예치 수량")
    p.add_argument("--prices", type=str, default=None, help="USD 가격표 YAML 경로")
    p.set_defaults(func=cmd_reward)

    # swap
    p = subparsers.add_parser("swap", help="스왑 예상 수령량")
    p.add_argument("--amount", type=int, required=True, help="매도 수량 (wei)")
    p.add_argument("--balance", type=int, required=True, help="매도 토큰 잔고 (wei)")
    p.add_argument("--desired-tick", type=int, required=True, help="목표 가격 틱")
    p.add_argument("--one-for-zero", action="store_true", help="token1 → token0 스왑")
    p.add_argument("--sell-decimals", type=int, default=18)
    p.add_argument("--buy-decimals", type=int, default=18)
    p.add_argument("--tick-spacing", type=int, default=DEFAULT_TICK_SPACING)
    p.set_defaults(func=cmd_swap)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
