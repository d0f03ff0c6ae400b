#!/usr/bin/env python3
"""Offline walkthrough: bootstrap a pool, swap, withdraw, print what happened."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from pairswap.core import Pool
from pairswap.core.events import event_to_dict
from pairswap.integration import InMemoryHost
from pairswap.log import setup_logging
from pairswap.state import PoolConfig

ASSET_A = "TKA"
ASSET_B = "TKB"
POOL = "pool"
LP = "alice"
TRADER = "bob"


def run_demo(*, fee_numerator: int, fee_denominator: int, amount_in: int) -> int:
    host = InMemoryHost(now=0)
    token_a = host.create_token(ASSET_A, owner=LP, initial_supply=1_000_000)
    token_b = host.create_token(ASSET_B, owner=LP, initial_supply=4_000_000)
    token_a.transfer(LP, TRADER, 10_000)
    for holder in (LP, TRADER):
        token_a.approve(holder, POOL, 10**12)
        token_b.approve(holder, POOL, 10**12)

    config = PoolConfig(
        asset_a=ASSET_A,
        asset_b=ASSET_B,
        fee_numerator=fee_numerator,
        fee_denominator=fee_denominator,
    )
    pool = Pool(config, address=POOL, tokens=host.ports_for(POOL), host=host, clock=host.clock)
    deadline = host.clock() + 3600
    print(f"[pool-demo] pool_id={pool.pool_id}")

    res = pool.provision(
        caller=LP, asset_a=ASSET_A, asset_b=ASSET_B, desired_a=100_000, desired_b=400_000,
        recipient=LP, deadline=deadline,
    )
    if not res.ok:
        print(f"[pool-demo] FAIL (provision): {res.error.value} {res.detail or ''}")
        return 1
    print(f"[pool-demo] reserves after provision: {pool.reserves()} units={pool.total_liquidity()}")
    print(f"[pool-demo] spot price (x1e18): {pool.spot_price()}")

    quoted = pool.get_amount_out(amount_in, ASSET_A)
    res = pool.swap_exact_in(
        caller=TRADER, amount_in=amount_in, min_out=quoted, path=(ASSET_A, ASSET_B),
        recipient=TRADER, deadline=deadline,
    )
    if not res.ok:
        print(f"[pool-demo] FAIL (swap): {res.error.value} {res.detail or ''}")
        return 1
    print(f"[pool-demo] swap {amount_in} {ASSET_A} -> {res.value.amount_out} {ASSET_B} (quoted {quoted})")
    print(f"[pool-demo] reserves after swap: {pool.reserves()}")

    res = pool.withdraw(
        caller=LP, asset_a=ASSET_A, asset_b=ASSET_B, liquidity=pool.liquidity_of(LP) // 2,
        recipient=LP, deadline=deadline,
    )
    if not res.ok:
        print(f"[pool-demo] FAIL (withdraw): {res.error.value} {res.detail or ''}")
        return 1
    print(f"[pool-demo] withdrew {res.value.amount_a} {ASSET_A} + {res.value.amount_b} {ASSET_B}")
    print(f"[pool-demo] reserves after withdraw: {pool.reserves()} units={pool.total_liquidity()}")

    for ev in pool.events:
        print(f"[pool-demo] event {json.dumps(event_to_dict(ev), sort_keys=True)}")
    print(f"[pool-demo] state_root={pool.state_root()}")
    print("[pool-demo] OK")
    return 0


def main() -> int:
    ap = argparse.ArgumentParser(description="Offline constant-product pool walkthrough")
    ap.add_argument("--fee-numerator", type=int, default=30)
    ap.add_argument("--fee-denominator", type=int, default=10_000)
    ap.add_argument("--amount-in", type=int, default=1_000)
    ap.add_argument("--json-logs", action="store_true")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    setup_logging(debug=args.debug, json_logs=args.json_logs)
    return run_demo(
        fee_numerator=args.fee_numerator,
        fee_denominator=args.fee_denominator,
        amount_in=args.amount_in,
    )


if __name__ == "__main__":
    raise SystemExit(main())
