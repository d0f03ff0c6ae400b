"""
Liquidity management operations: provision and withdraw.

These run inside the pool's operation scope (lock + rollback), so they only
need to keep their own ordering right:
- every ledger read used for pricing happens before any token call,
- provisioning pulls both assets, then credits the ledger,
- withdrawal debits the ledger, then pays out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from ..kernels.cpmm_math import compute_provision, compute_withdrawal
from ..state.ledger import Address, Amount, AssetId, ReserveLedger
from ..state.pools import PoolConfig
from .ports import TokenPort, pull, push


@dataclass(frozen=True)
class ProvisionResult:
    amount_a: Amount
    amount_b: Amount
    liquidity: Amount


@dataclass(frozen=True)
class WithdrawResult:
    amount_a: Amount
    amount_b: Amount
    liquidity: Amount


def provision(
    config: PoolConfig,
    ledger: ReserveLedger,
    tokens: Mapping[AssetId, TokenPort],
    *,
    pool_address: Address,
    caller: Address,
    desired_a: Amount,
    desired_b: Amount,
    min_a: Amount,
    min_b: Amount,
    recipient: Address,
) -> ProvisionResult:
    """
    Deposit both assets along the current ratio and mint liquidity units.

    First deposit (no units outstanding):
        amounts = desired, minted = isqrt(amount_a * amount_b)

    Later deposits:
        optimal_b = floor(desired_a * reserve_b / reserve_a)
        if optimal_b <= desired_b: use (desired_a, optimal_b)
        else:                      use (floor(desired_b * reserve_a / reserve_b), desired_b)
        minted = min(floor(amount_a * total / reserve_a), floor(amount_b * total / reserve_b))

    Minted units are credited to `recipient`.

    Raises:
        PoolError: INSUFFICIENT_AMOUNTS, INSUFFICIENT_A, INSUFFICIENT_B,
            INSUFFICIENT_LIQUIDITY, TRANSFER_FAILED or UNDERFLOW.
    """
    amounts = compute_provision(
        reserve_a=ledger.reserve_a,
        reserve_b=ledger.reserve_b,
        total_liquidity=ledger.total_liquidity,
        desired_a=desired_a,
        desired_b=desired_b,
        min_a=min_a,
        min_b=min_b,
    )

    pull(tokens[config.asset_a], sender=caller, pool_address=pool_address, amount=amounts.amount_a, asset=config.asset_a)
    pull(tokens[config.asset_b], sender=caller, pool_address=pool_address, amount=amounts.amount_b, asset=config.asset_b)

    ledger.apply(amounts.amount_a, amounts.amount_b, amounts.minted, provider=recipient)

    return ProvisionResult(amount_a=amounts.amount_a, amount_b=amounts.amount_b, liquidity=amounts.minted)


def withdraw(
    config: PoolConfig,
    ledger: ReserveLedger,
    tokens: Mapping[AssetId, TokenPort],
    *,
    caller: Address,
    liquidity: Amount,
    min_a: Amount,
    min_b: Amount,
    recipient: Address,
) -> WithdrawResult:
    """
    Burn `liquidity` units for a pro-rata share of both reserves.

        amount_a = floor(liquidity * reserve_a / total)
        amount_b = floor(liquidity * reserve_b / total)

    With provider tracking on, the units are debited from `caller`.

    Raises:
        PoolError: INSUFFICIENT_AMOUNTS, UNDERFLOW or TRANSFER_FAILED.
    """
    amounts = compute_withdrawal(
        liquidity=liquidity,
        reserve_a=ledger.reserve_a,
        reserve_b=ledger.reserve_b,
        total_liquidity=ledger.total_liquidity,
        min_a=min_a,
        min_b=min_b,
    )

    ledger.apply(-amounts.amount_a, -amounts.amount_b, -liquidity, provider=caller)

    push(tokens[config.asset_a], to=recipient, amount=amounts.amount_a, asset=config.asset_a)
    push(tokens[config.asset_b], to=recipient, amount=amounts.amount_b, asset=config.asset_b)

    return WithdrawResult(amount_a=amounts.amount_a, amount_b=amounts.amount_b, liquidity=liquidity)
