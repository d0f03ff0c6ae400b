"""
Exact-in swaps against the pool reserves.

One code path serves both the fee-less and the fee-bearing pool; a zero
`fee_numerator` simply makes the fee term vanish.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from ..errors import PoolError, PoolErrorKind
from ..kernels.cpmm_math import quote
from ..state.ledger import Address, Amount, AssetId, ReserveLedger
from ..state.pools import PoolConfig
from .ports import TokenPort, pull, push


@dataclass(frozen=True)
class SwapResult:
    asset_in: AssetId
    asset_out: AssetId
    amount_in: Amount
    amount_out: Amount


def reserves_for(config: PoolConfig, ledger: ReserveLedger, asset_in: AssetId) -> Tuple[Amount, Amount]:
    """Return `(reserve_in, reserve_out)` for a swap selling `asset_in`."""
    if asset_in == config.asset_a:
        return ledger.reserve_a, ledger.reserve_b
    if asset_in == config.asset_b:
        return ledger.reserve_b, ledger.reserve_a
    raise PoolError(PoolErrorKind.INVALID_TOKENS, f"asset {asset_in} not in pool")


def quote_for(config: PoolConfig, amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    return quote(amount_in, reserve_in, reserve_out, config.fee_numerator, config.fee_denominator)


def swap_exact_in(
    config: PoolConfig,
    ledger: ReserveLedger,
    tokens: Mapping[AssetId, TokenPort],
    *,
    pool_address: Address,
    caller: Address,
    asset_in: AssetId,
    asset_out: AssetId,
    amount_in: Amount,
    min_out: Amount,
    recipient: Address,
) -> SwapResult:
    """
    Sell exactly `amount_in` of `asset_in` for at least `min_out` of `asset_out`.

    Post-swap reserves:
        reserve_in'  = reserve_in + amount_in   (fee stays in the pool)
        reserve_out' = reserve_out - amount_out

    Invariant: reserve_in' * reserve_out' >= reserve_in * reserve_out

    Raises:
        PoolError: INSUFFICIENT_INPUT, INSUFFICIENT_LIQUIDITY,
            INSUFFICIENT_OUTPUT or TRANSFER_FAILED.
    """
    reserve_in, reserve_out = reserves_for(config, ledger, asset_in)
    amount_out = quote_for(config, amount_in, reserve_in, reserve_out)
    if amount_out <= 0 or amount_out < min_out:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_OUTPUT,
            f"amount_out ({amount_out}) < min_out ({min_out})" if amount_out > 0 else "swap output rounds to zero",
        )

    k_before = reserve_in * reserve_out
    k_after = (reserve_in + amount_in) * (reserve_out - amount_out)
    if k_after < k_before:
        raise ValueError(f"Invariant violation: new_k ({k_after}) < old_k ({k_before})")

    pull(tokens[asset_in], sender=caller, pool_address=pool_address, amount=amount_in, asset=asset_in)

    if asset_in == config.asset_a:
        ledger.apply(amount_in, -amount_out, 0)
    else:
        ledger.apply(-amount_out, amount_in, 0)

    push(tokens[asset_out], to=recipient, amount=amount_out, asset=asset_out)

    return SwapResult(asset_in=asset_in, asset_out=asset_out, amount_in=amount_in, amount_out=amount_out)
