"""
Constant-product pricing and liquidity kernel.

Pure functions over plain integers: no pool state is read or written here.

Pricing (exact-in, fee applied to the input before pricing):
    net_in     = amount_in * (fee_denominator - fee_numerator)
    amount_out = floor(net_in * reserve_out / (reserve_in * fee_denominator + net_in))

With `fee_numerator == 0` this is exactly
    amount_out = floor(amount_in * reserve_out / (reserve_in + amount_in))

Every division rounds against the trader or the liquidity provider, never
against the pool, so `reserve_in' * reserve_out' >= reserve_in * reserve_out`.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import PoolError, PoolErrorKind
from .int_math import ceil_ratio, floor_ratio, isqrt, min_int, require_int


def validate_fee(fee_numerator: int, fee_denominator: int) -> None:
    require_int("fee_numerator", fee_numerator)
    require_int("fee_denominator", fee_denominator)
    if fee_denominator <= 0:
        raise ValueError(f"fee_denominator must be positive: {fee_denominator}")
    if not (0 <= fee_numerator < fee_denominator):
        raise ValueError(f"fee_numerator must be in [0, {fee_denominator}): {fee_numerator}")


@dataclass(frozen=True)
class ProvisionAmounts:
    amount_a: int
    amount_b: int
    minted: int


@dataclass(frozen=True)
class WithdrawalAmounts:
    amount_a: int
    amount_b: int


def quote(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = 0,
    fee_denominator: int = 1,
) -> int:
    """Output amount for an exact-in swap against `(reserve_in, reserve_out)`."""
    for name, v in (("amount_in", amount_in), ("reserve_in", reserve_in), ("reserve_out", reserve_out)):
        require_int(name, v)
    validate_fee(fee_numerator, fee_denominator)

    if amount_in <= 0:
        raise PoolError(PoolErrorKind.INSUFFICIENT_INPUT, f"amount_in must be positive: {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_LIQUIDITY,
            f"reserves must be positive: ({reserve_in}, {reserve_out})",
        )

    net_in = amount_in * (fee_denominator - fee_numerator)
    return floor_ratio(net_in, reserve_out, reserve_in * fee_denominator + net_in)


def quote_exact_out(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = 0,
    fee_denominator: int = 1,
) -> int:
    """
    Smallest input whose exact-in quote yields at least `amount_out`.

        amount_in = ceil(reserve_in * amount_out * fee_denominator /
                         ((reserve_out - amount_out) * (fee_denominator - fee_numerator)))
    """
    for name, v in (("amount_out", amount_out), ("reserve_in", reserve_in), ("reserve_out", reserve_out)):
        require_int(name, v)
    validate_fee(fee_numerator, fee_denominator)

    if amount_out <= 0:
        raise PoolError(PoolErrorKind.INSUFFICIENT_OUTPUT, f"amount_out must be positive: {amount_out}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_LIQUIDITY,
            f"reserves must be positive: ({reserve_in}, {reserve_out})",
        )
    if amount_out >= reserve_out:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_LIQUIDITY,
            f"cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})",
        )

    return ceil_ratio(
        reserve_in * amount_out,
        fee_denominator,
        (reserve_out - amount_out) * (fee_denominator - fee_numerator),
    )


def quote_deposit(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B matching `amount_a` at the current reserve ratio (floor)."""
    for name, v in (("amount_a", amount_a), ("reserve_a", reserve_a), ("reserve_b", reserve_b)):
        require_int(name, v)
    if amount_a <= 0:
        raise PoolError(PoolErrorKind.INSUFFICIENT_AMOUNTS, f"amount_a must be positive: {amount_a}")
    if reserve_a <= 0 or reserve_b <= 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_LIQUIDITY,
            f"reserves must be positive: ({reserve_a}, {reserve_b})",
        )
    return floor_ratio(amount_a, reserve_b, reserve_a)


def compute_provision(
    *,
    reserve_a: int,
    reserve_b: int,
    total_liquidity: int,
    desired_a: int,
    desired_b: int,
    min_a: int,
    min_b: int,
) -> ProvisionAmounts:
    """
    Deposit amounts and liquidity units for a provision request.

    Bootstrap (no units outstanding): everything is used and
    `minted = isqrt(amount_a * amount_b)`.

    Otherwise the deposit is trimmed to the current ratio and
    `minted = min(amount_a * total / reserve_a, amount_b * total / reserve_b)`.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_liquidity", total_liquidity),
        ("desired_a", desired_a),
        ("desired_b", desired_b),
        ("min_a", min_a),
        ("min_b", min_b),
    ):
        require_int(name, v)

    if desired_a <= 0 or desired_b <= 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_AMOUNTS,
            f"desired amounts must be positive: ({desired_a}, {desired_b})",
        )

    if total_liquidity == 0:
        return ProvisionAmounts(
            amount_a=desired_a,
            amount_b=desired_b,
            minted=isqrt(desired_a * desired_b),
        )

    if reserve_a <= 0 or reserve_b <= 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_LIQUIDITY,
            f"units outstanding against an empty reserve: ({reserve_a}, {reserve_b})",
        )

    optimal_b = floor_ratio(desired_a, reserve_b, reserve_a)
    if optimal_b <= desired_b:
        if optimal_b < min_b:
            raise PoolError(PoolErrorKind.INSUFFICIENT_B, f"optimal_b ({optimal_b}) < min_b ({min_b})")
        amount_a, amount_b = desired_a, optimal_b
    else:
        optimal_a = floor_ratio(desired_b, reserve_a, reserve_b)
        if optimal_a > desired_a:
            raise PoolError(PoolErrorKind.INSUFFICIENT_A, f"optimal_a ({optimal_a}) > desired_a ({desired_a})")
        if optimal_a < min_a:
            raise PoolError(PoolErrorKind.INSUFFICIENT_A, f"optimal_a ({optimal_a}) < min_a ({min_a})")
        amount_a, amount_b = optimal_a, desired_b

    if amount_a == 0 or amount_b == 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_AMOUNTS,
            f"deposit rounds to zero: ({amount_a}, {amount_b})",
        )

    minted = min_int(
        floor_ratio(amount_a, total_liquidity, reserve_a),
        floor_ratio(amount_b, total_liquidity, reserve_b),
    )
    if minted <= 0:
        raise PoolError(PoolErrorKind.INSUFFICIENT_LIQUIDITY, "deposit too small to mint any units")

    return ProvisionAmounts(amount_a=amount_a, amount_b=amount_b, minted=minted)


def compute_withdrawal(
    *,
    liquidity: int,
    reserve_a: int,
    reserve_b: int,
    total_liquidity: int,
    min_a: int,
    min_b: int,
) -> WithdrawalAmounts:
    """Pro-rata share of both reserves for `liquidity` units (floor; remainder stays pooled)."""
    for name, v in (
        ("liquidity", liquidity),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_liquidity", total_liquidity),
        ("min_a", min_a),
        ("min_b", min_b),
    ):
        require_int(name, v)

    if liquidity <= 0:
        raise PoolError(PoolErrorKind.INSUFFICIENT_AMOUNTS, f"liquidity must be positive: {liquidity}")
    if liquidity > total_liquidity:
        raise PoolError(
            PoolErrorKind.UNDERFLOW,
            f"cannot withdraw more than total liquidity: {liquidity} > {total_liquidity}",
        )

    amount_a = floor_ratio(liquidity, reserve_a, total_liquidity)
    amount_b = floor_ratio(liquidity, reserve_b, total_liquidity)
    if amount_a < min_a or amount_b < min_b:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_AMOUNTS,
            f"withdrawal ({amount_a}, {amount_b}) below minimum ({min_a}, {min_b})",
        )
    return WithdrawalAmounts(amount_a=amount_a, amount_b=amount_b)
