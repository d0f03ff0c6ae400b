"""Read-only projections over the reserve ledger."""

from __future__ import annotations

from typing import Tuple

from ..errors import PoolError, PoolErrorKind
from ..kernels.int_math import floor_ratio
from ..state.ledger import Amount, ReserveLedger


def spot_price(ledger: ReserveLedger, price_scale: int) -> int:
    """
    Price of one unit of A in units of B, scaled by `price_scale`:

        price = floor(reserve_b * price_scale / reserve_a)
    """
    if ledger.reserve_b == 0 or ledger.reserve_a == 0:
        raise PoolError(
            PoolErrorKind.INSUFFICIENT_RESERVES,
            f"no price for reserves ({ledger.reserve_a}, {ledger.reserve_b})",
        )
    return floor_ratio(ledger.reserve_b, price_scale, ledger.reserve_a)


def reserves(ledger: ReserveLedger) -> Tuple[Amount, Amount]:
    return ledger.reserve_a, ledger.reserve_b
