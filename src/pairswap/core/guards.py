"""Precondition checks shared by every mutating pool operation.

Each guard raises ``PoolError`` and has no side effects, so the pool runs them
before reading or touching the ledger.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..errors import PoolError, PoolErrorKind
from ..state.ledger import Address, AssetId
from ..state.pools import PoolConfig


def check_deadline(deadline: int, now: int) -> None:
    if not isinstance(deadline, int) or isinstance(deadline, bool):
        raise TypeError("deadline must be an int")
    if deadline < now:
        raise PoolError(PoolErrorKind.EXPIRED, f"deadline {deadline} < now {now}")


def check_pair(config: PoolConfig, asset_a: AssetId, asset_b: AssetId) -> None:
    if (asset_a, asset_b) != config.pair:
        raise PoolError(
            PoolErrorKind.INVALID_TOKENS,
            f"declared pair ({asset_a}, {asset_b}) != pool pair {config.pair}",
        )


def check_path(config: PoolConfig, path: Sequence[AssetId]) -> Tuple[AssetId, AssetId]:
    """Validate a two-hop swap path and return `(asset_in, asset_out)`."""
    if len(path) != 2:
        raise PoolError(PoolErrorKind.INVALID_TOKENS, f"path must have exactly two assets: {list(path)}")
    asset_in, asset_out = path[0], path[1]
    if (asset_in, asset_out) not in (config.pair, config.pair[::-1]):
        raise PoolError(
            PoolErrorKind.INVALID_TOKENS,
            f"path ({asset_in}, {asset_out}) does not match pool pair {config.pair}",
        )
    return asset_in, asset_out


def check_recipient(recipient: Optional[Address], pool_address: Address) -> None:
    if recipient is None or not isinstance(recipient, str) or not recipient:
        raise PoolError(PoolErrorKind.INVALID_RECIPIENT, "recipient is required")
    if recipient == pool_address:
        raise PoolError(PoolErrorKind.INVALID_RECIPIENT, "recipient cannot be the pool itself")
