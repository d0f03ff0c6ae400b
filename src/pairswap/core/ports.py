"""
Collaborator ports consumed by the pool.

The pool never issues tokens itself. It is handed one `TokenPort` per asset,
already acting on behalf of the pool's own address, plus an optional verifier
and an optional transaction host.
"""

from __future__ import annotations

from typing import Any, ContextManager, Protocol

from ..errors import PoolError, PoolErrorKind
from ..state.ledger import Address, Amount, AssetId


class TokenPort(Protocol):
    def transfer(self, to: Address, amount: Amount) -> bool:
        """Move `amount` from the pool to `to`."""
        ...

    def transfer_from(self, sender: Address, to: Address, amount: Amount) -> bool:
        """Move `amount` from `sender` to `to` using the pool's allowance."""
        ...


class VerifierPort(Protocol):
    def verify(
        self,
        pool_id: str,
        asset_a: AssetId,
        asset_b: AssetId,
        amount_a: Amount,
        amount_b: Amount,
        amount_in: Amount,
        label: str,
    ) -> Any:
        ...


class TransactionHost(Protocol):
    def atomic(self) -> ContextManager[None]:
        """Scope whose collaborator effects are undone if the body raises."""
        ...


def pull(token: TokenPort, *, sender: Address, pool_address: Address, amount: Amount, asset: AssetId) -> None:
    """Debit `amount` of `asset` from `sender` into the pool."""
    try:
        ok = token.transfer_from(sender, pool_address, amount)
    except Exception as exc:
        raise PoolError(
            PoolErrorKind.TRANSFER_FAILED,
            f"transfer_from {sender} of {amount} {asset} aborted: {type(exc).__name__}: {exc}",
        ) from exc
    if ok is not True:
        raise PoolError(PoolErrorKind.TRANSFER_FAILED, f"transfer_from {sender} of {amount} {asset} refused")


def push(token: TokenPort, *, to: Address, amount: Amount, asset: AssetId) -> None:
    """Credit `amount` of `asset` from the pool to `to`."""
    try:
        ok = token.transfer(to, amount)
    except Exception as exc:
        raise PoolError(
            PoolErrorKind.TRANSFER_FAILED,
            f"transfer to {to} of {amount} {asset} aborted: {type(exc).__name__}: {exc}",
        ) from exc
    if ok is not True:
        raise PoolError(PoolErrorKind.TRANSFER_FAILED, f"transfer to {to} of {amount} {asset} refused")
