"""Error taxonomy for the pool.

Kernels and engines raise ``PoolError``. The ``Pool`` facade converts it into a
``PoolResult`` so every mutating call returns either a success payload or one
error kind, never a partially applied state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional


@unique
class PoolErrorKind(Enum):
    EXPIRED = "Expired"
    INVALID_TOKENS = "InvalidTokens"
    INVALID_RECIPIENT = "InvalidRecipient"
    INSUFFICIENT_AMOUNTS = "InsufficientAmounts"
    INSUFFICIENT_A = "InsufficientA"
    INSUFFICIENT_B = "InsufficientB"
    INSUFFICIENT_LIQUIDITY = "InsufficientLiquidity"
    INSUFFICIENT_INPUT = "InsufficientInput"
    INSUFFICIENT_OUTPUT = "InsufficientOutput"
    INSUFFICIENT_RESERVES = "InsufficientReserves"
    TRANSFER_FAILED = "TransferFailed"
    UNDERFLOW = "Underflow"
    # Nested call into a pool that is already executing an operation.
    LOCKED = "Locked"


class PoolError(Exception):
    """Raised when an operation cannot be applied."""

    def __init__(self, kind: PoolErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


@dataclass(frozen=True)
class PoolResult:
    """Outcome of a mutating pool operation."""

    ok: bool
    value: Any = None
    error: Optional[PoolErrorKind] = None
    detail: Optional[str] = None

    def __post_init__(self) -> None:
        if self.ok != (self.error is None):
            raise ValueError("a PoolResult carries an error kind exactly when it is not ok")

    @classmethod
    def success(cls, value: Any) -> "PoolResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: PoolError) -> "PoolResult":
        return cls(ok=False, error=exc.kind, detail=exc.detail or None)

    def unwrap(self) -> Any:
        """Return the payload, or raise ``PoolError`` for a failed result."""
        if self.error is None:
            return self.value
        raise PoolError(self.error, self.detail or "")
