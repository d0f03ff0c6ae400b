"""
Core pool engines
"""

from .events import Event, LiquidityProvisioned, LiquidityWithdrawn, PoolEvent, Swapped
from .liquidity import ProvisionResult, WithdrawResult
from .pool import Pool
from .ports import TokenPort, TransactionHost, VerifierPort
from .swap import SwapResult

__all__ = [
    "Pool",
    "Event",
    "PoolEvent",
    "LiquidityProvisioned",
    "LiquidityWithdrawn",
    "Swapped",
    "ProvisionResult",
    "WithdrawResult",
    "SwapResult",
    "TokenPort",
    "VerifierPort",
    "TransactionHost",
]
