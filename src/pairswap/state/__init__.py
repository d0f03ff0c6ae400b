"""
State management for pairswap pools
"""

from .ledger import LedgerSnapshot, ReserveLedger
from .pools import PoolConfig, compute_pool_id

__all__ = [
    "LedgerSnapshot",
    "ReserveLedger",
    "PoolConfig",
    "compute_pool_id",
]
