"""
pairswap: a two-asset constant-product liquidity pool with exact-integer pricing.

Public API:
- `Pool(config, address=..., tokens=...)`: provision / withdraw / swap_exact_in
  return a `PoolResult`; spot_price / reserves / quote are read-only.
- `PoolConfig`: asset pair, fee rate, price scale, provider tracking.
- `PoolError` / `PoolErrorKind`: the failure taxonomy.
"""

from .core import Event, Pool, ProvisionResult, SwapResult, WithdrawResult
from .errors import PoolError, PoolErrorKind, PoolResult
from .kernels.cpmm_math import quote
from .state import PoolConfig, compute_pool_id

__version__ = "0.1.0"

__all__ = [
    "Pool",
    "PoolConfig",
    "PoolError",
    "PoolErrorKind",
    "PoolResult",
    "ProvisionResult",
    "WithdrawResult",
    "SwapResult",
    "Event",
    "quote",
    "compute_pool_id",
]
