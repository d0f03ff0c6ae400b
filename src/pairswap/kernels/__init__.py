"""
Kernel layer.

Deterministic, integer-only functions used by the pool:
- `int_math`: floor/ceil ratios, integer square root, min,
- `cpmm_math`: exact-in pricing plus provision/withdrawal amounts.

Kernels never touch pool state; they take integers and return integers (or
small frozen result types) and raise `PoolError` on domain failures.
"""
