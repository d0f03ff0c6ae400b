"""
Pool identity and static configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..kernels.cpmm_math import validate_fee
from ..kernels.int_math import require_int
from .canonical import hash_canonical
from .ledger import AssetId


DEFAULT_FEE_NUMERATOR = 30
DEFAULT_FEE_DENOMINATOR = 10_000
DEFAULT_PRICE_SCALE = 10**18


def compute_pool_id(
    asset_a: AssetId,
    asset_b: AssetId,
    fee_numerator: int,
    fee_denominator: int,
) -> str:
    """
    Deterministically compute a pool_id for the given pool parameters.

        pool_id = H("pairswap:Pool:v1\\0" || encode([asset_a, asset_b, fee_numerator, fee_denominator]))

    Asset order is significant: (A, B) and (B, A) are different pools because
    A is the base asset of the spot price.
    """
    if not isinstance(asset_a, str) or not asset_a:
        raise ValueError("asset_a must be a non-empty string")
    if not isinstance(asset_b, str) or not asset_b:
        raise ValueError("asset_b must be a non-empty string")
    if asset_a == asset_b:
        raise ValueError(f"pool assets must be distinct: {asset_a}")
    validate_fee(fee_numerator, fee_denominator)
    return hash_canonical("Pool", [asset_a, asset_b, int(fee_numerator), int(fee_denominator)])


@dataclass(frozen=True)
class PoolConfig:
    """
    Static parameters of a pool.

    Attributes:
        asset_a: Base asset identifier
        asset_b: Quote asset identifier
        fee_numerator: Fee charged on swap inputs is fee_numerator / fee_denominator
        fee_denominator: Fixed-point denominator of the fee (positive)
        price_scale: Fixed-point scale of `spot_price`
        track_providers: Tie withdrawals to the caller's provisioned units
    """
    asset_a: AssetId
    asset_b: AssetId
    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR
    price_scale: int = DEFAULT_PRICE_SCALE
    track_providers: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.asset_a, str) or not self.asset_a:
            raise ValueError("asset_a must be a non-empty string")
        if not isinstance(self.asset_b, str) or not self.asset_b:
            raise ValueError("asset_b must be a non-empty string")
        if self.asset_a == self.asset_b:
            raise ValueError(f"pool assets must be distinct: {self.asset_a}")
        validate_fee(self.fee_numerator, self.fee_denominator)
        require_int("price_scale", self.price_scale)
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive: {self.price_scale}")
        if not isinstance(self.track_providers, bool):
            raise TypeError("track_providers must be a bool")

    @property
    def pair(self) -> Tuple[AssetId, AssetId]:
        return (self.asset_a, self.asset_b)

    @property
    def pool_id(self) -> str:
        return compute_pool_id(self.asset_a, self.asset_b, self.fee_numerator, self.fee_denominator)

    def other(self, asset: AssetId) -> AssetId:
        """Return the counterpart of `asset` in this pair."""
        if asset == self.asset_a:
            return self.asset_b
        if asset == self.asset_b:
            return self.asset_a
        raise ValueError(f"Asset {asset} not in pool")
