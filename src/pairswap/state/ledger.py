"""
Reserve ledger for a single two-asset pool.

Holds the two reserves, the total liquidity-unit counter and (optionally) the
per-provider unit balances. All three quantities move together through
`apply`, which either lands every delta or none of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from ..errors import PoolError, PoolErrorKind
from ..kernels.int_math import require_int


# Type aliases
Address = str  # opaque account / contract identifier
AssetId = str  # opaque asset identifier
Amount = int  # non-negative integer (arbitrary precision)


@dataclass(frozen=True)
class LedgerSnapshot:
    reserve_a: Amount
    reserve_b: Amount
    total_liquidity: Amount
    providers: Mapping[Address, Amount]


class ReserveLedger:
    """
    Reserves plus liquidity accounting.

    Notes:
    - Every stored value is non-negative.
    - Zero provider balances are omitted to keep the table sparse.
    - With provider tracking on, provider balances always sum to `total_liquidity`.
    """

    def __init__(self, *, track_providers: bool = True) -> None:
        self.track_providers = track_providers
        self._reserve_a: Amount = 0
        self._reserve_b: Amount = 0
        self._total_liquidity: Amount = 0
        self._providers: Dict[Address, Amount] = {}

    @property
    def reserve_a(self) -> Amount:
        return self._reserve_a

    @property
    def reserve_b(self) -> Amount:
        return self._reserve_b

    @property
    def total_liquidity(self) -> Amount:
        return self._total_liquidity

    def balance_of(self, provider: Address) -> Amount:
        """Liquidity units held by `provider`. Returns 0 if not found."""
        return self._providers.get(provider, 0)

    def get_all_balances(self) -> Dict[Address, Amount]:
        return dict(self._providers)

    def constant_product(self) -> int:
        return self._reserve_a * self._reserve_b

    def apply(
        self,
        delta_a: int,
        delta_b: int,
        delta_liquidity: int,
        *,
        provider: Optional[Address] = None,
    ) -> None:
        """
        Apply signed deltas to both reserves and the unit counter atomically.

        When provider tracking is on and `provider` is given, `delta_liquidity`
        is also applied to that provider's balance.

        Raises:
            PoolError(UNDERFLOW): if any resulting value would be negative;
                nothing is modified in that case.
        """
        require_int("delta_a", delta_a)
        require_int("delta_b", delta_b)
        require_int("delta_liquidity", delta_liquidity)

        new_a = self._reserve_a + delta_a
        new_b = self._reserve_b + delta_b
        new_total = self._total_liquidity + delta_liquidity
        if new_a < 0 or new_b < 0:
            raise PoolError(
                PoolErrorKind.UNDERFLOW,
                f"reserves would go negative: ({self._reserve_a}{delta_a:+d}, {self._reserve_b}{delta_b:+d})",
            )
        if new_total < 0:
            raise PoolError(
                PoolErrorKind.UNDERFLOW,
                f"total liquidity would go negative: {self._total_liquidity}{delta_liquidity:+d}",
            )

        new_provider_balance: Optional[Amount] = None
        if self.track_providers and provider is not None and delta_liquidity != 0:
            current = self.balance_of(provider)
            new_provider_balance = current + delta_liquidity
            if new_provider_balance < 0:
                raise PoolError(
                    PoolErrorKind.UNDERFLOW,
                    f"insufficient liquidity balance for {provider}: {current} < {-delta_liquidity}",
                )

        self._reserve_a = new_a
        self._reserve_b = new_b
        self._total_liquidity = new_total
        if provider is not None and new_provider_balance is not None:
            if new_provider_balance == 0:
                self._providers.pop(provider, None)
            else:
                self._providers[provider] = new_provider_balance

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            reserve_a=self._reserve_a,
            reserve_b=self._reserve_b,
            total_liquidity=self._total_liquidity,
            providers=MappingProxyType(dict(self._providers)),
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._reserve_a = snapshot.reserve_a
        self._reserve_b = snapshot.reserve_b
        self._total_liquidity = snapshot.total_liquidity
        self._providers = dict(snapshot.providers)

    def to_dict(self) -> Dict[str, object]:
        return {
            "reserve_a": self._reserve_a,
            "reserve_b": self._reserve_b,
            "total_liquidity": self._total_liquidity,
            "providers": [[p, amt] for p, amt in sorted(self._providers.items())],
        }

    def __repr__(self) -> str:
        return (
            f"ReserveLedger(reserves=({self._reserve_a}, {self._reserve_b}), "
            f"total_liquidity={self._total_liquidity}, providers={len(self._providers)})"
        )
