"""
In-memory collaborators for running a pool without a chain.

- `InMemoryToken`: fungible token with a fixed supply minted to its owner at
  construction, balances, allowances and boolean-returning transfers.
- `InMemoryHost`: token registry plus a settable clock; `atomic()` snapshots
  every registered token and restores them if the body raises.
- `RecordingVerifier`: verifier port that records each call.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..state.ledger import Address, Amount, AssetId


class InMemoryToken:
    """
    Balance table for one asset.

    Transfers return False (and change nothing) instead of raising when the
    sender's balance or allowance is short, mirroring boolean token interfaces.
    """

    def __init__(self, asset_id: AssetId, *, owner: Address, initial_supply: Amount) -> None:
        if not isinstance(initial_supply, int) or isinstance(initial_supply, bool) or initial_supply < 0:
            raise ValueError(f"initial_supply must be a non-negative int: {initial_supply!r}")
        self.asset_id = asset_id
        self.total_supply = initial_supply
        self._balances: Dict[Address, Amount] = {}
        self._allowances: Dict[Tuple[Address, Address], Amount] = {}
        if initial_supply:
            self._balances[owner] = initial_supply

    def balance_of(self, holder: Address) -> Amount:
        """Get balance for `holder`. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def allowance(self, owner: Address, spender: Address) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: Address, spender: Address, amount: Amount) -> bool:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            return False
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            return False
        current = self.balance_of(sender)
        if current < amount:
            return False
        self._set(sender, current - amount)
        self._set(to, self.balance_of(to) + amount)
        return True

    def transfer_from(self, spender: Address, sender: Address, to: Address, amount: Amount) -> bool:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            return False
        allowed = self.allowance(sender, spender)
        if allowed < amount or self.balance_of(sender) < amount:
            return False
        self.approve(sender, spender, allowed - amount)
        return self.transfer(sender, to, amount)

    def bind(self, address: Address) -> "BoundToken":
        """Return a `TokenPort` acting on behalf of `address`."""
        return BoundToken(self, address)

    def snapshot(self) -> Tuple[Dict[Address, Amount], Dict[Tuple[Address, Address], Amount]]:
        return dict(self._balances), dict(self._allowances)

    def restore(self, snapshot: Tuple[Dict[Address, Amount], Dict[Tuple[Address, Address], Amount]]) -> None:
        balances, allowances = snapshot
        self._balances = dict(balances)
        self._allowances = dict(allowances)

    def _set(self, holder: Address, amount: Amount) -> None:
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def __repr__(self) -> str:
        return f"InMemoryToken({self.asset_id}, supply={self.total_supply}, holders={len(self._balances)})"


class BoundToken:
    """`InMemoryToken` seen from one address (the pool, usually)."""

    def __init__(self, token: InMemoryToken, address: Address) -> None:
        self.token = token
        self.address = address

    def transfer(self, to: Address, amount: Amount) -> bool:
        return self.token.transfer(self.address, to, amount)

    def transfer_from(self, sender: Address, to: Address, amount: Amount) -> bool:
        return self.token.transfer_from(self.address, sender, to, amount)


class InMemoryHost:
    """Token registry, clock and all-or-nothing transaction scope."""

    def __init__(self, *, now: int = 0) -> None:
        self.now = now
        self.tokens: Dict[AssetId, InMemoryToken] = {}

    def create_token(self, asset_id: AssetId, *, owner: Address, initial_supply: Amount) -> InMemoryToken:
        if asset_id in self.tokens:
            raise ValueError(f"token already registered: {asset_id}")
        token = InMemoryToken(asset_id, owner=owner, initial_supply=initial_supply)
        self.tokens[asset_id] = token
        return token

    def ports_for(self, address: Address) -> Dict[AssetId, BoundToken]:
        return {asset_id: token.bind(address) for asset_id, token in self.tokens.items()}

    def clock(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("time cannot go backwards")
        self.now += seconds

    @contextmanager
    def atomic(self) -> Iterator[None]:
        saved = {asset_id: token.snapshot() for asset_id, token in self.tokens.items()}
        try:
            yield
        except BaseException:
            for asset_id, snap in saved.items():
                self.tokens[asset_id].restore(snap)
            raise


class RecordingVerifier:
    """Verifier port that records every call and returns a fixed answer."""

    def __init__(self, answer: Optional[Any] = True) -> None:
        self.answer = answer
        self.calls: List[Tuple[str, AssetId, AssetId, Amount, Amount, Amount, str]] = []

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
        self.calls.append((pool_id, asset_a, asset_b, amount_a, amount_b, amount_in, label))
        return self.answer
