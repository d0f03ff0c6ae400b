"""
Pool facade.

Owns one `ReserveLedger` and wires the guards, engines and ports together:

1. Acquire the pool lock; a nested call from inside a token callback is
   rejected with LOCKED instead of observing a half-applied state.
2. Open the host transaction (if any) and snapshot the ledger.
3. Run the guards, then the provisioning or swap engine.
4. On any failure restore the snapshot (the host rolls back collaborator
   effects) and return a failed `PoolResult`.
5. On success emit exactly one event.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from contextlib import contextmanager, nullcontext
from dataclasses import asdict
from typing import Any, Callable, Deque, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from structlog import get_logger

from ..errors import PoolError, PoolErrorKind, PoolResult
from ..state.canonical import hash_canonical
from ..state.ledger import Address, Amount, AssetId, ReserveLedger
from ..state.pools import PoolConfig
from . import guards, pricing, swap
from .events import EventListener, LiquidityProvisioned, LiquidityWithdrawn, PoolEvent, Swapped
from .liquidity import provision as provision_liquidity
from .liquidity import withdraw as withdraw_liquidity
from .ports import TokenPort, TransactionHost, VerifierPort

logger = get_logger()

# Most recent notifications kept on `Pool.events`; listeners see every one.
DEFAULT_EVENT_HISTORY = 1024


def _wall_clock() -> int:
    return int(time.time())


class Pool:
    """A two-asset constant-product pool."""

    def __init__(
        self,
        config: PoolConfig,
        *,
        address: Address,
        tokens: Mapping[AssetId, TokenPort],
        verifier: Optional[VerifierPort] = None,
        host: Optional[TransactionHost] = None,
        clock: Optional[Callable[[], int]] = None,
        event_history: int = DEFAULT_EVENT_HISTORY,
    ) -> None:
        if not isinstance(address, str) or not address:
            raise ValueError("address must be a non-empty string")
        missing = [asset for asset in config.pair if asset not in tokens]
        if missing:
            raise ValueError(f"no token port for assets: {missing}")

        self.config = config
        self.address = address
        self.pool_id = config.pool_id
        self.ledger = ReserveLedger(track_providers=config.track_providers)
        self.events: Deque[PoolEvent] = deque(maxlen=event_history)

        self._tokens: Dict[AssetId, TokenPort] = {asset: tokens[asset] for asset in config.pair}
        self._verifier = verifier
        self._host = host
        self._clock = clock or _wall_clock
        self._listeners: List[EventListener] = []
        self._lock = threading.RLock()
        self._entered = False

        self.log = logger.new(pool_id=self.pool_id[:18], pair=f"{config.asset_a}/{config.asset_b}")

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    # -- mutating operations ---------------------------------------------------

    def provision(
        self,
        *,
        caller: Address,
        asset_a: AssetId,
        asset_b: AssetId,
        desired_a: Amount,
        desired_b: Amount,
        min_a: Amount = 0,
        min_b: Amount = 0,
        recipient: Address,
        deadline: int,
    ) -> PoolResult:
        """Deposit both assets; the result value is a `ProvisionResult`."""
        def run() -> Tuple[Any, PoolEvent]:
            guards.check_deadline(deadline, self._clock())
            guards.check_pair(self.config, asset_a, asset_b)
            guards.check_recipient(recipient, self.address)
            res = provision_liquidity(
                self.config,
                self.ledger,
                self._tokens,
                pool_address=self.address,
                caller=caller,
                desired_a=desired_a,
                desired_b=desired_b,
                min_a=min_a,
                min_b=min_b,
                recipient=recipient,
            )
            ev = LiquidityProvisioned(
                sender=caller,
                recipient=recipient,
                amount_a=res.amount_a,
                amount_b=res.amount_b,
                liquidity=res.liquidity,
            )
            return res, ev

        return self._execute("provision", run)

    def withdraw(
        self,
        *,
        caller: Address,
        asset_a: AssetId,
        asset_b: AssetId,
        liquidity: Amount,
        min_a: Amount = 0,
        min_b: Amount = 0,
        recipient: Address,
        deadline: int,
    ) -> PoolResult:
        """Burn liquidity units; the result value is a `WithdrawResult`."""
        def run() -> Tuple[Any, PoolEvent]:
            guards.check_deadline(deadline, self._clock())
            guards.check_pair(self.config, asset_a, asset_b)
            guards.check_recipient(recipient, self.address)
            res = withdraw_liquidity(
                self.config,
                self.ledger,
                self._tokens,
                caller=caller,
                liquidity=liquidity,
                min_a=min_a,
                min_b=min_b,
                recipient=recipient,
            )
            ev = LiquidityWithdrawn(
                sender=caller,
                recipient=recipient,
                amount_a=res.amount_a,
                amount_b=res.amount_b,
                liquidity=res.liquidity,
            )
            return res, ev

        return self._execute("withdraw", run)

    def swap_exact_in(
        self,
        *,
        caller: Address,
        amount_in: Amount,
        min_out: Amount,
        path: Sequence[AssetId],
        recipient: Address,
        deadline: int,
    ) -> PoolResult:
        """Sell exactly `amount_in` of `path[0]`; the result value is a `SwapResult`."""
        def run() -> Tuple[Any, PoolEvent]:
            guards.check_deadline(deadline, self._clock())
            asset_in, asset_out = guards.check_path(self.config, path)
            guards.check_recipient(recipient, self.address)
            res = swap.swap_exact_in(
                self.config,
                self.ledger,
                self._tokens,
                pool_address=self.address,
                caller=caller,
                asset_in=asset_in,
                asset_out=asset_out,
                amount_in=amount_in,
                min_out=min_out,
                recipient=recipient,
            )
            ev = Swapped(
                sender=caller,
                recipient=recipient,
                asset_in=res.asset_in,
                asset_out=res.asset_out,
                amount_in=res.amount_in,
                amount_out=res.amount_out,
            )
            return res, ev

        return self._execute("swap", run)

    # -- read-only -------------------------------------------------------------

    def quote(self, amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
        """Pure exact-in quote using this pool's fee; reads no state."""
        return swap.quote_for(self.config, amount_in, reserve_in, reserve_out)

    def get_amount_out(self, amount_in: Amount, asset_in: AssetId) -> Amount:
        """Exact-in quote against the current reserves."""
        reserve_in, reserve_out = swap.reserves_for(self.config, self.ledger, asset_in)
        return self.quote(amount_in, reserve_in, reserve_out)

    def spot_price(self) -> int:
        return pricing.spot_price(self.ledger, self.config.price_scale)

    def reserves(self) -> Tuple[Amount, Amount]:
        return pricing.reserves(self.ledger)

    def total_liquidity(self) -> Amount:
        return self.ledger.total_liquidity

    def liquidity_of(self, provider: Address) -> Amount:
        return self.ledger.balance_of(provider)

    def pool_info(self) -> Dict[str, Any]:
        reserve_a, reserve_b = self.reserves()
        return {
            "pool_id": self.pool_id,
            "address": self.address,
            "asset_a": self.config.asset_a,
            "asset_b": self.config.asset_b,
            "reserve_a": reserve_a,
            "reserve_b": reserve_b,
            "total_liquidity": self.ledger.total_liquidity,
            "fee_numerator": self.config.fee_numerator,
            "fee_denominator": self.config.fee_denominator,
            "track_providers": self.config.track_providers,
        }

    def state_root(self) -> str:
        """Canonical hash of the pool identity and ledger state."""
        return hash_canonical("PoolState", {"pool_id": self.pool_id, "ledger": self.ledger.to_dict()})

    # -- verifier --------------------------------------------------------------

    def forward_verification(
        self,
        pool_id: str,
        asset_a: AssetId,
        asset_b: AssetId,
        amount_a: Amount,
        amount_b: Amount,
        amount_in: Amount,
        label: str,
    ) -> Any:
        """Pass the arguments verbatim to the verifier and return its answer unchecked."""
        if self._verifier is None:
            raise RuntimeError("no verifier configured for this pool")
        self.log.debug("forwarding verification", label=label)
        return self._verifier.verify(pool_id, asset_a, asset_b, amount_a, amount_b, amount_in, label)

    # -- internals -------------------------------------------------------------

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        with self._lock:
            if self._entered:
                raise PoolError(PoolErrorKind.LOCKED, f"{name} called while another operation is in flight")
            self._entered = True
            snapshot = self.ledger.snapshot()
            try:
                with (self._host.atomic() if self._host is not None else nullcontext()):
                    yield
            except BaseException:
                self.ledger.restore(snapshot)
                self.log.debug("rolled back", op=name)
                raise
            finally:
                self._entered = False

    def _execute(self, name: str, run: Callable[[], Tuple[Any, PoolEvent]]) -> PoolResult:
        try:
            with self._operation(name):
                value, ev = run()
        except PoolError as exc:
            self.log.warning("operation rejected", op=name, error=exc.kind.value, detail=exc.detail)
            return PoolResult.failure(exc)

        reserve_a, reserve_b = self.reserves()
        self.log.info(name, reserve_a=reserve_a, reserve_b=reserve_b,
                      total_liquidity=self.ledger.total_liquidity, **_event_fields(ev))
        self._emit(ev)
        return PoolResult.success(value)

    def _emit(self, ev: PoolEvent) -> None:
        self.events.append(ev)
        for listener in list(self._listeners):
            try:
                listener(ev)
            except Exception:
                # The operation is already committed; a listener cannot undo it.
                self.log.error("listener failed", notification=ev.event.value, exc_info=True)


def _event_fields(ev: PoolEvent) -> Dict[str, Any]:
    return asdict(ev)
