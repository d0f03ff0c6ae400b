"""Notifications emitted after a successful pool mutation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, unique
from typing import Any, Callable, Dict, Union

from ..state.ledger import Address, Amount, AssetId


@unique
class Event(Enum):
    LIQUIDITY_PROVISIONED = "LiquidityProvisioned"
    LIQUIDITY_WITHDRAWN = "LiquidityWithdrawn"
    SWAPPED = "Swapped"


@dataclass(frozen=True)
class LiquidityProvisioned:
    sender: Address
    recipient: Address
    amount_a: Amount
    amount_b: Amount
    liquidity: Amount

    event = Event.LIQUIDITY_PROVISIONED


@dataclass(frozen=True)
class LiquidityWithdrawn:
    sender: Address
    recipient: Address
    amount_a: Amount
    amount_b: Amount
    liquidity: Amount

    event = Event.LIQUIDITY_WITHDRAWN


@dataclass(frozen=True)
class Swapped:
    sender: Address
    recipient: Address
    asset_in: AssetId
    asset_out: AssetId
    amount_in: Amount
    amount_out: Amount

    event = Event.SWAPPED


PoolEvent = Union[LiquidityProvisioned, LiquidityWithdrawn, Swapped]
EventListener = Callable[[PoolEvent], None]


def event_to_dict(ev: PoolEvent) -> Dict[str, Any]:
    d: Dict[str, Any] = {"event": ev.event.value}
    d.update(asdict(ev))
    return d
