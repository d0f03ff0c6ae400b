from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import pytest

from pairswap.core.pool import DEFAULT_EVENT_HISTORY, Pool
from pairswap.errors import PoolResult
from pairswap.integration.memory import InMemoryHost, InMemoryToken
from pairswap.state.pools import PoolConfig

ASSET_A = "TKA"
ASSET_B = "TKB"
POOL = "pool-0"
NOW = 1_000
DEADLINE = 2_000
SUPPLY = 10**15


@dataclass
class PoolEnv:
    host: InMemoryHost
    pool: Pool
    token_a: InMemoryToken
    token_b: InMemoryToken

    def fund(self, holder: str, amount_a: int, amount_b: int) -> None:
        assert self.token_a.transfer("alice", holder, amount_a)
        assert self.token_b.transfer("alice", holder, amount_b)
        self.approve(holder)

    def approve(self, holder: str) -> None:
        self.token_a.approve(holder, POOL, SUPPLY)
        self.token_b.approve(holder, POOL, SUPPLY)

    def provision(self, caller: str, desired_a: int, desired_b: int, **kwargs: Any) -> PoolResult:
        kwargs.setdefault("recipient", caller)
        kwargs.setdefault("deadline", DEADLINE)
        return self.pool.provision(
            caller=caller,
            asset_a=kwargs.pop("asset_a", ASSET_A),
            asset_b=kwargs.pop("asset_b", ASSET_B),
            desired_a=desired_a,
            desired_b=desired_b,
            **kwargs,
        )

    def withdraw(self, caller: str, liquidity: int, **kwargs: Any) -> PoolResult:
        kwargs.setdefault("recipient", caller)
        kwargs.setdefault("deadline", DEADLINE)
        return self.pool.withdraw(
            caller=caller,
            asset_a=kwargs.pop("asset_a", ASSET_A),
            asset_b=kwargs.pop("asset_b", ASSET_B),
            liquidity=liquidity,
            **kwargs,
        )

    def swap(self, caller: str, amount_in: int, path: Sequence[str] = (ASSET_A, ASSET_B), **kwargs: Any) -> PoolResult:
        kwargs.setdefault("recipient", caller)
        kwargs.setdefault("deadline", DEADLINE)
        kwargs.setdefault("min_out", 0)
        return self.pool.swap_exact_in(caller=caller, amount_in=amount_in, path=path, **kwargs)

    def pool_holdings(self) -> tuple[int, int]:
        return self.token_a.balance_of(POOL), self.token_b.balance_of(POOL)


def build_env(
    *,
    fee_numerator: int = 30,
    fee_denominator: int = 10_000,
    track_providers: bool = True,
    wrap_tokens: Optional[Callable[[dict], dict]] = None,
    use_host: bool = True,
    event_history: int = DEFAULT_EVENT_HISTORY,
) -> PoolEnv:
    host = InMemoryHost(now=NOW)
    token_a = host.create_token(ASSET_A, owner="alice", initial_supply=SUPPLY)
    token_b = host.create_token(ASSET_B, owner="alice", initial_supply=SUPPLY)
    ports = host.ports_for(POOL)
    if wrap_tokens is not None:
        ports = wrap_tokens(ports)
    config = PoolConfig(
        asset_a=ASSET_A,
        asset_b=ASSET_B,
        fee_numerator=fee_numerator,
        fee_denominator=fee_denominator,
        track_providers=track_providers,
    )
    pool = Pool(
        config,
        address=POOL,
        tokens=ports,
        host=host if use_host else None,
        clock=host.clock,
        event_history=event_history,
    )
    env = PoolEnv(host=host, pool=pool, token_a=token_a, token_b=token_b)
    env.approve("alice")
    return env


@pytest.fixture
def env() -> PoolEnv:
    return build_env()


@pytest.fixture
def feeless_env() -> PoolEnv:
    return build_env(fee_numerator=0)
