# [TESTER] v1

from __future__ import annotations

import pytest

from conftest import ASSET_A, ASSET_B, SUPPLY, PoolEnv

from pairswap.core import SwapResult, Swapped
from pairswap.errors import PoolErrorKind


@pytest.fixture
def seeded(env: PoolEnv) -> PoolEnv:
    env.provision("alice", 1000, 4000).unwrap()
    env.fund("bob", 1000, 1000)
    return env


def test_swap_a_for_b_with_fee(seeded: PoolEnv) -> None:
    res = seeded.swap("bob", 100)

    assert res.value == SwapResult(asset_in=ASSET_A, asset_out=ASSET_B, amount_in=100, amount_out=362)
    assert seeded.pool.reserves() == (1100, 3638)
    assert seeded.pool_holdings() == (1100, 3638)
    assert (seeded.token_a.balance_of("bob"), seeded.token_b.balance_of("bob")) == (900, 1362)
    assert seeded.pool.events[-1] == Swapped(
        sender="bob", recipient="bob", asset_in=ASSET_A, asset_out=ASSET_B, amount_in=100, amount_out=362
    )


def test_swap_b_for_a_uses_reverse_path(seeded: PoolEnv) -> None:
    res = seeded.swap("bob", 400, path=(ASSET_B, ASSET_A))

    assert res.value == SwapResult(asset_in=ASSET_B, asset_out=ASSET_A, amount_in=400, amount_out=90)
    assert seeded.pool.reserves() == (910, 4400)


def test_feeless_swap(feeless_env: PoolEnv) -> None:
    feeless_env.provision("alice", 1000, 4000).unwrap()
    res = feeless_env.swap("alice", 100)
    assert res.value.amount_out == 363
    assert feeless_env.pool.reserves() == (1100, 3637)


def test_swap_pays_recipient(seeded: PoolEnv) -> None:
    seeded.swap("bob", 100, recipient="carol").unwrap()
    assert seeded.token_b.balance_of("carol") == 362
    assert seeded.token_b.balance_of("bob") == 1000


def test_min_out_is_enforced(seeded: PoolEnv) -> None:
    res = seeded.swap("bob", 100, min_out=363)

    assert res.error is PoolErrorKind.INSUFFICIENT_OUTPUT
    assert seeded.pool.reserves() == (1000, 4000)
    assert seeded.token_a.balance_of("bob") == 1000


def test_min_out_equal_to_quote_succeeds(seeded: PoolEnv) -> None:
    assert seeded.pool.get_amount_out(100, ASSET_A) == 362
    assert seeded.swap("bob", 100, min_out=362).ok


def test_zero_input_is_rejected(seeded: PoolEnv) -> None:
    assert seeded.swap("bob", 0).error is PoolErrorKind.INSUFFICIENT_INPUT


def test_output_rounding_to_zero_is_rejected(feeless_env: PoolEnv) -> None:
    feeless_env.provision("alice", 4000, 1000).unwrap()
    res = feeless_env.swap("alice", 1)
    assert res.error is PoolErrorKind.INSUFFICIENT_OUTPUT
    assert feeless_env.pool.reserves() == (4000, 1000)


def test_swap_against_empty_pool(env: PoolEnv) -> None:
    res = env.swap("alice", 100)
    assert res.error is PoolErrorKind.INSUFFICIENT_LIQUIDITY
    assert env.token_a.balance_of("alice") == SUPPLY


@pytest.mark.parametrize(
    "path",
    [
        (ASSET_A,),
        (ASSET_A, ASSET_A),
        (ASSET_A, "TKC"),
        ("TKC", ASSET_B),
        (ASSET_A, ASSET_B, ASSET_A),
    ],
)
def test_invalid_paths(seeded: PoolEnv, path: tuple) -> None:
    assert seeded.swap("bob", 100, path=path).error is PoolErrorKind.INVALID_TOKENS


def test_swap_without_input_balance_fails(seeded: PoolEnv) -> None:
    seeded.approve("zoe")
    res = seeded.swap("zoe", 100)
    assert res.error is PoolErrorKind.TRANSFER_FAILED
    assert seeded.pool.reserves() == (1000, 4000)


def test_swaps_grow_constant_product(seeded: PoolEnv) -> None:
    k = seeded.pool.ledger.constant_product()
    for amount, path in [(100, (ASSET_A, ASSET_B)), (250, (ASSET_B, ASSET_A)), (7, (ASSET_A, ASSET_B))]:
        seeded.swap("bob", amount, path=path).unwrap()
        k_next = seeded.pool.ledger.constant_product()
        assert k_next > k
        k = k_next


def test_pure_quote_ignores_pool_state(env: PoolEnv) -> None:
    assert env.pool.quote(100, 1000, 4000) == 362
    assert env.pool.reserves() == (0, 0)


def test_feeless_swap_never_shrinks_constant_product(feeless_env: PoolEnv) -> None:
    feeless_env.provision("alice", 1000, 4000).unwrap()
    k = feeless_env.pool.ledger.constant_product()
    feeless_env.swap("alice", 100).unwrap()
    assert feeless_env.pool.ledger.constant_product() >= k


def test_path_with_unhashable_asset_is_rejected(seeded: PoolEnv) -> None:
    res = seeded.swap("bob", 100, path=([ASSET_A], ASSET_B))
    assert res.error is PoolErrorKind.INVALID_TOKENS
    assert seeded.pool.reserves() == (1000, 4000)
