# [TESTER] v1

from __future__ import annotations

from structlog.testing import capture_logs

from conftest import ASSET_A, ASSET_B, NOW, PoolEnv, build_env

from pairswap.core import Event, LiquidityProvisioned, Swapped
from pairswap.core.events import event_to_dict


def test_listeners_receive_one_event_per_success(env: PoolEnv) -> None:
    seen: list = []
    env.pool.subscribe(seen.append)

    env.provision("alice", 1000, 4000).unwrap()
    env.swap("alice", 100, min_out=10**9)
    env.swap("alice", 100).unwrap()

    assert [type(ev) for ev in seen] == [LiquidityProvisioned, Swapped]
    assert seen == list(env.pool.events)


def test_event_to_dict_carries_event_name() -> None:
    ev = Swapped(sender="a", recipient="b", asset_in=ASSET_A, asset_out=ASSET_B, amount_in=1, amount_out=2)
    assert ev.event is Event.SWAPPED
    assert event_to_dict(ev) == {
        "event": "Swapped",
        "sender": "a",
        "recipient": "b",
        "asset_in": ASSET_A,
        "asset_out": ASSET_B,
        "amount_in": 1,
        "amount_out": 2,
    }


def test_successful_operation_is_logged_with_reserves() -> None:
    with capture_logs() as logs:
        env = build_env()
        env.provision("alice", 1000, 4000).unwrap()

    entry = next(e for e in logs if e["event"] == "provision")
    assert entry["log_level"] == "info"
    assert (entry["reserve_a"], entry["reserve_b"], entry["total_liquidity"]) == (1000, 4000, 2000)
    assert entry["liquidity"] == 2000
    assert entry["pair"] == f"{ASSET_A}/{ASSET_B}"


def test_rejected_operation_is_logged_as_warning() -> None:
    with capture_logs() as logs:
        env = build_env()
        env.swap("alice", 100, deadline=NOW - 1)

    entry = next(e for e in logs if e["event"] == "operation rejected")
    assert entry["log_level"] == "warning"
    assert entry["op"] == "swap"
    assert entry["error"] == "Expired"


def test_failing_listener_does_not_break_the_result() -> None:
    seen: list = []

    def broken(ev: object) -> None:
        raise RuntimeError("listener exploded")

    with capture_logs() as logs:
        env = build_env()
        env.pool.subscribe(broken)
        env.pool.subscribe(seen.append)
        env.provision("alice", 1000, 4000).unwrap()
        res = env.swap("alice", 100)

    assert res.ok
    assert res.value.amount_out == 362
    assert [type(ev) for ev in seen] == [LiquidityProvisioned, Swapped]
    assert env.pool.reserves() == (1100, 3638)
    failures = [e for e in logs if e["event"] == "listener failed"]
    assert [e["notification"] for e in failures] == ["LiquidityProvisioned", "Swapped"]
    assert all(e["log_level"] == "error" for e in failures)


def test_event_history_keeps_only_the_latest() -> None:
    env = build_env(event_history=2)
    seen: list = []
    env.pool.subscribe(seen.append)

    env.provision("alice", 1000, 4000).unwrap()
    env.swap("alice", 100).unwrap()
    env.swap("alice", 50).unwrap()

    assert len(seen) == 3
    assert list(env.pool.events) == seen[1:]
