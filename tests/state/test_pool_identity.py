# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.state.canonical import encode, hash_canonical
from pairswap.state.pools import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR, PoolConfig, compute_pool_id


def test_encoding_is_key_order_independent() -> None:
    assert encode({"b": 1, "a": [2, 3]}) == encode({"a": [2, 3], "b": 1})
    assert encode({"a": 1}) == b'{"a":1}'


def test_hash_labels_separate_domains() -> None:
    assert hash_canonical("Pool", [1]) != hash_canonical("PoolState", [1])
    with pytest.raises(ValueError):
        hash_canonical("Po\x00ol", [1])


def test_pool_id_is_deterministic_and_order_sensitive() -> None:
    pid = compute_pool_id("TKA", "TKB", 30, 10_000)
    assert pid.startswith("0x") and len(pid) == 66
    assert pid == compute_pool_id("TKA", "TKB", 30, 10_000)
    assert pid != compute_pool_id("TKB", "TKA", 30, 10_000)
    assert pid != compute_pool_id("TKA", "TKB", 0, 10_000)


def test_pool_config_defaults() -> None:
    config = PoolConfig(asset_a="TKA", asset_b="TKB")
    assert (config.fee_numerator, config.fee_denominator) == (DEFAULT_FEE_NUMERATOR, DEFAULT_FEE_DENOMINATOR)
    assert config.pair == ("TKA", "TKB")
    assert config.track_providers is True
    assert config.pool_id == compute_pool_id("TKA", "TKB", 30, 10_000)
    assert config.other("TKA") == "TKB"
    with pytest.raises(ValueError):
        config.other("TKC")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"asset_a": "TKA", "asset_b": "TKA"},
        {"asset_a": "", "asset_b": "TKB"},
        {"asset_a": "TKA", "asset_b": "TKB", "fee_numerator": 10_000},
        {"asset_a": "TKA", "asset_b": "TKB", "fee_denominator": 0},
        {"asset_a": "TKA", "asset_b": "TKB", "price_scale": 0},
    ],
)
def test_pool_config_rejects_invalid_parameters(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        PoolConfig(**kwargs)


def test_pool_config_rejects_non_bool_tracking_flag() -> None:
    with pytest.raises(TypeError):
        PoolConfig(asset_a="TKA", asset_b="TKB", track_providers=1)  # type: ignore[arg-type]
