# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.kernels.int_math import ceil_ratio, floor_ratio, isqrt, min_int, require_int


def test_require_int_rejects_bool() -> None:
    require_int("x", 0)
    with pytest.raises(TypeError):
        require_int("x", True)
    with pytest.raises(TypeError):
        require_int("x", 1.0)  # type: ignore[arg-type]


def test_floor_and_ceil_ratio() -> None:
    assert floor_ratio(7, 3, 2) == 10
    assert ceil_ratio(7, 3, 2) == 11
    assert floor_ratio(6, 3, 2) == ceil_ratio(6, 3, 2) == 9


def test_ratio_rejects_bad_operands() -> None:
    with pytest.raises(ValueError):
        floor_ratio(1, 1, 0)
    with pytest.raises(ValueError):
        ceil_ratio(-1, 1, 1)


def test_isqrt_is_exact() -> None:
    assert isqrt(0) == 0
    assert isqrt(4_000_000) == 2000
    assert isqrt(4_000_001) == 2000
    assert isqrt(10**40 - 1) == 10**20 - 1
    with pytest.raises(ValueError):
        isqrt(-1)


def test_min_int() -> None:
    assert min_int(3, 5) == 3
    assert min_int(5, 3) == 3
