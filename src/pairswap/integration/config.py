"""
Pool configuration loading.

Sources, lowest precedence first:
1. `PoolConfig` defaults,
2. a YAML file (top-level mapping, or nested under a `pool:` key),
3. `PAIRSWAP_*` environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..state.pools import PoolConfig


ENV_PREFIX = "PAIRSWAP_"

_INT_KEYS = ("fee_numerator", "fee_denominator", "price_scale")
_STR_KEYS = ("asset_a", "asset_b")
_BOOL_KEYS = ("track_providers",)
_KNOWN_KEYS = frozenset(_INT_KEYS + _STR_KEYS + _BOOL_KEYS)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_str(env: Mapping[str, str], name: str) -> Optional[str]:
    raw = env.get(name)
    if raw is None:
        return None
    v = raw.strip()
    return v if v else None


def _env_bool(env: Mapping[str, str], name: str) -> Optional[bool]:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read pool settings from a YAML file."""
    with open(path, "r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    if "pool" in data:
        data = data["pool"]
        if not isinstance(data, dict):
            raise ValueError(f"{path}: `pool` must be a mapping")
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"{path}: unknown pool settings: {unknown}")
    return dict(data)


def read_env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in _INT_KEYS:
        v = _env_int(env, ENV_PREFIX + key.upper())
        if v is not None:
            out[key] = v
    for key in _STR_KEYS:
        s = _env_str(env, ENV_PREFIX + key.upper())
        if s is not None:
            out[key] = s
    for key in _BOOL_KEYS:
        b = _env_bool(env, ENV_PREFIX + key.upper())
        if b is not None:
            out[key] = b
    return out


def load_pool_config(
    path: Optional[Union[str, Path]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> PoolConfig:
    """
    Build a validated `PoolConfig`.

    Keyword `overrides` win over both the file and the environment.

    Raises:
        ValueError / TypeError: on unknown keys or invalid values.
    """
    settings: Dict[str, Any] = {}
    if path is not None:
        settings.update(read_config_file(path))
    settings.update(read_env_overrides(os.environ if env is None else env))
    unknown = sorted(set(overrides) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"unknown pool settings: {unknown}")
    settings.update(overrides)

    for key in _STR_KEYS:
        if key not in settings:
            raise ValueError(f"missing pool setting: {key}")
    return PoolConfig(**settings)
