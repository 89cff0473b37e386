"""
Waypoint configuration (YAML defaults + environment overrides).

Configuration sources (highest to lowest priority):
1. Environment variables: WAYPOINT_<section>__<key>
2. Explicit overrides passed to ``load_config``
3. Bundled defaults: waypoint.data/config/defaults.yaml
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from functools import cached_property
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from waypoint.core.exceptions import ConfigError
from waypoint.data import read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "WAYPOINT_"


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Lists and scalars in ``override`` replace the base value entirely.
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if isinstance(result.get(key), dict) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _as_bool(v: str) -> Optional[bool]:
    low = v.strip().lower()
    if low in {"true", "false"}:
        return low == "true"
    return None


def _as_int(v: str) -> Optional[int]:
    if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
        return int(v)
    return None


def _as_float(v: str) -> Optional[float]:
    s = v.strip()
    if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
        return float(s)
    return None


def _as_json(v: str) -> Optional[Any]:
    s = v.strip()
    if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
        try:
            return json.loads(s)
        except json.JSONDecodeError:
            return None
    return None


def coerce_type(value: str) -> Any:
    """Convert an environment string to bool, int, float, JSON, or stripped str."""
    for caster in (_as_bool, _as_int, _as_float, _as_json):
        result = caster(value)
        if result is not None:
            return result
    return value.strip()


def _parse_env_key(raw: str) -> List[str]:
    segs = raw.split("__") if "__" in raw else raw.split("_")
    if any(seg == "" for seg in segs):
        raise ConfigError(
            f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
            context={"key": f"{ENV_PREFIX}{raw}"},
        )
    return [seg.lower() for seg in segs]


def iter_env_overrides(environ: Optional[Mapping[str, str]] = None) -> Iterator[Tuple[List[str], Any]]:
    env = os.environ if environ is None else environ
    for key in sorted(env.keys()):
        if not key.startswith(ENV_PREFIX):
            continue
        raw = key[len(ENV_PREFIX):]
        if not raw:
            raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
        yield _parse_env_key(raw), coerce_type(env[key])


def _set_nested(root: Dict[str, Any], path: List[str], value: Any) -> None:
    cur = root
    for part in path[:-1]:
        nxt = cur.setdefault(part, {})
        if not isinstance(nxt, dict):
            raise ConfigError(
                f"Config path '{'.'.join(path)}' traverses a non-mapping value",
                context={"path": path},
            )
        cur = nxt
    cur[path[-1]] = value


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Return bundled defaults merged with ``overrides`` and environment overrides."""
    defaults = copy.deepcopy(read_yaml("config", "defaults.yaml") or {})
    cfg = deep_merge(defaults, copy.deepcopy(dict(overrides or {})))
    for path, value in iter_env_overrides(environ):
        logger.debug("Applying env override %s", ".".join(path))
        _set_nested(cfg, path, value)
    return cfg


class LoaderConfig:
    """Typed accessor over the loaded configuration."""

    def __init__(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._config = load_config(overrides, environ=environ)

    @property
    def raw(self) -> Dict[str, Any]:
        return self._config

    @cached_property
    def pattern_prefixes(self) -> Tuple[str, ...]:
        """Name prefixes that mark a state as a pattern."""
        states = self._config.get("states") or {}
        if not isinstance(states, Mapping):
            raise ConfigError(
                "states must be a mapping",
                context={"value": states},
            )
        prefixes = states.get("pattern_prefixes", [])
        if isinstance(prefixes, str):
            prefixes = [prefixes]
        if not isinstance(prefixes, list) or not all(isinstance(p, str) and p for p in prefixes):
            raise ConfigError(
                "states.pattern_prefixes must be a list of non-empty strings",
                context={"value": prefixes},
            )
        return tuple(prefixes)


__all__ = [
    "ENV_PREFIX",
    "LoaderConfig",
    "coerce_type",
    "deep_merge",
    "iter_env_overrides",
    "load_config",
]
