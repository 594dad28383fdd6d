from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .approx import CubicApprox, ExternalQuadratic, Flatten, Linear, Midpoint

log = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "cubic_approx": {
        "strategy": "midpoint",
        "tolerance": 0.1,
    },
}

_STRATEGY_ALIASES = {
    "linear": "linear",
    "line": "linear",
    "flatten": "flatten",
    "midpoint": "midpoint",
    "external_quadratic": "external_quadratic",
    "cu2qu": "external_quadratic",
    "lyon": "external_quadratic",
}


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    loaded = yaml.safe_load(p.read_text(encoding="utf-8"))
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, Mapping):
        raise ValueError("Config root must be a mapping")
    return _deep_merge(DEFAULTS, loaded)


def strategy_from_config(cfg: Optional[Mapping[str, Any]] = None) -> CubicApprox:
    """Build the cubic approximation strategy described by ``cfg["cubic_approx"]``."""
    merged = _deep_merge(DEFAULTS, cfg or {})
    block = merged["cubic_approx"]
    if not isinstance(block, Mapping):
        raise ValueError("cubic_approx must be a mapping")

    raw_name = str(block.get("strategy", "midpoint")).strip().lower().replace("-", "_")
    name = _STRATEGY_ALIASES.get(raw_name)
    if name is None:
        raise ValueError(f"Unknown cubic_approx strategy: {raw_name!r}")

    strategy: CubicApprox
    if name == "linear":
        strategy = Linear()
    elif name == "midpoint":
        strategy = Midpoint()
    else:
        try:
            tolerance = float(block.get("tolerance"))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"cubic_approx.tolerance must be a number ({exc})") from exc
        strategy = Flatten(tolerance) if name == "flatten" else ExternalQuadratic(tolerance)

    log.debug("cubic approximation strategy: %s", strategy)
    return strategy


__all__ = ["DEFAULTS", "load_config", "strategy_from_config"]
