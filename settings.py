from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


_STRATEGY_ENV = "LOADAVG_STRATEGY"
_FALLBACK_ENV = "LOADAVG_FALLBACK"
_PLACEHOLDER_ENV = "LOADAVG_PLACEHOLDER"
_LOG_LEVEL_ENV = "LOG_LEVEL"

STRATEGY_PLACEHOLDER = "placeholder"
STRATEGY_SYSTEM = "system"
_STRATEGIES = {STRATEGY_PLACEHOLDER, STRATEGY_SYSTEM}

DEFAULT_PLACEHOLDER_VALUES: Tuple[float, float, float] = (0.9, 1.5, 1.8)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    strategy: str
    fallback_to_placeholder: bool
    placeholder_values: Tuple[float, float, float]
    log_level: str


def _read_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def _read_strategy(default: str) -> str:
    candidate = _read_env(_STRATEGY_ENV)
    if candidate is None:
        return default
    candidate = candidate.lower()
    return candidate if candidate in _STRATEGIES else default


def _read_bool(name: str, default: bool) -> bool:
    candidate = _read_env(name)
    if candidate is None:
        return default
    candidate = candidate.lower()
    if candidate in _TRUTHY:
        return True
    if candidate in _FALSY:
        return False
    return default


def _read_placeholder_values(
    default: Tuple[float, float, float],
) -> Tuple[float, float, float]:
    candidate = _read_env(_PLACEHOLDER_ENV)
    if candidate is None:
        return default
    parts = [part.strip() for part in candidate.split(",")]
    if len(parts) != 3:
        return default
    try:
        values = tuple(float(part) for part in parts)
    except ValueError:
        return default
    if any(not math.isfinite(value) or value < 0 for value in values):
        return default
    return values  # type: ignore[return-value]


def _read_log_level(default: str) -> str:
    candidate = _read_env(_LOG_LEVEL_ENV)
    if candidate is None:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        strategy=_read_strategy(STRATEGY_SYSTEM),
        fallback_to_placeholder=_read_bool(_FALLBACK_ENV, True),
        placeholder_values=_read_placeholder_values(DEFAULT_PLACEHOLDER_VALUES),
        log_level=_read_log_level("INFO"),
    )
