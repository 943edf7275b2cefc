"""Load average sampling strategies."""

from __future__ import annotations

import logging
import math
import os
from functools import lru_cache
from typing import Callable, Optional, Sequence, Tuple

from models.records import LoadSample
from settings import STRATEGY_PLACEHOLDER, get_settings

logger = logging.getLogger(__name__)

LoadAverageReader = Callable[[], Sequence[float]]


class PlatformUnsupported(RuntimeError):
    """Raised when the host does not expose a usable load average."""


def _default_reader() -> Optional[LoadAverageReader]:
    return getattr(os, "getloadavg", None)


class PlaceholderSampler:
    """Returns the same configured values on every call."""

    strategy = "placeholder"

    def __init__(self, values: Tuple[float, float, float]) -> None:
        last, last5, last15 = values
        self.values = (float(last), float(last5), float(last15))

    def sample(self) -> LoadSample:
        return LoadSample(*self.values)


class SystemSampler:
    """Queries the host operating system for its load averages.

    All three values come from a single call so they describe the same
    moment. Anything short of three finite, non-negative numbers is treated
    as the platform not supporting the query.
    """

    strategy = "system"

    def __init__(self, reader: Optional[LoadAverageReader] = None) -> None:
        self._reader = reader if reader is not None else _default_reader()

    def sample(self) -> LoadSample:
        if self._reader is None:
            raise PlatformUnsupported("Load averages are not available on this platform.")

        try:
            raw = tuple(self._reader())
        except OSError as exc:
            raise PlatformUnsupported(f"Load averages could not be read: {exc}") from exc

        if len(raw) < 3:
            raise PlatformUnsupported(
                f"Expected 3 load averages, the platform returned {len(raw)}."
            )

        last, last5, last15 = (float(value) for value in raw[:3])
        for value in (last, last5, last15):
            if not math.isfinite(value) or value < 0:
                raise PlatformUnsupported(f"Platform returned an invalid load average: {value!r}")

        sample = LoadSample(last=last, last5=last5, last15=last15)
        logger.debug(
            "Sampled system load",
            extra={"last": sample.last, "last5": sample.last5, "last15": sample.last15},
        )
        return sample


class FallbackSampler:
    """Uses ``primary`` and switches to ``fallback`` when the platform is unsupported."""

    def __init__(self, primary, fallback) -> None:
        self.primary = primary
        self.fallback = fallback

    @property
    def strategy(self) -> str:
        return f"{self.primary.strategy}+{self.fallback.strategy}"

    def sample(self) -> LoadSample:
        try:
            return self.primary.sample()
        except PlatformUnsupported as exc:
            logger.warning(
                "Primary load sampler unavailable, using fallback",
                extra={"strategy": self.fallback.strategy, "reason": str(exc)},
            )
            return self.fallback.sample()


@lru_cache
def build_default_sampler():
    """Factory that wires a sampler from the current settings."""
    settings = get_settings()
    placeholder = PlaceholderSampler(settings.placeholder_values)
    if settings.strategy == STRATEGY_PLACEHOLDER:
        return placeholder
    system = SystemSampler()
    if settings.fallback_to_placeholder:
        return FallbackSampler(primary=system, fallback=placeholder)
    return system
