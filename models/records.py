"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoadSample:
    """System load averages over the trailing 1, 5 and 15 minutes."""

    last: float
    last5: float
    last15: float
