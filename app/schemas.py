"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from pydantic import BaseModel, Field

from models.records import LoadSample


class LoadAverageResponse(BaseModel):
    """Wire representation of a single load average sample."""

    last: float = Field(..., ge=0, allow_inf_nan=False, description="Load average over the last minute.")
    last5: float = Field(..., ge=0, allow_inf_nan=False, description="Load average over the last 5 minutes.")
    last15: float = Field(..., ge=0, allow_inf_nan=False, description="Load average over the last 15 minutes.")


def to_response(sample: LoadSample) -> LoadAverageResponse:
    return LoadAverageResponse(
        last=sample.last,
        last5=sample.last5,
        last15=sample.last15,
    )
