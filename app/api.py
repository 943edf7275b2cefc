"""HTTP route definitions for the service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import LoadAverageResponse, to_response
from services.sampler import PlatformUnsupported, build_default_sampler

logger = logging.getLogger(__name__)

router = APIRouter()


def get_sampler():
    return build_default_sampler()


async def get_load_average(sampler=Depends(get_sampler)) -> LoadAverageResponse:
    try:
        sample = sampler.sample()
    except PlatformUnsupported as exc:
        logger.error(
            "Load average unavailable",
            extra={"reason": str(exc), "status": status.HTTP_500_INTERNAL_SERVER_ERROR},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return to_response(sample)


router.add_api_route(
    "/loadavg",
    get_load_average,
    methods=["GET"],
    response_model=LoadAverageResponse,
    status_code=status.HTTP_200_OK,
    summary="Current 1, 5 and 15 minute system load averages.",
)
