from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.sampler import build_default_sampler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    sampler = build_default_sampler()
    logger.info("Load average service started", extra={"strategy": sampler.strategy})
    try:
        yield
    finally:
        build_default_sampler.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Load Average Service",
        description="Reports the host's 1, 5 and 15 minute load averages as JSON.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
