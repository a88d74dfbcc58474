from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from signalist import __version__
from signalist.config import settings
from signalist.database import engine
from signalist.gateway.factory import close_gateway
from signalist.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting signalist %s", __version__)
    if not settings.finnhub_api_key:
        logger.warning("FINNHUB_API_KEY 미설정 — 시세 조회는 모두 N/A로 표시됩니다")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")

    yield

    # Shutdown
    await close_gateway()
    await engine.dispose()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Signalist",
        version=__version__,
        lifespan=lifespan,
    )

    from signalist.api.router import api_router
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
