from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from arbbot_analytics.api.errors import register_exception_handlers
from arbbot_analytics.api.routers.liquidity import router as liquidity_router
from arbbot_analytics.api.routers.service import ENDPOINTS, SERVICE_NAME, SERVICE_VERSION
from arbbot_analytics.api.routers.service import router as service_router
from arbbot_analytics.api.routers.snapshots import router as snapshots_router
from arbbot_analytics.domain.exceptions import StartupFailureError
from arbbot_analytics.infrastructure.db.engine import connect_with_retry, create_db_engine
from arbbot_analytics.shared.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    engine = create_db_engine(settings)
    try:
        await run_in_threadpool(
            connect_with_retry,
            engine,
            max_retries=settings.db_connect_max_retries,
            delay_seconds=settings.db_connect_retry_delay_seconds,
        )
    except StartupFailureError:
        logger.error("app: startup_failed reason=database_unreachable")
        engine.dispose()
        raise

    app.state.engine = engine
    logger.info("app: started name=%s port=%s", SERVICE_NAME, settings.port)
    for path in ENDPOINTS.model_dump().values():
        logger.info("app: endpoint GET %s", path)
    try:
        yield
    finally:
        logger.info("app: shutting_down")
        app.state.engine = None
        engine.dispose()


app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(service_router)
app.include_router(snapshots_router)
app.include_router(liquidity_router)


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
