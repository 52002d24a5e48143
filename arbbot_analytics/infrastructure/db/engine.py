from __future__ import annotations

import logging
import time
from collections.abc import Callable

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from arbbot_analytics.domain.exceptions import StartupFailureError
from arbbot_analytics.shared.config import Settings


logger = logging.getLogger(__name__)


def build_database_url(settings: Settings) -> str | URL:
    if settings.postgres_dsn:
        return settings.postgres_dsn
    return URL.create(
        "postgresql+psycopg2",
        username=settings.db_user or None,
        password=settings.db_password or None,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


def build_connect_args(settings: Settings) -> dict[str, object]:
    # encrypted transport without certificate verification
    if settings.db_ssl:
        return {"sslmode": "require"}
    return {}


def create_db_engine(settings: Settings) -> Engine:
    return create_engine(
        build_database_url(settings),
        future=True,
        pool_pre_ping=True,
        pool_size=max(settings.db_pool_size, 1),
        max_overflow=0,
        connect_args=build_connect_args(settings),
    )


def connect_with_retry(
    engine: Engine,
    *,
    max_retries: int,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    attempts = max(max_retries, 1)
    for attempt in range(1, attempts + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error(
                "db_engine: connect_failed attempt=%s max_retries=%s error=%s",
                attempt,
                attempts,
                exc,
            )
            if attempt == attempts:
                raise StartupFailureError(
                    f"Failed to connect to database after {attempts} attempts."
                ) from exc
            logger.info("db_engine: retrying delay_seconds=%s", delay_seconds)
            sleep(delay_seconds)
        else:
            logger.info("db_engine: connected attempt=%s", attempt)
            return
