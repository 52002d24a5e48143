from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _flag(name: str, default: str = "false") -> bool:
    return (_env(name, default) or "").strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    db_host: str
    db_port: int
    db_name: str
    db_user: str
    db_password: str
    db_ssl: bool
    db_pool_size: int
    db_connect_max_retries: int
    db_connect_retry_delay_seconds: float
    host: str
    port: int
    log_level: str


def get_settings() -> Settings:
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        db_host=_env("DB_HOST", "localhost"),
        db_port=int(_env("DB_PORT", "5432")),
        db_name=_env("DB_NAME", "bot_activity"),
        db_user=_env("DB_USER", ""),
        db_password=_env("DB_PASSWORD", ""),
        db_ssl=_flag("DB_SSL"),
        db_pool_size=int(_env("DB_POOL_SIZE", "1")),
        db_connect_max_retries=int(_env("DB_CONNECT_MAX_RETRIES", "5")),
        db_connect_retry_delay_seconds=float(_env("DB_CONNECT_RETRY_DELAY_SECONDS", "5")),
        host=_env("HOST", "0.0.0.0"),
        port=int(_env("PORT", "8080")),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
