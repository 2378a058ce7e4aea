import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./database.sqlite"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings read from the environment (and a local .env file).

    Env vars:
    - DATABASE_URL: SQLAlchemy async URL, default a SQLite file in the cwd
    - SQL_ECHO: 'true' to log every SQL statement
    - LOG_LEVEL: root log level name, default INFO
    - APP_TITLE: title shown in the OpenAPI document
    """

    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    log_level: str = "INFO"
    app_title: str = "Users & Todos API"


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        sql_echo=_parse_bool(os.getenv("SQL_ECHO", "false")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        app_title=os.getenv("APP_TITLE") or Settings.app_title,
    )
