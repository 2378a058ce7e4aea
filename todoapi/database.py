from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()

# SQLite INTEGER is a signed 64-bit value
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    # foreign_keys is per connection; journal_mode=WAL persists in the file
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Storage handle: one async engine plus the session factory bound to it.

    An instance is created per application (see ``todoapi.main.create_app``)
    and reached from request handlers through ``get_db``, so tests can hand
    the app an isolated database.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine = create_async_engine(url, future=True, echo=echo, pool_pre_ping=True)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragmas)
        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        # register the tables on Base.metadata
        from todoapi.models import todo, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self):
        async with self.session_factory() as session:
            yield session


async def get_db(request: Request):
    async with request.app.state.db.session() as session:
        yield session
