from __future__ import annotations
from typing import Any, Generic, Sequence, TypeVar
from sqlalchemy import select, func, delete as sa_delete, update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect as sa_inspect

T = TypeVar("T")  # SQLAlchemy model class (Declarative)

class BaseRepository(Generic[T]):
    """
    Shared async repository for a single declarative model.
    - Accepts model instances only (no dicts / pydantic objects) for inserts.
    - Every value reaches the database as a bound parameter.
    - commit/rollback is left to the caller (the service layer).
    """

    def __init__(self, model: type[T]) -> None:
        self.model = model

    def _pk_column(self, operation: str):
        pk_cols = sa_inspect(self.model).primary_key
        if len(pk_cols) != 1:
            raise ValueError(f"{operation}(): composite primary key is not supported")
        return pk_cols[0]

    # ------------------------ Read ------------------------

    async def get(self, session: AsyncSession, pk: Any, *, reload: bool = False) -> T | None:
        """Fetch one row by primary key. ``reload`` forces a SELECT even if the
        instance is already in the identity map."""
        return await session.get(self.model, pk, populate_existing=reload)

    async def exists(self, session: AsyncSession, **filters: Any) -> bool:
        """Existence check (equality filters only)"""
        stmt = select(func.count()).select_from(self.model).filter_by(**filters)
        res = await session.execute(stmt)
        return int(res.scalar_one()) > 0

    async def list(
        self,
        session: AsyncSession,
        *,
        where: dict[str, Any] | None = None,
        order_by: Sequence[Any] | None = None,
        limit: int | None = 100,
        offset: int | None = 0,
    ) -> list[T]:
        stmt = select(self.model)
        if where:
            stmt = stmt.filter_by(**where)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    # ------------------------ Write ------------------------

    async def create(self, session: AsyncSession, obj: T) -> T:
        """
        Insert a new instance: add -> flush, so the generated primary key is
        populated. Raises if the instance is already tracked by a session.
        """
        state = sa_inspect(obj)
        if not state.transient:
            raise ValueError("create(): expected a transient (new) SQLAlchemy model instance")
        session.add(obj)
        await session.flush()
        return obj

    async def update(self, session: AsyncSession, pk: Any, values: dict[str, Any]) -> bool:
        """
        Partial update of one row: ``UPDATE ... SET <only the given columns>``.
        Returns False when no row matched.
        """
        if not values:
            raise ValueError("update(): 'values' must not be empty")
        pk_col = self._pk_column("update")
        stmt = sa_update(self.model).where(pk_col == pk).values(**values)
        res = await session.execute(stmt)
        return (res.rowcount or 0) > 0

    async def delete(self, session: AsyncSession, pk: Any) -> bool:
        """Delete by primary key (True when a row was removed)"""
        pk_col = self._pk_column("delete")
        stmt = sa_delete(self.model).where(pk_col == pk)
        res = await session.execute(stmt)
        return (res.rowcount or 0) > 0
