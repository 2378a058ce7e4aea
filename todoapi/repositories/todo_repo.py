from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from todoapi.models.todo import Todo
from todoapi.repositories.base import BaseRepository

NEWEST_FIRST = (Todo.created_at.desc(), Todo.id.desc())

class TodoRepository(BaseRepository[Todo]):
    def __init__(self):
        super().__init__(Todo)

    async def list_newest(
        self,
        db: AsyncSession,
        *,
        user_id: Optional[int] = None,
        completed: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0,
    ):
        # an absent filter matches every row
        where = {}
        if user_id is not None:
            where["user_id"] = user_id
        if completed is not None:
            where["completed"] = completed
        return await self.list(db, where=where, order_by=NEWEST_FIRST, limit=limit, offset=offset)

    async def list_for_user(self, db: AsyncSession, user_id: int, *, completed: Optional[bool] = None):
        where = {"user_id": user_id}
        if completed is not None:
            where["completed"] = completed
        return await self.list(db, where=where, order_by=NEWEST_FIRST, limit=None)
