from sqlalchemy.ext.asyncio import AsyncSession
from todoapi.models.user import User
from todoapi.repositories.base import BaseRepository

NEWEST_FIRST = (User.created_at.desc(), User.id.desc())

class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def list_newest(self, db: AsyncSession, *, limit: int = 100, offset: int = 0):
        return await self.list(db, order_by=NEWEST_FIRST, limit=limit, offset=offset)
