import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from todoapi.database import utcnow
from todoapi.errors import InternalError, NotFoundError, ValidationError
from todoapi.models.todo import Todo
from todoapi.repositories.todo_repo import TodoRepository
from todoapi.repositories.user_repo import UserRepository
from todoapi.schemas.todo import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

class TodoService:
    def __init__(self):
        self.repo = TodoRepository()
        self.users = UserRepository()

    async def list_todos(
        self,
        db: AsyncSession,
        user_id: Optional[int] = None,
        completed: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0,
    ):
        return await self.repo.list_newest(db, user_id=user_id, completed=completed, limit=limit, offset=offset)

    async def list_user_todos(self, db: AsyncSession, user_id: int, completed: Optional[bool] = None):
        # unknown users simply have no todos; existence is only checked on create
        return await self.repo.list_for_user(db, user_id, completed=completed)

    async def get_todo(self, db: AsyncSession, todo_id: int) -> Todo:
        todo = await self.repo.get(db, todo_id)
        if todo is None:
            raise NotFoundError("Todo not found")
        return todo

    async def create_todo(self, db: AsyncSession, todo_in: TodoCreate) -> Todo:
        if not await self.users.exists(db, id=todo_in.user_id):
            logger.warning("Rejected todo create: user %s does not exist", todo_in.user_id)
            raise ValidationError("User not found")

        now = utcnow()
        todo = Todo(**todo_in.model_dump(), completed=False, created_at=now, updated_at=now)
        try:
            await self.repo.create(db, todo)
            await db.commit()
        except IntegrityError:
            # the user was deleted between the check and the insert
            await db.rollback()
            logger.warning("Rejected todo create: user %s vanished before insert", todo_in.user_id)
            raise ValidationError("User not found")

        created = await self.repo.get(db, todo.id, reload=True)
        if created is None:
            raise InternalError("Failed to create todo")
        logger.info("Created todo %s for user %s", created.id, created.user_id)
        return created

    async def update_todo(self, db: AsyncSession, todo_id: int, todo_in: TodoUpdate) -> Todo:
        todo = await self.get_todo(db, todo_id)
        changes = todo_in.changes()
        if not changes:
            return todo

        changes["updated_at"] = utcnow()
        await self.repo.update(db, todo_id, changes)
        await db.commit()

        updated = await self.repo.get(db, todo_id, reload=True)
        if updated is None:
            raise InternalError("Failed to update todo")
        logger.info("Updated todo %s", todo_id)
        return updated

    async def delete_todo(self, db: AsyncSession, todo_id: int) -> None:
        await self.get_todo(db, todo_id)
        await self.repo.delete(db, todo_id)
        await db.commit()
        logger.info("Deleted todo %s", todo_id)
