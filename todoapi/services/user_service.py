import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from todoapi.errors import ConflictError, InternalError, NotFoundError
from todoapi.models.user import User
from todoapi.repositories.user_repo import UserRepository
from todoapi.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email already exists"

class UserService:
    def __init__(self):
        self.repo = UserRepository()

    async def list_users(self, db: AsyncSession, limit: int = 100, offset: int = 0):
        return await self.repo.list_newest(db, limit=limit, offset=offset)

    async def get_user(self, db: AsyncSession, user_id: int) -> User:
        user = await self.repo.get(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(self, db: AsyncSession, user_in: UserCreate) -> User:
        try:
            user = await self.repo.create(db, User(**user_in.model_dump()))
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning("Rejected user create: email %r already in use", user_in.email)
            raise ConflictError(DUPLICATE_EMAIL)

        created = await self.repo.get(db, user.id, reload=True)
        if created is None:
            raise InternalError("Failed to create user")
        logger.info("Created user %s", created.id)
        return created

    async def update_user(self, db: AsyncSession, user_id: int, user_in: UserUpdate) -> User:
        user = await self.get_user(db, user_id)
        changes = user_in.changes()
        if not changes:
            return user

        try:
            await self.repo.update(db, user_id, changes)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning("Rejected update of user %s: email %r already in use", user_id, changes.get("email"))
            raise ConflictError(DUPLICATE_EMAIL)

        updated = await self.repo.get(db, user_id, reload=True)
        if updated is None:
            raise InternalError("Failed to update user")
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)))
        return updated

    async def delete_user(self, db: AsyncSession, user_id: int) -> None:
        await self.get_user(db, user_id)
        # owned todos go with it through ON DELETE CASCADE
        await self.repo.delete(db, user_id)
        await db.commit()
        logger.info("Deleted user %s", user_id)
