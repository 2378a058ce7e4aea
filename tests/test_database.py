import pytest
from sqlalchemy.exc import IntegrityError

from todoapi.models.todo import Todo
from todoapi.models.user import User
from todoapi.repositories.todo_repo import TodoRepository
from todoapi.repositories.user_repo import UserRepository

pytestmark = pytest.mark.anyio

async def test_sqlite_runs_in_wal_mode_with_foreign_keys(db):
    async with db.engine.connect() as conn:
        journal_mode = (await conn.exec_driver_sql("PRAGMA journal_mode")).scalar()
        foreign_keys = (await conn.exec_driver_sql("PRAGMA foreign_keys")).scalar()
    assert journal_mode == "wal"
    assert foreign_keys == 1

async def test_email_unique_constraint(db):
    repo = UserRepository()
    async with db.session() as session:
        await repo.create(session, User(name="Ann", email="ann@x.com"))
        await session.commit()
        with pytest.raises(IntegrityError):
            await repo.create(session, User(name="Ann 2", email="ann@x.com"))
        await session.rollback()

async def test_todo_requires_existing_user_at_storage_level(db):
    async with db.session() as session:
        with pytest.raises(IntegrityError):
            await TodoRepository().create(session, Todo(user_id=12345, title="orphan"))
        await session.rollback()

async def test_update_binds_only_given_columns(db):
    users = UserRepository()
    todos = TodoRepository()
    async with db.session() as session:
        user = await users.create(session, User(name="Ann", email="ann@x.com"))
        todo = await todos.create(session, Todo(user_id=user.id, title="it's \"quoted\"; DROP TABLE todos"))
        await session.commit()

        assert await todos.update(session, todo.id, {"description": "'); --"})
        await session.commit()

        reloaded = await todos.get(session, todo.id, reload=True)
        assert reloaded.title == "it's \"quoted\"; DROP TABLE todos"
        assert reloaded.description == "'); --"
        assert reloaded.completed is False

        assert not await todos.update(session, 999, {"title": "nope"})

async def test_update_requires_values(db):
    async with db.session() as session:
        with pytest.raises(ValueError):
            await UserRepository().update(session, 1, {})

async def test_create_rejects_tracked_instance(db):
    repo = UserRepository()
    async with db.session() as session:
        user = await repo.create(session, User(name="Ann", email="ann@x.com"))
        with pytest.raises(ValueError):
            await repo.create(session, user)

async def test_delete_and_exists(db):
    users = UserRepository()
    todos = TodoRepository()
    async with db.session() as session:
        user = await users.create(session, User(name="Ann", email="ann@x.com"))
        await todos.create(session, Todo(user_id=user.id, title="one"))
        await session.commit()
        assert await users.exists(session, id=user.id)

        assert await users.delete(session, user.id)
        await session.commit()

        assert not await users.exists(session, id=user.id)
        assert await todos.list_for_user(session, user.id) == []
        assert not await users.delete(session, user.id)
