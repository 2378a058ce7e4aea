import pytest
from httpx import ASGITransport, AsyncClient

from todoapi.database import Database
from todoapi.main import create_app

@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"

@pytest.fixture
async def db(tmp_path):
    # a fresh database file per test
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}")
    await database.create_all()
    yield database
    await database.dispose()

@pytest.fixture
async def client(db):
    app = create_app(db)
    # errors past the catch-all handler are re-raised by Starlette after the 500 is sent
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

@pytest.fixture
def make_user(client):
    async def _make_user(name="Ann", email="ann@x.com"):
        res = await client.post("/users", json={"name": name, "email": email})
        assert res.status_code == 201, res.text
        return res.json()
    return _make_user

@pytest.fixture
def make_todo(client):
    async def _make_todo(user_id, title="Buy milk", **extra):
        res = await client.post("/todos", json={"user_id": user_id, "title": title, **extra})
        assert res.status_code == 201, res.text
        return res.json()
    return _make_todo
