from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from todoapi.routers import todo_router, user_router

pytestmark = pytest.mark.anyio

async def test_root_health(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}

async def test_user_todo_walkthrough(client):
    res = await client.post("/users", json={"name": "Ann", "email": "ann@x.com"})
    assert res.status_code == 201
    user = res.json()
    assert user["id"] == 1

    res = await client.post("/todos", json={"user_id": 1, "title": "Buy milk"})
    assert res.status_code == 201
    todo = res.json()
    assert todo["id"] == 1
    assert todo["user_id"] == 1
    assert todo["completed"] is False

    res = await client.put("/todos/1", json={"completed": True})
    assert res.status_code == 200
    assert res.json()["completed"] is True
    assert datetime.fromisoformat(res.json()["updated_at"]) >= datetime.fromisoformat(todo["updated_at"])

async def test_storage_failure_maps_to_internal_error(client, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    monkeypatch.setattr(user_router.service, "list_users", broken)
    monkeypatch.setattr(todo_router.service, "get_todo", broken)

    res = await client.get("/users")
    assert res.status_code == 500
    assert res.json() == {"error": "InternalError", "message": "Internal server error"}

    res = await client.get("/todos/1")
    assert res.status_code == 500
    assert res.json()["error"] == "InternalError"

async def test_unexpected_error_maps_to_internal_error(client, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(user_router.service, "list_users", broken)

    res = await client.get("/users")
    assert res.status_code == 500
    assert res.headers["content-type"] == "application/json"
    assert res.json() == {"error": "InternalError", "message": "Internal server error"}

async def test_ids_outside_sqlite_integer_range_are_rejected(client, make_user):
    too_big = 2**63
    user = await make_user()

    for path in (f"/users/{too_big}", f"/todos/{too_big}", f"/todos/user/{too_big}", f"/users/{-too_big - 1}"):
        res = await client.get(path)
        assert res.status_code == 422, path
        assert res.json()["error"] == "ValidationError"

    res = await client.put(f"/todos/{too_big}", json={"completed": True})
    assert res.status_code == 422
    res = await client.delete(f"/users/{too_big}")
    assert res.status_code == 422
    res = await client.get("/todos", params={"user_id": too_big})
    assert res.status_code == 422
    res = await client.get("/users", params={"limit": too_big})
    assert res.status_code == 422

    res = await client.post("/todos", json={"user_id": too_big, "title": "overflow"})
    assert res.status_code == 422
    assert (await client.get("/todos")).json() == []

    # the largest storable id is simply missing
    res = await client.get(f"/users/{too_big - 1}")
    assert res.status_code == 404
    res = await client.post("/todos", json={"user_id": too_big - 1, "title": "nobody"})
    assert res.status_code == 400

    # the real user is untouched
    assert (await client.get(f"/users/{user['id']}")).status_code == 200

async def test_openapi_lists_both_resources(client):
    res = await client.get("/openapi.json")
    assert res.status_code == 200
    paths = res.json()["paths"]
    assert {"/users", "/users/{user_id}", "/todos", "/todos/{todo_id}", "/todos/user/{user_id}"} <= set(paths)

async def test_lambda_handlers_expose_single_resources():
    from todoapi.handlers import api_handler, todo_handler, user_handler

    user_paths = {route.path for route in user_handler.app.routes}
    todo_paths = {route.path for route in todo_handler.app.routes}
    assert "/users" in user_paths and "/todos" not in user_paths
    assert "/todos" in todo_paths and "/users" not in todo_paths
    assert callable(user_handler.handler)
    assert callable(todo_handler.handler)
    assert callable(api_handler.handler)
