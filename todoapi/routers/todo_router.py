from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.schemas.todo import TodoCreate, TodoOut, TodoUpdate
from todoapi.services.todo_service import TodoService
from todoapi.database import MAX_ROW_ID, MIN_ROW_ID, get_db

router = APIRouter()
service = TodoService()

TodoId = Annotated[int, Path(ge=MIN_ROW_ID, le=MAX_ROW_ID, description="Todo id")]

@router.get("", response_model=list[TodoOut])
async def list_todos(
    user_id: Optional[int] = Query(
        None, ge=MIN_ROW_ID, le=MAX_ROW_ID, description="Only todos owned by this user"
    ),
    completed: Optional[bool] = Query(None, description="Filter by completion status"),
    limit: int = Query(100, ge=0, le=MAX_ROW_ID, description="Maximum number of todos to return"),
    offset: int = Query(0, ge=0, le=MAX_ROW_ID, description="Number of todos to skip"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_todos(db, user_id=user_id, completed=completed, limit=limit, offset=offset)

@router.get("/user/{user_id}", response_model=list[TodoOut])
async def list_user_todos(
    user_id: Annotated[int, Path(ge=MIN_ROW_ID, le=MAX_ROW_ID, description="Owner id")],
    completed: Optional[bool] = Query(None, description="Filter by completion status"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_user_todos(db, user_id, completed=completed)

@router.get("/{todo_id}", response_model=TodoOut, responses={404: {"description": "Todo not found"}})
async def get_todo(todo_id: TodoId, db: AsyncSession = Depends(get_db)):
    return await service.get_todo(db, todo_id)

@router.post("", response_model=TodoOut, status_code=201, responses={400: {"description": "User not found"}})
async def create_todo(todo_in: TodoCreate, db: AsyncSession = Depends(get_db)):
    return await service.create_todo(db, todo_in)

@router.put("/{todo_id}", response_model=TodoOut, responses={404: {"description": "Todo not found"}})
async def update_todo(todo_id: TodoId, todo_in: TodoUpdate, db: AsyncSession = Depends(get_db)):
    return await service.update_todo(db, todo_id, todo_in)

@router.delete("/{todo_id}", status_code=204, responses={404: {"description": "Todo not found"}})
async def delete_todo(todo_id: TodoId, db: AsyncSession = Depends(get_db)):
    await service.delete_todo(db, todo_id)
