from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.schemas.user import UserCreate, UserOut, UserUpdate
from todoapi.services.user_service import UserService
from todoapi.database import MAX_ROW_ID, MIN_ROW_ID, get_db

router = APIRouter()
service = UserService()

UserId = Annotated[int, Path(ge=MIN_ROW_ID, le=MAX_ROW_ID, description="User id")]

@router.get("", response_model=list[UserOut])
async def list_users(
    limit: int = Query(100, ge=0, le=MAX_ROW_ID, description="Maximum number of users to return"),
    offset: int = Query(0, ge=0, le=MAX_ROW_ID, description="Number of users to skip"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_users(db, limit=limit, offset=offset)

@router.get("/{user_id}", response_model=UserOut, responses={404: {"description": "User not found"}})
async def get_user(user_id: UserId, db: AsyncSession = Depends(get_db)):
    return await service.get_user(db, user_id)

@router.post("", response_model=UserOut, status_code=201, responses={400: {"description": "Email already exists"}})
async def create_user(user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    return await service.create_user(db, user_in)

@router.put(
    "/{user_id}",
    response_model=UserOut,
    responses={400: {"description": "Email already exists"}, 404: {"description": "User not found"}},
)
async def update_user(user_id: UserId, user_in: UserUpdate, db: AsyncSession = Depends(get_db)):
    return await service.update_user(db, user_id, user_in)

@router.delete("/{user_id}", status_code=204, responses={404: {"description": "User not found"}})
async def delete_user(user_id: UserId, db: AsyncSession = Depends(get_db)):
    await service.delete_user(db, user_id)
