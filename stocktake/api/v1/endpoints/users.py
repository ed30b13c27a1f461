from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from stocktake.api.deps import DB, AdminUser
from stocktake.schemas.base import ApiResponse, MessageData
from stocktake.schemas.user import UserCreate, UserUpdate, UserResponse
from stocktake.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(data: UserCreate, db: DB, current_user: AdminUser):
    """Create a user and assign its warehouses."""
    user = await UserService(db).create_user(data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.get("", response_model=ApiResponse[List[UserResponse]])
async def list_users(db: DB, current_user: AdminUser):
    users = await UserService(db).list_users()
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: UUID, db: DB, current_user: AdminUser):
    user = await UserService(db).get_user(user_id)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(user_id: UUID, data: UserUpdate, db: DB, current_user: AdminUser):
    user = await UserService(db).update_user(user_id, data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[MessageData])
async def delete_user(user_id: UUID, db: DB, current_user: AdminUser):
    await UserService(db).delete_user(user_id)
    return ApiResponse(data=MessageData(message="User deleted"))
