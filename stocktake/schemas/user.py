from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from stocktake.models.user import UserRole
from stocktake.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema
from stocktake.schemas.warehouse import WarehouseResponse


class UserCreate(BaseCreateSchema):
    """Schema for creating a user."""
    identification: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.USER
    warehouse_codes: List[str] = Field(..., min_length=1, alias="warehouseIds")


class UserUpdate(BaseUpdateSchema):
    """Schema for updating a user. Warehouse codes replace the current assignments."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    warehouse_codes: Optional[List[str]] = Field(None, alias="warehouseIds")


class UserBrief(BaseResponseSchema):
    """Display fields of a user nested in count records."""
    id: UUID
    identification: str
    name: str


class UserResponse(BaseResponseSchema):
    """User details. The password hash is never exposed."""
    id: UUID
    identification: str
    name: str
    role: UserRole
    is_active: bool
    warehouses: List[WarehouseResponse] = []
    created_at: datetime
    updated_at: datetime
