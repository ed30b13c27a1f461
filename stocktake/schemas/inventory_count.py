"""
Inventory Count Schemas.

Pydantic schemas for count submission, filtering and review.
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from stocktake.models.inventory_count import CountStatus, MAX_COUNT_NUMBER
from stocktake.schemas.base import (
    BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema, Quantity
)
from stocktake.schemas.product import ProductResponse
from stocktake.schemas.user import UserBrief
from stocktake.schemas.warehouse import WarehouseResponse


# ============================================================================
# INPUT SCHEMAS
# ============================================================================

class InventoryCountCreate(BaseCreateSchema):
    """Schema for recording a count. warehouseId/productId carry business codes."""
    count_number: int = Field(..., ge=1, le=MAX_COUNT_NUMBER)
    cutoff_date: date
    warehouse_code: str = Field(..., min_length=1, max_length=20, alias="warehouseId")
    product_code: str = Field(..., min_length=1, max_length=20, alias="productId")
    package_quantity: Decimal = Field(..., ge=0, max_digits=14, decimal_places=3)


class InventoryCountUpdate(BaseUpdateSchema):
    """Schema for correcting the package quantity of a count."""
    package_quantity: Decimal = Field(..., ge=0, max_digits=14, decimal_places=3)


class CountFilters(BaseModel):
    """Optional equality filters for listing counts."""
    count_number: Optional[int] = Field(None, ge=1, le=MAX_COUNT_NUMBER)
    cutoff_date: Optional[date] = None
    warehouse_code: Optional[str] = None
    product_code: Optional[str] = None


class CountReview(BaseCreateSchema):
    """Body for approve and request-recount."""
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class CountReject(BaseCreateSchema):
    """Body for reject. Notes explaining the rejection are mandatory."""
    notes: str = Field(..., max_length=2000)

    @field_validator("notes")
    @classmethod
    def notes_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Notes are required to reject a count")
        return v


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class InventoryCountResponse(BaseResponseSchema):
    """Count record joined with product, warehouse, creator and reviewer."""
    id: UUID
    count_number: int
    cutoff_date: date
    warehouse_code: str
    product_code: str
    previous_count_id: Optional[UUID] = None
    package_quantity: Quantity
    unit_quantity: Quantity
    status: CountStatus
    user_id: UUID
    reviewed_by: Optional[UUID] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    product: Optional[ProductResponse] = None
    warehouse: Optional[WarehouseResponse] = None
    user: Optional[UserBrief] = None
    reviewer: Optional[UserBrief] = None
