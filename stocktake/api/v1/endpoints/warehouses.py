from typing import List

from fastapi import APIRouter
from sqlalchemy import select

from stocktake.api.deps import DB, CurrentUser
from stocktake.models.warehouse import Warehouse
from stocktake.schemas.base import ApiResponse
from stocktake.schemas.warehouse import WarehouseResponse

router = APIRouter(tags=["Warehouses"])


@router.get("", response_model=ApiResponse[List[WarehouseResponse]])
async def list_warehouses(db: DB, current_user: CurrentUser):
    """List all warehouses, active or not, ordered by code."""
    result = await db.execute(select(Warehouse).order_by(Warehouse.code))
    return ApiResponse(data=[WarehouseResponse.model_validate(w) for w in result.scalars().all()])
