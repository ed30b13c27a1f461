from typing import List

from fastapi import APIRouter
from sqlalchemy import select

from stocktake.api.deps import DB, CurrentUser
from stocktake.models.product import Product
from stocktake.schemas.base import ApiResponse
from stocktake.schemas.product import ProductResponse

router = APIRouter(tags=["Products"])


@router.get("", response_model=ApiResponse[List[ProductResponse]])
async def list_products(db: DB, current_user: CurrentUser):
    """List the product catalog ordered by code."""
    result = await db.execute(select(Product).order_by(Product.code))
    return ApiResponse(data=[ProductResponse.model_validate(p) for p in result.scalars().all()])
