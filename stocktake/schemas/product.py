from stocktake.models.product import PackagingUnit
from stocktake.schemas.base import BaseResponseSchema


class ProductResponse(BaseResponseSchema):
    """Product as shown in listings and nested in count records."""
    code: str
    description: str
    packaging_unit: PackagingUnit
    conversion_factor: int
