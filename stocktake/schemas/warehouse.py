from stocktake.models.warehouse import WarehouseStatus
from stocktake.schemas.base import BaseResponseSchema


class WarehouseResponse(BaseResponseSchema):
    """Warehouse as shown in listings and nested in count records."""
    code: str
    description: str
    status: WarehouseStatus
