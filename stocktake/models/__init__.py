from stocktake.models.warehouse import Warehouse, WarehouseStatus
from stocktake.models.product import Product, PackagingUnit, MAX_CONVERSION_FACTOR
from stocktake.models.user import User, UserRole, user_warehouses
from stocktake.models.inventory_count import InventoryCount, CountStatus, MAX_COUNT_NUMBER

__all__ = [
    "Warehouse",
    "WarehouseStatus",
    "Product",
    "PackagingUnit",
    "MAX_CONVERSION_FACTOR",
    "User",
    "UserRole",
    "user_warehouses",
    "InventoryCount",
    "CountStatus",
    "MAX_COUNT_NUMBER",
]
