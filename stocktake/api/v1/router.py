from fastapi import APIRouter

from stocktake.api.v1.endpoints import (
    # Access Control
    auth,
    users,
    # Reference data
    warehouses,
    products,
    # Counting workflow
    inventory_counts,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(
    auth.router,
    prefix="/auth",
)
api_router.include_router(
    users.router,
    prefix="/users",
)
api_router.include_router(
    warehouses.router,
    prefix="/warehouses",
)
api_router.include_router(
    products.router,
    prefix="/products",
)
api_router.include_router(
    inventory_counts.router,
    prefix="/inventory-counts",
)
