"""
Inventory Count API Endpoints.

Recording and correcting counts is open to authenticated users within their
warehouses; the review workflow (approve, request recount, reject) is
reserved for administrators.
"""
from datetime import date
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Query, status

from stocktake.api.deps import DB, CurrentUser, AdminUser
from stocktake.core.permissions import ensure_warehouse_access
from stocktake.schemas.base import ApiResponse, MessageData
from stocktake.schemas.inventory_count import (
    InventoryCountCreate, InventoryCountUpdate, InventoryCountResponse,
    CountFilters, CountReview, CountReject
)
from stocktake.services.inventory_count_service import InventoryCountService

router = APIRouter(tags=["Inventory Counts"])


# ============================================================================
# COUNTS
# ============================================================================

@router.post(
    "",
    response_model=ApiResponse[InventoryCountResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Record Inventory Count"
)
async def create_count(
    data: InventoryCountCreate,
    db: DB,
    current_user: CurrentUser,
):
    """Record a package count for one round of a product in a warehouse."""
    ensure_warehouse_access(current_user, data.warehouse_code)
    service = InventoryCountService(db)
    count = await service.create_count(data, current_user.id)
    return ApiResponse(data=InventoryCountResponse.model_validate(count))


@router.get(
    "",
    response_model=ApiResponse[List[InventoryCountResponse]],
    summary="List Inventory Counts"
)
async def list_counts(
    db: DB,
    current_user: CurrentUser,
    count_number: Optional[int] = Query(None, alias="countNumber", ge=1, le=3),
    cutoff_date: Optional[date] = Query(None, alias="cutoffDate"),
    warehouse_code: Optional[str] = Query(None, alias="warehouseId"),
    product_code: Optional[str] = Query(None, alias="productId"),
):
    """List counts, newest cutoff date first."""
    service = InventoryCountService(db)
    counts = await service.list_counts(CountFilters(
        count_number=count_number,
        cutoff_date=cutoff_date,
        warehouse_code=warehouse_code,
        product_code=product_code,
    ))
    return ApiResponse(data=[InventoryCountResponse.model_validate(c) for c in counts])


@router.get(
    "/{count_id}",
    response_model=ApiResponse[InventoryCountResponse],
    summary="Get Inventory Count"
)
async def get_count(
    count_id: UUID,
    db: DB,
    current_user: CurrentUser,
):
    service = InventoryCountService(db)
    count = await service.get_count(count_id)
    return ApiResponse(data=InventoryCountResponse.model_validate(count))


@router.put(
    "/{count_id}",
    response_model=ApiResponse[InventoryCountResponse],
    summary="Update Inventory Count Quantity"
)
async def update_count(
    count_id: UUID,
    data: InventoryCountUpdate,
    db: DB,
    current_user: CurrentUser,
):
    """Correct the package quantity; unit quantity is recomputed."""
    service = InventoryCountService(db)
    count = await service.update_count(count_id, data.package_quantity, current_user.id)
    return ApiResponse(data=InventoryCountResponse.model_validate(count))


@router.delete(
    "/{count_id}",
    response_model=ApiResponse[MessageData],
    summary="Delete Inventory Count"
)
async def delete_count(
    count_id: UUID,
    db: DB,
    current_user: CurrentUser,
):
    service = InventoryCountService(db)
    await service.delete_count(count_id)
    return ApiResponse(data=MessageData(message="Inventory count deleted"))


# ============================================================================
# REVIEW WORKFLOW (ADMIN)
# ============================================================================

@router.post(
    "/{count_id}/approve",
    response_model=ApiResponse[InventoryCountResponse],
    summary="Approve Inventory Count"
)
async def approve_count(
    count_id: UUID,
    db: DB,
    current_user: AdminUser,
    data: Optional[CountReview] = None,
):
    service = InventoryCountService(db)
    count = await service.approve_count(
        count_id, current_user.id, data.notes if data else None
    )
    return ApiResponse(data=InventoryCountResponse.model_validate(count))


@router.post(
    "/{count_id}/request-recount",
    response_model=ApiResponse[InventoryCountResponse],
    summary="Request Recount"
)
async def request_recount(
    count_id: UUID,
    db: DB,
    current_user: AdminUser,
    data: Optional[CountReview] = None,
):
    """Release the next count round for this product, warehouse and cutoff date."""
    service = InventoryCountService(db)
    count = await service.request_recount(
        count_id, current_user.id, data.notes if data else None
    )
    return ApiResponse(data=InventoryCountResponse.model_validate(count))


@router.post(
    "/{count_id}/reject",
    response_model=ApiResponse[InventoryCountResponse],
    summary="Reject Inventory Count"
)
async def reject_count(
    count_id: UUID,
    data: CountReject,
    db: DB,
    current_user: AdminUser,
):
    service = InventoryCountService(db)
    count = await service.reject_count(count_id, current_user.id, data.notes)
    return ApiResponse(data=InventoryCountResponse.model_validate(count))
