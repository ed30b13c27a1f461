"""
Inventory Count Service.

Business logic for recording, correcting, reviewing and deleting counts.
Composes the unit converter, the round eligibility rules and the review
state machine over a single AsyncSession.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stocktake.config import settings
from stocktake.core.exceptions import NotFoundError, ValidationError
from stocktake.models.inventory_count import InventoryCount, CountStatus
from stocktake.models.product import Product
from stocktake.models.warehouse import Warehouse, WarehouseStatus
from stocktake.schemas.inventory_count import InventoryCountCreate, CountFilters
from stocktake.services import count_review
from stocktake.services.count_eligibility import check_count_eligibility
from stocktake.services.unit_converter import to_units


logger = logging.getLogger(__name__)

DELETE_RESTRICT = "restrict"
DELETE_CASCADE = "cascade"


class InventoryCountService:
    """Service for inventory count operations."""

    def __init__(
        self,
        db: AsyncSession,
        allow_edit_after_review: Optional[bool] = None,
        delete_policy: Optional[str] = None,
    ):
        self.db = db
        self.allow_edit_after_review = (
            settings.ALLOW_EDIT_AFTER_REVIEW
            if allow_edit_after_review is None else allow_edit_after_review
        )
        self.delete_policy = delete_policy or settings.COUNT_DELETE_POLICY

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    def _count_query(self):
        return select(InventoryCount).options(
            selectinload(InventoryCount.product),
            selectinload(InventoryCount.warehouse),
            selectinload(InventoryCount.user),
            selectinload(InventoryCount.reviewer),
        )

    async def _get_product(self, code: str) -> Product:
        product = await self.db.get(Product, code)
        if not product:
            raise NotFoundError(f"Product {code} not found")
        return product

    async def _get_warehouse(self, code: str) -> Warehouse:
        warehouse = await self.db.get(Warehouse, code)
        if not warehouse:
            raise NotFoundError(f"Warehouse {code} not found")
        return warehouse

    async def find_round(
        self,
        product_code: str,
        warehouse_code: str,
        cutoff_date: date,
        count_number: int,
    ) -> Optional[InventoryCount]:
        """Look up a count by its natural key."""
        result = await self.db.execute(
            select(InventoryCount).where(
                InventoryCount.product_code == product_code,
                InventoryCount.warehouse_code == warehouse_code,
                InventoryCount.cutoff_date == cutoff_date,
                InventoryCount.count_number == count_number,
            )
        )
        return result.scalar_one_or_none()

    async def _load(self, count_id: UUID) -> InventoryCount:
        result = await self.db.execute(
            self._count_query()
            .where(InventoryCount.id == count_id)
            .execution_options(populate_existing=True)
        )
        count = result.scalar_one_or_none()
        if not count:
            raise NotFoundError("Inventory count not found")
        return count

    # ========================================================================
    # CRUD
    # ========================================================================

    async def create_count(
        self,
        data: InventoryCountCreate,
        creator_id: UUID
    ) -> InventoryCount:
        """Record a count for a product in a warehouse on a cutoff date."""
        product = await self._get_product(data.product_code)
        warehouse = await self._get_warehouse(data.warehouse_code)

        if warehouse.status != WarehouseStatus.ACTIVE:
            raise ValidationError(f"Warehouse {warehouse.code} is not active")

        previous = None
        if data.count_number > 1:
            previous = await self.find_round(
                data.product_code, data.warehouse_code,
                data.cutoff_date, data.count_number - 1
            )
        check_count_eligibility(data.count_number, previous)

        existing = await self.find_round(
            data.product_code, data.warehouse_code,
            data.cutoff_date, data.count_number
        )
        if existing:
            raise ValidationError(self._duplicate_message(data.count_number))

        count = InventoryCount(
            product_code=product.code,
            warehouse_code=warehouse.code,
            cutoff_date=data.cutoff_date,
            count_number=data.count_number,
            previous_count_id=previous.id if previous else None,
            package_quantity=data.package_quantity,
            unit_quantity=to_units(data.package_quantity, product.conversion_factor),
            status=CountStatus.PENDING,
            user_id=creator_id,
        )
        self.db.add(count)

        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent request recorded the same round first
            await self.db.rollback()
            logger.warning(
                f"Unique constraint rejected count {data.count_number} for "
                f"{data.product_code}@{data.warehouse_code} {data.cutoff_date}"
            )
            raise ValidationError(self._duplicate_message(data.count_number))

        logger.info(
            f"Count {data.count_number} recorded for {product.code}@{warehouse.code} "
            f"{data.cutoff_date}: {count.package_quantity} packages = {count.unit_quantity} units"
        )
        return await self._load(count.id)

    @staticmethod
    def _duplicate_message(count_number: int) -> str:
        return (
            f"Count {count_number} already exists for this product "
            f"in this warehouse on this cutoff date"
        )

    async def list_counts(self, filters: Optional[CountFilters] = None) -> List[InventoryCount]:
        """List counts matching the filters, newest cutoff date first."""
        filters = filters or CountFilters()
        query = self._count_query()

        if filters.count_number is not None:
            query = query.where(InventoryCount.count_number == filters.count_number)
        if filters.cutoff_date is not None:
            query = query.where(InventoryCount.cutoff_date == filters.cutoff_date)
        if filters.warehouse_code is not None:
            query = query.where(InventoryCount.warehouse_code == filters.warehouse_code)
        if filters.product_code is not None:
            query = query.where(InventoryCount.product_code == filters.product_code)

        query = query.order_by(
            InventoryCount.cutoff_date.desc(),
            InventoryCount.count_number.asc(),
            InventoryCount.created_at.desc(),
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_count(self, count_id: UUID) -> InventoryCount:
        """Get a count by ID."""
        return await self._load(count_id)

    async def update_count(
        self,
        count_id: UUID,
        package_quantity: Decimal,
        updater_id: UUID
    ) -> InventoryCount:
        """Correct the package quantity of a count. Status is left as is."""
        count = await self._load(count_id)

        if count_review.is_terminal(count.status) and not self.allow_edit_after_review:
            logger.warning(f"Refused edit of reviewed count {count.id} ({count.status})")
            raise ValidationError(
                f"Count already reviewed ({getattr(count.status, 'value', count.status)}); "
                f"quantity can no longer be changed"
            )

        count.package_quantity = package_quantity
        count.unit_quantity = to_units(package_quantity, count.product.conversion_factor)
        count.user_id = updater_id

        await self.db.commit()
        logger.info(f"Count {count.id} updated to {package_quantity} packages by {updater_id}")
        return await self._load(count.id)

    async def delete_count(self, count_id: UUID) -> None:
        """Delete a count, applying the configured policy to later rounds."""
        count = await self._load(count_id)

        successors = await self._successors(count)
        if successors and self.delete_policy != DELETE_CASCADE:
            raise ValidationError(
                f"Cannot delete count {count.count_number}: later round depends on this count"
            )

        # Latest round first so no row is left pointing at a deleted one
        for successor in reversed(successors):
            await self.db.delete(successor)
            await self.db.flush()
        await self.db.delete(count)
        await self.db.commit()

        logger.info(
            f"Count {count.id} deleted"
            + (f" with {len(successors)} later round(s)" if successors else "")
        )

    async def _successors(self, count: InventoryCount) -> List[InventoryCount]:
        """Later rounds chained to this count, in round order."""
        chain: List[InventoryCount] = []
        current_id = count.id
        while True:
            result = await self.db.execute(
                select(InventoryCount).where(InventoryCount.previous_count_id == current_id)
            )
            successor = result.scalar_one_or_none()
            if successor is None:
                return chain
            chain.append(successor)
            current_id = successor.id

    # ========================================================================
    # REVIEW
    # ========================================================================

    async def approve_count(
        self,
        count_id: UUID,
        reviewer_id: UUID,
        notes: Optional[str] = None
    ) -> InventoryCount:
        """Approve a pending count."""
        count = await self._load(count_id)
        count_review.approve(count, reviewer_id, notes)
        await self.db.commit()
        return await self._load(count.id)

    async def reject_count(
        self,
        count_id: UUID,
        reviewer_id: UUID,
        notes: str
    ) -> InventoryCount:
        """Reject a pending count with a reason."""
        count = await self._load(count_id)
        count_review.reject(count, reviewer_id, notes)
        await self.db.commit()
        return await self._load(count.id)

    async def request_recount(
        self,
        count_id: UUID,
        reviewer_id: UUID,
        notes: Optional[str] = None
    ) -> InventoryCount:
        """Release the next round of a pending count."""
        count = await self._load(count_id)
        next_round = await self.find_round(
            count.product_code, count.warehouse_code,
            count.cutoff_date, count.count_number + 1
        )
        count_review.request_recount(
            count, reviewer_id,
            next_round_exists=next_round is not None,
            notes=notes,
        )
        await self.db.commit()
        return await self._load(count.id)
