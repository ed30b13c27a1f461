"""
Inventory Count Models.

A count is one physical package count of a product in a warehouse for a
cutoff date. Up to three rounds may exist for the same product, warehouse
and cutoff date; each round after the first is only opened when an
administrator requests a recount of the previous one.
"""
from datetime import datetime, date, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    String, Integer, DateTime, ForeignKey, Index, Text,
    Numeric, Date, UniqueConstraint, CheckConstraint
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stocktake.database import Base
from stocktake.models.product import Product
from stocktake.models.user import User
from stocktake.models.warehouse import Warehouse


# Round 3 is terminal: no recount can be requested on it
MAX_COUNT_NUMBER = 3


class CountStatus(str, Enum):
    """Review status of an inventory count."""
    PENDING = "PENDING"                      # Awaiting administrator review
    APPROVED = "APPROVED"                    # Accepted as final
    RECOUNT_REQUESTED = "RECOUNT_REQUESTED"  # Next round released
    REJECTED = "REJECTED"                    # Discarded with notes


class InventoryCount(Base):
    """Package count for (product, warehouse, cutoff date, round)."""
    __tablename__ = "inventory_counts"
    __table_args__ = (
        UniqueConstraint(
            "product_code", "warehouse_code", "cutoff_date", "count_number",
            name="uq_inventory_counts_round"
        ),
        CheckConstraint(
            f"count_number >= 1 AND count_number <= {MAX_COUNT_NUMBER}",
            name="ck_inventory_counts_count_number"
        ),
        CheckConstraint("package_quantity >= 0", name="ck_inventory_counts_package_quantity"),
        Index("idx_ic_cutoff_round", "cutoff_date", "count_number"),
        Index("idx_ic_warehouse", "warehouse_code"),
        Index("idx_ic_status", "status"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=uuid4
    )

    # Natural key
    product_code: Mapped[str] = mapped_column(
        String(20), ForeignKey("products.code"), nullable=False
    )
    warehouse_code: Mapped[str] = mapped_column(
        String(20), ForeignKey("warehouses.code"), nullable=False
    )
    cutoff_date: Mapped[date] = mapped_column(Date, nullable=False)
    count_number: Mapped[int] = mapped_column(Integer, nullable=False)

    # Round N points at round N-1 of the same natural key
    previous_count_id: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("inventory_counts.id", ondelete="RESTRICT"),
        nullable=True
    )

    # Quantities
    package_quantity: Mapped[Decimal] = mapped_column(Numeric(14, 3), nullable=False)
    unit_quantity: Mapped[Decimal] = mapped_column(Numeric(18, 3), nullable=False)

    status: Mapped[CountStatus] = mapped_column(
        String(30), nullable=False, default=CountStatus.PENDING
    )

    # Creator / last updater of the quantity
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("users.id"), nullable=False
    )

    # Review
    reviewed_by: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey("users.id")
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    review_notes: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product")
    warehouse: Mapped["Warehouse"] = relationship("Warehouse")
    user: Mapped["User"] = relationship("User", foreign_keys=[user_id])
    reviewer: Mapped[Optional["User"]] = relationship("User", foreign_keys=[reviewed_by])
    previous_count: Mapped[Optional["InventoryCount"]] = relationship(
        "InventoryCount", remote_side=[id]
    )

    def __repr__(self) -> str:
        return (
            f"<InventoryCount {self.product_code}@{self.warehouse_code} "
            f"{self.cutoff_date} #{self.count_number} {self.status}>"
        )
