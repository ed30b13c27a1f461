"""Warehouse model for count locations."""
from enum import Enum
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from stocktake.database import Base


class WarehouseStatus(str, Enum):
    """Warehouse status enum."""
    ACTIVE = "ACTIVE"  # Accepts new counts
    INACTIVE = "INACTIVE"  # Closed for counting


class Warehouse(Base):
    """Warehouse where physical counts are taken, keyed by its business code."""

    __tablename__ = "warehouses"

    code: Mapped[str] = mapped_column(String(20), primary_key=True)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[WarehouseStatus] = mapped_column(
        String(20), nullable=False, default=WarehouseStatus.ACTIVE
    )

    # Timestamps
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

    @property
    def is_active(self) -> bool:
        return self.status == WarehouseStatus.ACTIVE

    def __repr__(self):
        return f"<Warehouse {self.code}: {self.description}>"
