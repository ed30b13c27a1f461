import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Table, Column
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from stocktake.database import Base

if TYPE_CHECKING:
    from stocktake.models.warehouse import Warehouse


class UserRole(str, Enum):
    """Access role of a user."""
    ADMIN = "ADMIN"  # Reviews counts, manages users, sees every warehouse
    USER = "USER"  # Records counts in assigned warehouses


# Association table for User-Warehouse many-to-many relationship
user_warehouses = Table(
    "user_warehouses",
    Base.metadata,
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "warehouse_code",
        String(20),
        ForeignKey("warehouses.code", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class User(Base):
    """
    User model for authentication and authorization.
    Non-admin users may only record counts in the warehouses assigned to them.
    """
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    # Login identification (national id / employee number)
    identification: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(String(20), nullable=False, default=UserRole.USER)

    # Status flags
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

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

    # Relationships
    warehouses: Mapped[List["Warehouse"]] = relationship(
        "Warehouse",
        secondary=user_warehouses,
        lazy="selectin",
        order_by="Warehouse.code",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def warehouse_codes(self) -> List[str]:
        """Codes of the warehouses assigned to this user."""
        return [w.code for w in self.warehouses]

    def __repr__(self) -> str:
        return f"<User(identification='{self.identification}', name='{self.name}')>"
