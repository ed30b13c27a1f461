"""Product model with its packaging conversion factor."""
from enum import Enum
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stocktake.database import Base


# Keeps unit_quantity = package_quantity x factor inside Numeric(18, 3)
MAX_CONVERSION_FACTOR = 9999


class PackagingUnit(str, Enum):
    """Natural packaging unit a product is counted in."""
    BOX = "BOX"
    ARROBA = "ARROBA"
    SACK = "SACK"
    BUNDLE = "BUNDLE"
    DISPLAY = "DISPLAY"
    UNIT = "UNIT"


class Product(Base):
    """
    Product catalog entry.

    conversion_factor is the number of stock-keeping units contained in one
    packaging unit (e.g. a BOX of 12 cans has conversion_factor=12).
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint(
            f"conversion_factor > 0 AND conversion_factor <= {MAX_CONVERSION_FACTOR}",
            name="ck_products_conversion_factor_range"
        ),
    )

    code: Mapped[str] = mapped_column(String(20), primary_key=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    packaging_unit: Mapped[PackagingUnit] = mapped_column(
        String(20), nullable=False, default=PackagingUnit.BOX
    )
    conversion_factor: Mapped[int] = mapped_column(Integer, nullable=False)

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

    def __repr__(self) -> str:
        return f"<Product {self.code}: {self.description} x{self.conversion_factor}>"
