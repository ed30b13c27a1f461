"""Seed warehouses, products and users for a fresh database."""
import asyncio
import logging

from sqlalchemy import select

from stocktake.core.security import get_password_hash
from stocktake.database import get_db_session, init_db
from stocktake.models import (
    User, UserRole, Product, PackagingUnit, Warehouse, WarehouseStatus,
)


logger = logging.getLogger("seed_data")

WAREHOUSES = [
    {"code": "00009", "description": "Cerete", "status": WarehouseStatus.ACTIVE},
    {"code": "00014", "description": "Central", "status": WarehouseStatus.ACTIVE},
    {"code": "00006", "description": "Valledupar", "status": WarehouseStatus.ACTIVE},
    {"code": "00090", "description": "Maicao", "status": WarehouseStatus.INACTIVE},
]

PRODUCTS = [
    {
        "code": "4779",
        "description": "ATUN TRIPACK LA SOBERANA ACTE 80 GRM",
        "packaging_unit": PackagingUnit.BOX,
        "conversion_factor": 12,
    },
    {
        "code": "4266",
        "description": "HARINA AREPA REPA BLANCA 500G X24",
        "packaging_unit": PackagingUnit.ARROBA,
        "conversion_factor": 24,
    },
    {
        "code": "4442",
        "description": "HARINA LA SOBERANA BLANCA 500G X24",
        "packaging_unit": PackagingUnit.ARROBA,
        "conversion_factor": 24,
    },
]

USERS = [
    ("12345678", "Administrador Sistema", "admin123", UserRole.ADMIN, []),
    ("80299534", "Juan Esteban Arango", "user123", UserRole.USER, ["00009"]),
    ("43997553", "Manuel Francisco Grajales", "user123", UserRole.USER, ["00006", "00090"]),
    ("25776298", "Santiago Francisco Martinez", "user123", UserRole.USER, ["00014"]),
]


async def seed():
    """Seed initial data. Existing rows are left untouched."""
    await init_db()

    async with get_db_session() as db:
        logger.info("Seeding data...")

        warehouses = {}
        for w in WAREHOUSES:
            warehouse = await db.get(Warehouse, w["code"])
            if warehouse is None:
                warehouse = Warehouse(**w)
                db.add(warehouse)
            warehouses[w["code"]] = warehouse

        for p in PRODUCTS:
            if await db.get(Product, p["code"]) is None:
                db.add(Product(**p))

        for identification, name, password, role, codes in USERS:
            result = await db.execute(
                select(User.id).where(User.identification == identification)
            )
            if result.scalar_one_or_none():
                continue
            db.add(User(
                identification=identification,
                name=name,
                password_hash=get_password_hash(password),
                role=role,
                is_active=True,
                warehouses=[warehouses[code] for code in codes],
            ))
            logger.info(f"  Created user {identification} ({role.value})")

    logger.info("Seed data created successfully!")
    logger.info("Admin: 12345678 / admin123")
    logger.info("Users: 80299534, 43997553, 25776298 / user123")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    asyncio.run(seed())
