"""
Pytest fixtures for the stocktake test suite.

Provides:
- An in-memory SQLite database (aiosqlite, one shared connection per test)
- Reference data: warehouses, products, an admin and a warehouse-scoped user
- An httpx AsyncClient bound to the FastAPI app with get_db overridden
- Helpers to build bearer headers

Async tests run on the AnyIO pytest plugin with the asyncio backend.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "stocktake-test-secret-key")

from datetime import date  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from stocktake.core.security import create_access_token, get_password_hash  # noqa: E402
from stocktake.database import Base, get_db  # noqa: E402
from stocktake.main import app  # noqa: E402
from stocktake.models import (  # noqa: E402
    PackagingUnit, Product, User, UserRole, Warehouse, WarehouseStatus,
)


TEST_PASSWORD = "secret123"
# Hashed once; bcrypt is deliberately slow
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

CUTOFF = date(2025, 1, 31)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def reference_data(db):
    """
    Warehouses 00009 and 00014 (ACTIVE) and 00090 (INACTIVE); products 4779
    (BOX x12) and 4266 (ARROBA x24); an admin and a user assigned to 00009.
    """
    cerete = Warehouse(code="00009", description="Cerete", status=WarehouseStatus.ACTIVE)
    central = Warehouse(code="00014", description="Central", status=WarehouseStatus.ACTIVE)
    maicao = Warehouse(code="00090", description="Maicao", status=WarehouseStatus.INACTIVE)

    tuna = Product(
        code="4779",
        description="ATUN TRIPACK LA SOBERANA ACTE 80 GRM",
        packaging_unit=PackagingUnit.BOX,
        conversion_factor=12,
    )
    flour = Product(
        code="4266",
        description="HARINA AREPA REPA BLANCA 500G X24",
        packaging_unit=PackagingUnit.ARROBA,
        conversion_factor=24,
    )

    admin = User(
        identification="12345678",
        name="Administrador Sistema",
        password_hash=TEST_PASSWORD_HASH,
        role=UserRole.ADMIN,
        is_active=True,
        warehouses=[],
    )
    counter = User(
        identification="80299534",
        name="Juan Esteban Arango",
        password_hash=TEST_PASSWORD_HASH,
        role=UserRole.USER,
        is_active=True,
        warehouses=[cerete],
    )

    db.add_all([cerete, central, maicao, tuna, flour, admin, counter])
    await db.commit()

    return SimpleNamespace(
        admin=admin,
        counter=counter,
        tuna=tuna,
        flour=flour,
        cerete=cerete,
        central=central,
        maicao=maicao,
    )


@pytest.fixture
async def client(session_factory, reference_data):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    token = create_access_token(subject=user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(reference_data):
    return auth_headers(reference_data.admin)


@pytest.fixture
def counter_headers(reference_data):
    return auth_headers(reference_data.counter)
