"""User administration: accounts, roles and warehouse assignments."""
import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.core.exceptions import NotFoundError, ValidationError
from stocktake.core.security import get_password_hash
from stocktake.models.inventory_count import InventoryCount
from stocktake.models.user import User
from stocktake.models.warehouse import Warehouse
from stocktake.schemas.user import UserCreate, UserUpdate


logger = logging.getLogger(__name__)


class UserService:
    """Service for user management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _resolve_warehouses(self, codes: List[str]) -> List[Warehouse]:
        unique_codes = list(dict.fromkeys(codes))
        result = await self.db.execute(
            select(Warehouse).where(Warehouse.code.in_(unique_codes))
        )
        found = {w.code: w for w in result.scalars().all()}
        missing = [code for code in unique_codes if code not in found]
        if missing:
            raise NotFoundError(f"Warehouse(s) not found: {', '.join(missing)}")
        return [found[code] for code in unique_codes]

    async def _reload(self, user_id: UUID) -> User:
        result = await self.db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def create_user(self, data: UserCreate) -> User:
        """Create a user with its warehouse assignments."""
        existing = await self.db.execute(
            select(User.id).where(User.identification == data.identification)
        )
        if existing.scalar_one_or_none():
            raise ValidationError("A user with this identification already exists")

        warehouses = await self._resolve_warehouses(data.warehouse_codes)

        user = User(
            identification=data.identification,
            name=data.name,
            password_hash=get_password_hash(data.password),
            role=data.role,
            is_active=True,
            warehouses=warehouses,
        )
        self.db.add(user)
        await self.db.commit()

        logger.info(f"User {user.identification} created with role {data.role.value}")
        return await self._reload(user.id)

    async def list_users(self) -> List[User]:
        """List users, newest first."""
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        """Update a user. Warehouse codes, when given, replace all assignments."""
        user = await self.get_user(user_id)

        update_data = data.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        warehouse_codes = update_data.pop("warehouse_codes", None)

        for field, value in update_data.items():
            if value is not None:
                setattr(user, field, value)

        if password:
            user.password_hash = get_password_hash(password)

        if warehouse_codes is not None:
            user.warehouses = await self._resolve_warehouses(warehouse_codes)

        await self.db.commit()
        logger.info(f"User {user.identification} updated")
        return await self._reload(user.id)

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user that has not recorded or reviewed any count."""
        user = await self.get_user(user_id)

        recorded = await self.db.scalar(
            select(func.count()).select_from(InventoryCount).where(
                (InventoryCount.user_id == user_id) | (InventoryCount.reviewed_by == user_id)
            )
        )
        if recorded:
            raise ValidationError(
                "User has recorded or reviewed counts and cannot be deleted; deactivate it instead"
            )

        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"User {user.identification} deleted")
