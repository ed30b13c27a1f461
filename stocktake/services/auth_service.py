import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.models.user import User
from stocktake.core.security import verify_password, create_access_token
from stocktake.config import settings


logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service for user login and token issuance."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate_user(
        self,
        identification: str,
        password: str
    ) -> Optional[User]:
        """
        Authenticate a user by identification and password.

        Returns:
            User object if authentication successful, None otherwise
        """
        result = await self.db.execute(
            select(User).where(User.identification == identification.strip())
        )
        user = result.scalar_one_or_none()

        if user is None:
            logger.warning(f"Login failed: unknown identification {identification}")
            return None

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: bad password for {identification}")
            return None

        if not user.is_active:
            logger.warning(f"Login refused: user {identification} is deactivated")
            return None

        return user

    def create_token(self, user: User) -> Tuple[str, int]:
        """
        Create an access token for a user.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        additional_claims = {
            "identification": user.identification,
            "role": getattr(user.role, "value", user.role),
        }

        access_token = create_access_token(
            subject=user.id,
            additional_claims=additional_claims
        )

        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
