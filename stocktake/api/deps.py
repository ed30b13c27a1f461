from typing import Annotated, Optional
import uuid
import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from stocktake.database import get_db
from stocktake.core.exceptions import AuthenticationError, AuthorizationError
from stocktake.core.security import verify_access_token
from stocktake.models.user import User, UserRole


logger = logging.getLogger(__name__)

# HTTP Bearer security scheme; missing headers are reported as AuthenticationError
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Dependency to get the current authenticated user.
    Validates the JWT token and returns the user with its warehouse assignments.
    """
    if credentials is None:
        raise AuthenticationError("Token not provided")

    user_id = verify_access_token(credentials.credentials)

    if user_id is None:
        logger.warning("Token verification failed - invalid or expired token")
        raise AuthenticationError("Invalid or expired token")

    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid user_id in token: {user_id}")
        raise AuthenticationError("Invalid or expired token")

    user = await db.get(User, user_uuid)

    if user is None:
        logger.warning(f"User {user_id} from token not found")
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthorizationError("User account is deactivated")

    return user


def require_role(*roles: UserRole):
    """
    Dependency factory to require one of the given roles.

    Usage:
        @router.post("/{id}/approve")
        async def approve(current_user: Annotated[User, Depends(require_role(UserRole.ADMIN))]):
            ...
    """
    async def role_dependency(
        user: Annotated[User, Depends(get_current_user)]
    ) -> User:
        if user.role not in roles:
            logger.warning(
                f"User {user.identification} ({user.role}) denied; requires {[r.value for r in roles]}"
            )
            raise AuthorizationError()
        return user

    return role_dependency


# Type aliases for cleaner endpoint signatures
DB = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_role(UserRole.ADMIN))]
