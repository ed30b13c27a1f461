import logging

from stocktake.core.exceptions import AuthorizationError
from stocktake.models.user import User


logger = logging.getLogger(__name__)


def can_access_warehouse(user: User, warehouse_code: str) -> bool:
    """Admins reach every warehouse; other users only their assigned ones."""
    if user.is_admin:
        return True
    return warehouse_code in user.warehouse_codes


def ensure_warehouse_access(user: User, warehouse_code: str | None) -> None:
    """
    Raise AuthorizationError unless the user may record counts in the warehouse.
    """
    if user.is_admin:
        return

    if not warehouse_code:
        raise AuthorizationError("Warehouse not specified")

    if not can_access_warehouse(user, warehouse_code):
        logger.warning(
            f"User {user.identification} denied access to warehouse {warehouse_code}"
        )
        raise AuthorizationError("You do not have access to this warehouse")
