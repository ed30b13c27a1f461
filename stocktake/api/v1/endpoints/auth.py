from fastapi import APIRouter

from stocktake.api.deps import DB, CurrentUser
from stocktake.core.exceptions import AuthenticationError
from stocktake.schemas.auth import LoginRequest, LoginResponse
from stocktake.schemas.base import ApiResponse
from stocktake.schemas.user import UserResponse
from stocktake.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    data: LoginRequest,
    db: DB,
):
    """
    Authenticate a user by identification and password and return an access token.
    """
    auth_service = AuthService(db)

    user = await auth_service.authenticate_user(data.identification, data.password)

    if not user:
        raise AuthenticationError("Invalid credentials")

    token, expires_in = auth_service.create_token(user)

    return ApiResponse(data=LoginResponse(
        token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    ))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def me(current_user: CurrentUser):
    """Return the authenticated user with its warehouses."""
    return ApiResponse(data=UserResponse.model_validate(current_user))
