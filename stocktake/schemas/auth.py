from pydantic import BaseModel, Field

from stocktake.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request schema."""
    identification: str = Field(..., min_length=1, description="User identification")
    password: str = Field(..., min_length=1, description="User password")


class LoginResponse(BaseModel):
    """Token plus the profile of the authenticated user."""
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", serialization_alias="tokenType")
    expires_in: int = Field(..., description="Access token expiration in seconds", serialization_alias="expiresIn")
    user: UserResponse
