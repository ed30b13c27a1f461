"""
Base Schema Classes for Pydantic Models

JSON bodies use camelCase keys on the wire. Every schema also accepts its
snake_case field names on input.

RULE: All response schemas that use `from_attributes=True` MUST inherit from BaseResponseSchema.
"""

from decimal import Decimal
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


T = TypeVar("T")

# Quantities are stored as Decimal but travel as JSON numbers
Quantity = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class BaseResponseSchema(BaseModel):
    """
    Base class for all response schemas that read from ORM models.

    Usage:
        class ProductResponse(BaseResponseSchema):
            code: str
            conversion_factor: int
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        # Allow population by field name or alias
        populate_by_name=True,
    )


class BaseCreateSchema(BaseModel):
    """
    Base class for create/input schemas.

    No from_attributes needed since these don't read from ORM.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Allow extra fields to be ignored (forward compatibility)
        extra='ignore',
    )


class BaseUpdateSchema(BaseModel):
    """
    Base class for update/patch schemas.

    All fields are optional by default for partial updates.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


class ErrorDetail(BaseModel):
    """Field-level validation error."""
    field: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every JSON response."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[ErrorDetail]] = None


class MessageData(BaseModel):
    """Payload for operations that only report an outcome."""
    message: str
