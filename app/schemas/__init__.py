"""Pydantic request/response schemas."""

from app.schemas.health import HealthResponse
from app.schemas.users import (
    ErrorResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
