"""Request/response schemas for the user resource."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)


def _validate_name(value: str | None) -> str | None:
    """Reject names that are blank once surrounding whitespace is removed."""
    if value is None:
        return None
    if not value.strip():
        raise ValueError("name must be non-empty")
    return value


class UserCreateRequest(BaseModel):
    """Body of POST /user. All fields required; unknown fields rejected."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Unique email address; cannot be changed later")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _validate_name(v)

    @field_validator("email")
    @classmethod
    def fold_email_case(cls, v: str) -> str:
        """Emails are compared and stored lower-cased, so uniqueness ignores case."""
        return v.lower()


class UserUpdateRequest(BaseModel):
    """Body of PATCH /user/{id}. Only mutable fields; email is not accepted."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(
        default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="New display name"
    )
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="New password"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _validate_name(v)


class UserResponse(BaseModel):
    """Public view of a user. The password never leaves the service."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""

    detail: str | list[dict[str, Any]]
