"""User resource: create is open, read/update/delete are owner-only."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Response, status

from app.api.v1.auth import get_bearer_token, get_user_service
from app.schemas.users import (
    ErrorResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from app.services.users import UserService

router = APIRouter()

_OWNER_ONLY_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing authorization header or invalid input"},
    401: {"model": ErrorResponse, "description": "Malformed, foreign or expired token"},
    403: {"model": ErrorResponse, "description": "Token belongs to another user"},
    404: {"model": ErrorResponse, "description": "User does not exist"},
}


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
def create_user(
    body: UserCreateRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create an account. The response never contains the password."""
    return service.create(body)


@router.get("/{user_id}", response_model=UserResponse, responses=_OWNER_ONLY_RESPONSES)
def get_user(
    user_id: int,
    token: Annotated[str | None, Depends(get_bearer_token)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Return the caller's own account. Include the token as: Bearer <token>"""
    return service.read(user_id, token)


@router.patch("/{user_id}", response_model=UserResponse, responses=_OWNER_ONLY_RESPONSES)
def update_user(
    user_id: int,
    token: Annotated[str | None, Depends(get_bearer_token)],
    service: Annotated[UserService, Depends(get_user_service)],
    body: Annotated[UserUpdateRequest | None, Body()] = None,
) -> UserResponse:
    """Change name and/or password of the caller's own account. Email cannot be changed."""
    return service.update(user_id, token, body)


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, responses=_OWNER_ONLY_RESPONSES)
def delete_user(
    user_id: int,
    token: Annotated[str | None, Depends(get_bearer_token)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Delete the caller's own account. Later requests for this id return 404."""
    service.delete(user_id, token)
    return Response(status_code=status.HTTP_200_OK)
