"""Bearer credential extraction and service wiring dependencies."""

from typing import Annotated

from fastapi import Depends, Header
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import TokenCodec, get_token_codec
from app.services.user_store import UserStore
from app.services.users import UserService


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """
    Dependency: raw token from ``Authorization: Bearer <token>``.

    Returns None when the header is absent or blank. A header with another
    scheme or no credential yields an empty string, which the access check
    treats as a supplied but invalid token.
    """
    if authorization is None or not authorization.strip():
        return None
    scheme, credentials = get_authorization_scheme_param(authorization.strip())
    if scheme.lower() != "bearer":
        return ""
    return credentials.strip()


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> UserService:
    """Dependency: UserService bound to the request's DB session."""
    return UserService(UserStore(db), codec)
