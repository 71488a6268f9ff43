"""User account operations: create, read, update and delete behind owner-only access."""

import logging

from app.core.security import TokenCodec, hash_password
from app.models import User
from app.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from app.services.access import (
    AccessOutcome,
    Allowed,
    IdentityMismatch,
    InvalidCredential,
    MissingCredential,
    decide_access,
)
from app.services.user_store import ConflictError, NotFoundError, UserStore

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Expected, request-scoped failure with the HTTP status it maps to."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingCredentialError(UserServiceError):
    status_code = 400


class InvalidCredentialError(UserServiceError):
    status_code = 401


class IdentityMismatchError(UserServiceError):
    status_code = 403


class UserNotFoundError(UserServiceError):
    status_code = 404


class EmailConflictError(UserServiceError):
    status_code = 409


def _to_public(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def _raise_for_denied(outcome: AccessOutcome, requested_id: int) -> int:
    """Return the owner id for Allowed; raise the matching error otherwise."""
    if isinstance(outcome, Allowed):
        return outcome.owner_id
    if isinstance(outcome, MissingCredential):
        raise MissingCredentialError("Authorization header is missing")
    if isinstance(outcome, InvalidCredential):
        logger.info(
            "Rejected invalid credential",
            extra={"user_id": requested_id, "reason": outcome.reason},
        )
        raise InvalidCredentialError("Invalid or expired token")
    if isinstance(outcome, IdentityMismatch):
        logger.warning(
            "Token owner does not match requested user",
            extra={"owner_id": outcome.owner_id, "user_id": requested_id},
        )
        raise IdentityMismatchError("Token does not grant access to this user")
    raise TypeError(f"Unknown access outcome: {outcome!r}")


class UserService:
    """
    Orchestrates the access decision and the store.

    read, update and delete run the same gate first: credential presence,
    token validity, identity match. Only an Allowed request reaches the store,
    so a caller whose token names someone else never learns whether the
    requested id exists.
    """

    def __init__(self, store: UserStore, codec: TokenCodec) -> None:
        self.store = store
        self.codec = codec

    def _authorize(self, requested_id: int, token: str | None) -> int:
        outcome = decide_access(token, requested_id, self.codec)
        return _raise_for_denied(outcome, requested_id)

    def create(self, data: UserCreateRequest) -> UserResponse:
        user = User(
            name=data.name,
            email=str(data.email),
            password_hash=hash_password(data.password),
        )
        try:
            user = self.store.insert(user)
        except ConflictError as e:
            logger.info("Rejected duplicate email on create")
            raise EmailConflictError("Email is already registered") from e
        logger.info("Created user", extra={"user_id": user.id})
        return _to_public(user)

    def read(self, requested_id: int, token: str | None) -> UserResponse:
        self._authorize(requested_id, token)
        try:
            user = self.store.find_by_id(requested_id)
        except NotFoundError as e:
            raise UserNotFoundError("User not found") from e
        return _to_public(user)

    def update(
        self,
        requested_id: int,
        token: str | None,
        changes: UserUpdateRequest | None = None,
    ) -> UserResponse:
        """Apply only the supplied mutable fields (name, password)."""
        self._authorize(requested_id, token)
        values: dict[str, str] = {}
        if changes is not None:
            supplied = changes.model_dump(exclude_unset=True, exclude_none=True)
            if "name" in supplied:
                values["name"] = supplied["name"]
            if "password" in supplied:
                values["password_hash"] = hash_password(supplied["password"])
        try:
            user = self.store.update(requested_id, values)
        except NotFoundError as e:
            raise UserNotFoundError("User not found") from e
        logger.info("Updated user", extra={"user_id": requested_id, "fields": sorted(values)})
        return _to_public(user)

    def delete(self, requested_id: int, token: str | None) -> None:
        self._authorize(requested_id, token)
        try:
            self.store.remove(requested_id)
        except NotFoundError as e:
            raise UserNotFoundError("User not found") from e
        logger.info("Deleted user", extra={"user_id": requested_id})
