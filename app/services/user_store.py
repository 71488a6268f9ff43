"""Persistence for user accounts on top of a SQLAlchemy session."""

from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.models.user import USER_ID_MAX, USER_ID_MIN

# Columns that may change after creation.
MUTABLE_FIELDS = frozenset({"name", "password_hash"})


class UserStoreError(Exception):
    """Base for expected store outcomes (not database faults)."""


class ConflictError(UserStoreError):
    """Raised when an insert would duplicate an existing email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class NotFoundError(UserStoreError):
    """Raised when no user exists with the given id."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


def _check_key(user_id: int) -> None:
    # An id the key column cannot hold cannot name a stored row.
    if not USER_ID_MIN <= user_id <= USER_ID_MAX:
        raise NotFoundError(user_id)


class UserStore:
    """
    CRUD over the users table.

    Every write is a single statement so that concurrent requests cannot slip
    between a check and the write: email uniqueness is enforced by the unique
    index, and update/delete count affected rows instead of looking up first.
    Database errors other than the unique violation propagate unchanged.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, user: User) -> User:
        """Persist a new user. Raises ConflictError if the email is taken."""
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(user.email) from e
        self.session.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> User:
        """Return the user with ``user_id``. Raises NotFoundError if absent."""
        _check_key(user_id)
        user = self.session.get(User, user_id, populate_existing=True)
        if user is None:
            raise NotFoundError(user_id)
        return user

    def update(self, user_id: int, values: dict[str, Any]) -> User:
        """
        Apply ``values`` to the user with ``user_id`` and return the stored row.

        Only MUTABLE_FIELDS may be given. An empty ``values`` reads the current
        row. Raises NotFoundError if no row matched.
        """
        unknown = set(values) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        _check_key(user_id)
        if not values:
            return self.find_by_id(user_id)
        result = self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFoundError(user_id)
        self.session.commit()
        return self.find_by_id(user_id)

    def remove(self, user_id: int) -> None:
        """Hard-delete the user with ``user_id``. Raises NotFoundError if absent."""
        _check_key(user_id)
        result = self.session.execute(delete(User).where(User.id == user_id))
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFoundError(user_id)
        self.session.commit()
