"""ORM model for user accounts."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base

# Signed 32-bit range of the INTEGER key column (PostgreSQL INTEGER is 4 bytes).
USER_ID_MIN = -(2**31)
USER_ID_MAX = 2**31 - 1


class User(Base):
    """
    User account addressed by id and protected by owner-only bearer tokens.

    email is stored lower-cased, unique across all rows and never changed after creation.
    Ids come from an autoincrementing key so a deleted id is never handed out again.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
