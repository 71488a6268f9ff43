"""SQLAlchemy declarative Base shared by the ORM models and schema bootstrap."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
