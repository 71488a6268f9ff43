"""Shared fixtures: in-memory SQLite database and a TestClient wired to it."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import TokenCodec
from app.main import app
from app.models import Base

# One connection shared by every session so the in-memory database survives between them.
engine_test = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine_test)

NAME = "NAME"
EMAIL = "test@test.com"
PASSWORD = "12345asbcd"
WRONG_TOKEN = "asdfasdf"


def reset_schema() -> None:
    """Drop and recreate all tables for test isolation."""
    Base.metadata.drop_all(bind=engine_test)
    Base.metadata.create_all(bind=engine_test)


def new_session() -> Session:
    return TestingSessionLocal()


def token_codec() -> TokenCodec:
    """Codec with the same secret the app verifies with."""
    return TokenCodec.from_settings(get_settings())


def auth_header(token: str) -> dict[str, str]:
    return {"authorization": f"Bearer {token}"}


def make_client() -> TestClient:
    """TestClient whose requests each get a fresh session on the test database."""

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def clear_overrides() -> None:
    app.dependency_overrides.clear()
