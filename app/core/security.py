"""Password hashing and the bearer token codec (issue/decode of owner ids)."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings, get_settings

# Min/max lengths for name and password validation.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class DecodeFailure:
    """A token that could not be turned into an owner id."""

    reason: str


class TokenCodec:
    """
    Issues and verifies signed bearer tokens that carry a resource owner id.

    Tokens are JWTs with the owner id in ``sub``. ``decode`` never raises:
    every unusable token (empty, malformed, foreign key, expired, bad payload)
    comes back as a DecodeFailure.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, owner_id: int) -> str:
        """Create a signed token asserting ``owner_id``."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(owner_id),
            "iat": now,
            "exp": now + self._expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str | None) -> int | DecodeFailure:
        """Return the owner id asserted by ``token`` or a DecodeFailure."""
        if not token:
            return DecodeFailure("empty token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            return DecodeFailure("token expired")
        except jwt.PyJWTError as e:
            return DecodeFailure(f"invalid token: {e.__class__.__name__}")
        sub = payload.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError):
            return DecodeFailure("invalid token payload")


def get_token_codec() -> TokenCodec:
    """Dependency: codec bound to the current settings."""
    return TokenCodec.from_settings(get_settings())
