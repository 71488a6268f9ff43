"""Owner-only access decision for requests that address a user by id.

A request is classified in a fixed order: credential presence, then token
validity, then identity match. Whether the addressed user exists is decided
later by the store, only for requests that reach ``Allowed``.
"""

from dataclasses import dataclass
from typing import Union

from app.core.security import DecodeFailure, TokenCodec


@dataclass(frozen=True)
class MissingCredential:
    """No bearer token was supplied."""


@dataclass(frozen=True)
class InvalidCredential:
    """A token was supplied but could not be decoded or verified."""

    reason: str = ""


@dataclass(frozen=True)
class IdentityMismatch:
    """The token is valid but names a different owner than the path."""

    owner_id: int
    requested_id: int


@dataclass(frozen=True)
class Allowed:
    """The token owner is the addressed user."""

    owner_id: int


AccessOutcome = Union[MissingCredential, InvalidCredential, IdentityMismatch, Allowed]


def decide_access(token: str | None, requested_id: int, codec: TokenCodec) -> AccessOutcome:
    """Map (token, requested id) to exactly one AccessOutcome. First match wins."""
    if token is None:
        return MissingCredential()
    decoded = codec.decode(token)
    if isinstance(decoded, DecodeFailure):
        return InvalidCredential(reason=decoded.reason)
    if decoded != requested_id:
        return IdentityMismatch(owner_id=decoded, requested_id=requested_id)
    return Allowed(owner_id=decoded)
