from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

REFRESH_TOKEN_TYPE = "refresh"
SOCIAL_REGISTRATION_TOKEN_TYPE = "social_registration"


class TokenErrorKind(str, Enum):
    """Why a token failed verification."""

    EXPIRED = "expired"
    MALFORMED = "malformed"
    INVALID = "invalid"


class TokenDecodeError(Exception):
    """
    Raised when a token cannot be verified.

    :param kind: Failure category; services map each kind to its own message.
    :type kind: TokenErrorKind
    """

    def __init__(self, kind: TokenErrorKind, message: str | None = None) -> None:
        super().__init__(message or kind.value)
        self.kind = kind


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access/refresh pair with their lifetimes in seconds.

    :param access_token: Signed access token (no ``type`` claim).
    :param refresh_token: Signed refresh token (``type == "refresh"``).
    :param access_token_expires_in: Access lifetime, seconds.
    :param refresh_token_expires_in: Refresh lifetime, seconds.
    """

    access_token: str
    refresh_token: str
    access_token_expires_in: int
    refresh_token_expires_in: int


class TokenIssuer(Protocol):
    """Port for issuing and verifying signed tokens."""

    def issue(self, subject_id: int | str, email: str, role: str) -> TokenPair: ...

    def decode(self, token: str) -> dict[str, Any]: ...

    def issue_registration_token(
        self,
        *,
        provider: str,
        provider_id: str,
        email: str | None,
        name: str | None,
        profile_image: str | None = None,
    ) -> str: ...

    def decode_registration_token(self, token: str) -> dict[str, Any]: ...
