"""Input/output contracts for :class:`pawpong.services.auth.service.AuthService`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pawpong.models.enums import Role
from pawpong.services._shared.accounts import AccountView
from pawpong.services._shared.ports import TokenPair

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for local login.

    :param email: Account email (normalized by the repository).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT as received from the client.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param account_id: Token ``sub`` of the caller.
    :type account_id: int | str
    :param role: Token ``role`` of the caller.
    :type role: Role | str
    """

    account_id: int | str
    role: Role | str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthResult:
    """
    Token pair plus the normalized account it was issued for.

    :param tokens: Freshly issued pair.
    :param user: Account snapshot.
    :param message: Client-facing success message.
    """

    tokens: TokenPair
    user: AccountView
    message: str

    def to_payload(self) -> dict[str, Any]:
        """Render the body shared by login, registration and social completion."""
        return {
            "accessToken": self.tokens.access_token,
            "refreshToken": self.tokens.refresh_token,
            "accessTokenExpiresIn": self.tokens.access_token_expires_in,
            "refreshTokenExpiresIn": self.tokens.refresh_token_expires_in,
            "userInfo": self.user.to_user_info(),
            "message": self.message,
        }
