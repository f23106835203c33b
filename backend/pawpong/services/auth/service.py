"""
AuthService
===========

Session lifecycle for adopter and breeder accounts: local login, refresh
rotation, logout, and the shared tail every token-granting flow ends with.

The account table is chosen by the ``role`` claim; both tables store a single
refresh-token hash, so issuing a pair always invalidates the previous one.
"""

from __future__ import annotations

import logging

from pawpong.models.enums import AccountStatus, Role
from pawpong.services._shared.accounts import Account, view_of
from pawpong.services._shared.base import BaseService
from pawpong.services._shared.errors import UnauthorizedError
from pawpong.services._shared.ports import (
    REFRESH_TOKEN_TYPE,
    RefreshTokenHasher,
    TokenDecodeError,
    TokenErrorKind,
    TokenIssuer,
    TokenPair,
)
from pawpong.services.auth.dto import AuthResult, LoginIn, LogoutIn, RefreshIn
from pawpong.uow.base import UnitOfWork

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_SUSPENDED = "Account is suspended"

TOKEN_ERROR_MESSAGES: dict[TokenErrorKind, str] = {
    TokenErrorKind.EXPIRED: "리프레시 토큰이 만료되었습니다.",
    TokenErrorKind.MALFORMED: "잘못된 형식의 토큰입니다.",
    TokenErrorKind.INVALID: "유효하지 않은 토큰입니다.",
}
NOT_A_REFRESH_TOKEN = "리프레시 토큰이 아닙니다."
INVALID_ROLE = "유효하지 않은 사용자 역할입니다."
ACCOUNT_NOT_FOUND = "사용자를 찾을 수 없습니다."
LOGGED_OUT = "로그아웃된 세션입니다. 다시 로그인해주세요."
TOKEN_MISMATCH = "리프레시 토큰이 일치하지 않습니다."
TOKEN_ALREADY_USED = "이미 사용된 리프레시 토큰입니다."

LOGIN_MESSAGE = "로그인이 완료되었습니다."
SOCIAL_LOGIN_MESSAGE = "소셜 로그인이 완료되었습니다."


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    :param token_issuer: Signs and verifies JWTs.
    :type token_issuer: TokenIssuer
    :param refresh_hasher: One-way hash applied to refresh tokens before they
        are stored.
    :type refresh_hasher: RefreshTokenHasher
    """

    def __init__(
        self,
        *,
        token_issuer: TokenIssuer,
        refresh_hasher: RefreshTokenHasher,
    ) -> None:
        self.tokens = token_issuer
        self.hasher = refresh_hasher

    # ------------------------------------------------------------------ #
    # Session issuance
    # ------------------------------------------------------------------ #

    def issue_session(self, uow: UnitOfWork, account: Account) -> TokenPair:
        """
        Issue a pair for ``account`` and make its refresh token the only valid one.

        Must run inside a read-write unit of work; the account must already
        have a primary key.

        :param uow: Open read-write unit of work.
        :param account: Adopter or breeder.
        :returns: The new pair.
        """
        role = Role(account.role)
        pair = self.tokens.issue(account.id, account.email, role.value)
        repo = uow.accounts(role)
        repo.set_refresh_token(account.id, self.hasher.hash(pair.refresh_token))
        repo.touch_activity(account, self.now_utc())
        return pair

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResult:
        """
        Authenticate local credentials and issue a fresh token pair.

        Adopters are searched before breeders.

        :param dto: Login input.
        :returns: Tokens and account info.
        :raises UnauthorizedError: On unknown email, missing or wrong password,
            or a non-active account.
        """
        with self.rw_uow() as uow:
            account: Account | None = uow.adopters.get_by_email(dto.email)
            if account is None:
                account = uow.breeders.get_by_email(dto.email)
            if account is None or not account.verify_password(dto.password):
                raise UnauthorizedError(INVALID_CREDENTIALS)
            if account.account_status is not AccountStatus.ACTIVE:
                raise UnauthorizedError(ACCOUNT_SUSPENDED)

            pair = self.issue_session(uow, account)
            view = view_of(account)

        logger.info("Login succeeded", extra={"account_id": view.user_id, "role": view.role.value})
        return AuthResult(tokens=pair, user=view, message=LOGIN_MESSAGE)

    # ------------------------------------------------------------------ #
    # Refresh with atomic rotation
    # ------------------------------------------------------------------ #

    def refresh_token(self, dto: RefreshIn) -> TokenPair:
        """
        Exchange a refresh token for a new pair.

        Steps
        -----
        1. Verify signature and expiry.
        2. Require ``type == "refresh"``.
        3. Resolve the account from ``role`` and ``sub``.
        4. Require a stored hash and verify the token against it.
        5. Issue a new pair and swap the stored hash only if it is still the
           one verified in step 4.

        Two requests presenting the same token race on step 5; exactly one
        wins and the other fails as already used.

        :param dto: Refresh input.
        :returns: The new pair.
        :raises UnauthorizedError: With a cause-specific message.
        """
        try:
            payload = self.tokens.decode(dto.refresh_token)
        except TokenDecodeError as exc:
            raise UnauthorizedError(TOKEN_ERROR_MESSAGES[exc.kind]) from exc

        if payload.get("type") != REFRESH_TOKEN_TYPE:
            raise UnauthorizedError(NOT_A_REFRESH_TOKEN)

        try:
            role = Role(payload.get("role"))
        except ValueError as exc:
            raise UnauthorizedError(INVALID_ROLE) from exc

        account_id = self._coerce_account_id(payload.get("sub"))

        with self.rw_uow() as uow:
            repo = uow.accounts(role)
            account = repo.get(account_id) if account_id is not None else None
            if account is None:
                raise UnauthorizedError(ACCOUNT_NOT_FOUND)
            if account.account_status is not AccountStatus.ACTIVE:
                raise UnauthorizedError(ACCOUNT_SUSPENDED)

            stored = account.refresh_token
            if not stored:
                raise UnauthorizedError(LOGGED_OUT)
            if not self.hasher.verify(dto.refresh_token, stored):
                raise UnauthorizedError(TOKEN_MISMATCH)

            pair = self.tokens.issue(account.id, account.email, role.value)
            if not repo.swap_refresh_token(
                account.id, expected=stored, new=self.hasher.hash(pair.refresh_token)
            ):
                raise UnauthorizedError(TOKEN_ALREADY_USED)
            repo.touch_activity(account, self.now_utc())

        logger.info("Token refreshed", extra={"account_id": account_id, "role": role.value})
        return pair

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Clear the stored refresh-token hash.

        Idempotent: an unknown or already logged-out account is not an error.
        """
        role = Role(dto.role)
        account_id = self._coerce_account_id(dto.account_id)
        if account_id is None:
            return
        with self.rw_uow() as uow:
            uow.accounts(role).set_refresh_token(account_id, None)
        logger.info("Logged out", extra={"account_id": account_id, "role": role.value})

    # ------------------------------------------------------------------ #
    # Social
    # ------------------------------------------------------------------ #

    def generate_social_login_tokens(self, account_id: int | str, role: Role | str) -> AuthResult:
        """
        Issue a session for an account found by social lookup.

        :raises UnauthorizedError: If the account vanished or is not active.
        """
        role = Role(role)
        key = self._coerce_account_id(account_id)
        with self.rw_uow() as uow:
            account = uow.accounts(role).get(key) if key is not None else None
            if account is None:
                raise UnauthorizedError(ACCOUNT_NOT_FOUND)
            if account.account_status is not AccountStatus.ACTIVE:
                raise UnauthorizedError(ACCOUNT_SUSPENDED)
            pair = self.issue_session(uow, account)
            view = view_of(account)

        logger.info(
            "Social login succeeded", extra={"account_id": view.user_id, "role": role.value}
        )
        return AuthResult(tokens=pair, user=view, message=SOCIAL_LOGIN_MESSAGE)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce_account_id(subject: object) -> int | None:
        try:
            return int(str(subject))
        except (TypeError, ValueError):
            return None
