# tests/unit/services/test_session_service.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pawpong.core.config import TestingConfig
from pawpong.infra.jwt.token_issuer import JWTTokenIssuer
from pawpong.models import AccountStatus, Role
from pawpong.repositories import AdopterRepository
from pawpong.services import AuthService, LoginIn, LogoutIn, RefreshIn
from pawpong.services._shared.errors import UnauthorizedError

from tests.factories.adopter import DEFAULT_PASSWORD, AdopterFactory
from tests.factories.breeder import BreederFactory


class RotatingGuard:
    """
    Hasher double that lets a concurrent refresh win between verify and swap.

    After a successful ``verify`` it overwrites the stored hash the way a
    second request presenting the same token would.
    """

    def __init__(self, inner, account_id: int) -> None:
        self.inner = inner
        self.account_id = account_id

    def hash(self, raw_token: str) -> str:
        return self.inner.hash(raw_token)

    def verify(self, raw_token: str, hashed_token: str | None) -> bool:
        ok = self.inner.verify(raw_token, hashed_token)
        if ok:
            AdopterRepository().set_refresh_token(self.account_id, self.inner.hash("winner"))
        return ok


def _login(service: AuthService, account) -> RefreshIn:
    result = service.login(LoginIn(email=account.email, password=DEFAULT_PASSWORD))
    return RefreshIn(refresh_token=result.tokens.refresh_token)


# -------------------------------- Login ------------------------------------ #
class TestLogin:
    def test_login_adopter_stores_hash_and_touches_activity(self, auth_service, refresh_guard):
        adopter = AdopterFactory()

        result = auth_service.login(LoginIn(email=adopter.email, password=DEFAULT_PASSWORD))

        assert result.user.role is Role.ADOPTER
        assert result.user.user_id == str(adopter.id)
        assert result.message == "로그인이 완료되었습니다."
        assert adopter.refresh_token != result.tokens.refresh_token
        assert refresh_guard.verify(result.tokens.refresh_token, adopter.refresh_token)
        assert adopter.last_activity_at is not None

    def test_login_falls_back_to_breeders(self, auth_service):
        breeder = BreederFactory()

        result = auth_service.login(LoginIn(email=breeder.email, password=DEFAULT_PASSWORD))

        assert result.user.role is Role.BREEDER
        assert result.user.nickname == breeder.breeder_name
        assert breeder.last_login_at is not None

    def test_login_payload_shape(self, auth_service):
        adopter = AdopterFactory(nickname="펫러버")
        payload = auth_service.login(
            LoginIn(email=adopter.email, password=DEFAULT_PASSWORD)
        ).to_payload()

        assert payload["accessTokenExpiresIn"] == 3600
        assert payload["refreshTokenExpiresIn"] == 604800
        assert payload["userInfo"]["nickname"] == "펫러버"
        assert payload["userInfo"]["userRole"] == "adopter"

    @pytest.mark.parametrize("password", ["wrong", ""])
    def test_login_wrong_password(self, auth_service, password):
        adopter = AdopterFactory()
        with pytest.raises(UnauthorizedError, match="Invalid credentials"):
            auth_service.login(LoginIn(email=adopter.email, password=password))

    def test_login_unknown_email(self, auth_service):
        with pytest.raises(UnauthorizedError, match="Invalid credentials"):
            auth_service.login(LoginIn(email="missing@example.com", password="x"))

    def test_social_only_account_cannot_log_in_with_password(self, auth_service):
        adopter = AdopterFactory(social=True, password_hash=None)
        assert adopter.password_hash is None
        with pytest.raises(UnauthorizedError, match="Invalid credentials"):
            auth_service.login(LoginIn(email=adopter.email, password=DEFAULT_PASSWORD))

    def test_login_suspended_account(self, auth_service):
        breeder = BreederFactory(account_status=AccountStatus.SUSPENDED)
        with pytest.raises(UnauthorizedError, match="Account is suspended"):
            auth_service.login(LoginIn(email=breeder.email, password=DEFAULT_PASSWORD))


# ------------------------------- Refresh ----------------------------------- #
class TestRefresh:
    def test_refresh_rotates_and_old_token_stops_working(self, auth_service):
        """R1 -> R2 succeeds; R1 afterwards fails; R2 still works."""
        adopter = AdopterFactory()
        first = _login(auth_service, adopter)

        second = auth_service.refresh_token(first)
        assert second.refresh_token != first.refresh_token

        with pytest.raises(UnauthorizedError, match="리프레시 토큰이 일치하지 않습니다."):
            auth_service.refresh_token(first)

        third = auth_service.refresh_token(RefreshIn(refresh_token=second.refresh_token))
        assert third.access_token

    def test_refresh_touches_activity(self, auth_service, session):
        breeder = BreederFactory()
        dto = _login(auth_service, breeder)
        breeder.last_login_at = datetime(2000, 1, 1, tzinfo=UTC)
        session.flush()

        auth_service.refresh_token(dto)

        assert breeder.last_login_at.year > 2000

    def test_expired_refresh_token(self, auth_service):
        adopter = AdopterFactory()
        past = datetime.now(UTC) - timedelta(days=8)
        old = JWTTokenIssuer(secret=TestingConfig.JWT_SECRET_KEY, clock=lambda: past).issue(
            adopter.id, adopter.email, "adopter"
        )
        with pytest.raises(UnauthorizedError, match="리프레시 토큰이 만료되었습니다."):
            auth_service.refresh_token(RefreshIn(refresh_token=old.refresh_token))

    def test_malformed_refresh_token(self, auth_service):
        with pytest.raises(UnauthorizedError, match="잘못된 형식의 토큰입니다."):
            auth_service.refresh_token(RefreshIn(refresh_token="garbage"))

    def test_foreign_signature(self, auth_service):
        forged = JWTTokenIssuer(secret="some-other-secret-value-123456").issue(
            1, "a@example.com", "adopter"
        )
        with pytest.raises(UnauthorizedError, match="유효하지 않은 토큰입니다."):
            auth_service.refresh_token(RefreshIn(refresh_token=forged.refresh_token))

    def test_access_token_is_not_a_refresh_token(self, auth_service):
        adopter = AdopterFactory()
        result = auth_service.login(LoginIn(email=adopter.email, password=DEFAULT_PASSWORD))
        with pytest.raises(UnauthorizedError, match="리프레시 토큰이 아닙니다."):
            auth_service.refresh_token(RefreshIn(refresh_token=result.tokens.access_token))

    def test_unknown_role(self, auth_service, token_issuer):
        pair = token_issuer.issue(1, "a@example.com", "admin")
        with pytest.raises(UnauthorizedError, match="유효하지 않은 사용자 역할입니다."):
            auth_service.refresh_token(RefreshIn(refresh_token=pair.refresh_token))

    def test_missing_account(self, auth_service, token_issuer):
        pair = token_issuer.issue(987654, "gone@example.com", "breeder")
        with pytest.raises(UnauthorizedError, match="사용자를 찾을 수 없습니다."):
            auth_service.refresh_token(RefreshIn(refresh_token=pair.refresh_token))

    def test_refresh_after_logout(self, auth_service):
        adopter = AdopterFactory()
        dto = _login(auth_service, adopter)
        auth_service.logout(LogoutIn(account_id=str(adopter.id), role="adopter"))

        with pytest.raises(UnauthorizedError, match="로그아웃된 세션입니다."):
            auth_service.refresh_token(dto)

    def test_refresh_rejects_suspended_account(self, auth_service, session):
        adopter = AdopterFactory()
        dto = _login(auth_service, adopter)
        adopter.account_status = AccountStatus.SUSPENDED
        session.flush()

        with pytest.raises(UnauthorizedError, match="Account is suspended"):
            auth_service.refresh_token(dto)

    def test_second_login_invalidates_first_session(self, auth_service):
        adopter = AdopterFactory()
        first = _login(auth_service, adopter)
        _login(auth_service, adopter)

        with pytest.raises(UnauthorizedError, match="리프레시 토큰이 일치하지 않습니다."):
            auth_service.refresh_token(first)

    def test_concurrent_refresh_loses_the_swap(self, token_issuer, refresh_guard):
        """Of two refreshes interleaving on the same stored hash, only one wins."""
        adopter = AdopterFactory()
        plain = AuthService(token_issuer=token_issuer, refresh_hasher=refresh_guard)
        dto = _login(plain, adopter)

        racing = AuthService(
            token_issuer=token_issuer,
            refresh_hasher=RotatingGuard(refresh_guard, adopter.id),
        )
        with pytest.raises(UnauthorizedError, match="이미 사용된 리프레시 토큰입니다."):
            racing.refresh_token(dto)


# -------------------------------- Logout ----------------------------------- #
class TestLogout:
    def test_logout_clears_hash(self, auth_service):
        breeder = BreederFactory()
        _login(auth_service, breeder)
        assert breeder.refresh_token is not None

        auth_service.logout(LogoutIn(account_id=breeder.id, role=Role.BREEDER))

        assert breeder.refresh_token is None

    def test_logout_is_idempotent(self, auth_service):
        adopter = AdopterFactory()
        auth_service.logout(LogoutIn(account_id=adopter.id, role="adopter"))
        auth_service.logout(LogoutIn(account_id=adopter.id, role="adopter"))
        auth_service.logout(LogoutIn(account_id="not-a-number", role="adopter"))
        assert adopter.refresh_token is None


# ------------------------------ Social tokens ------------------------------ #
class TestSocialLoginTokens:
    def test_generate_social_login_tokens(self, auth_service, refresh_guard):
        adopter = AdopterFactory(social=True)

        result = auth_service.generate_social_login_tokens(str(adopter.id), "adopter")

        assert result.message == "소셜 로그인이 완료되었습니다."
        assert refresh_guard.verify(result.tokens.refresh_token, adopter.refresh_token)
        assert adopter.last_activity_at is not None

    def test_generate_social_login_tokens_missing_account(self, auth_service):
        with pytest.raises(UnauthorizedError):
            auth_service.generate_social_login_tokens(424242, Role.BREEDER)
