"""
SocialAuthService
=================

Reconciles OAuth identities with local accounts.

- :meth:`SocialAuthService.handle_social_login` resolves a normalized
  provider profile to an existing account, or mints a pending identity
  (temp id plus signed registration token) for a new one.
- :meth:`SocialAuthService.complete_social_registration` creates the
  adopter or breeder account for that pending identity and opens a session.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from pawpong.infra.oauth.base import OAuthProfile
from pawpong.models.adopter import Adopter
from pawpong.models.breeder import Breeder
from pawpong.models.enums import (
    AuthProvider,
    BreederLevel,
    PetType,
    Role,
    VerificationPlan,
    VerificationStatus,
)
from pawpong.services._shared.accounts import (
    Account,
    email_taken,
    find_social_account,
    parse_choice,
    view_of,
)
from pawpong.services._shared.base import BaseService
from pawpong.services._shared.errors import (
    BadRequestError,
    ConflictError,
    UnauthorizedError,
    violates,
)
from pawpong.services._shared.ports import TokenDecodeError, TokenErrorKind, TokenIssuer
from pawpong.services.auth.dto import AuthResult
from pawpong.services.auth.service import AuthService
from pawpong.services.social.dto import (
    PendingSocialIdentity,
    SocialLoginResult,
    SocialRegistrationIn,
    SocialUserCheckOut,
)
from pawpong.uow.base import UnitOfWork

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp"

INVALID_TEMP_ID = "유효하지 않은 임시 ID입니다."
UNSUPPORTED_PROVIDER = "지원하지 않는 소셜 로그인 제공자입니다."
REGISTRATION_TOKEN_EXPIRED = "소셜 가입 토큰이 만료되었습니다. 다시 로그인해주세요."
REGISTRATION_TOKEN_INVALID = "유효하지 않은 소셜 가입 토큰입니다."
ALREADY_ADOPTER = "이미 입양자로 가입된 소셜 계정입니다."
ALREADY_BREEDER = "이미 브리더로 가입된 소셜 계정입니다."
EMAIL_AND_NAME_REQUIRED = "이메일과 이름은 필수입니다."
EMAIL_IN_USE = "이미 사용 중인 이메일입니다."
NICKNAME_IN_USE = "이미 사용 중인 닉네임입니다."
INVALID_ROLE = "유효하지 않은 사용자 역할입니다."
BREEDER_NAME_REQUIRED = "브리더 상호명은 필수입니다."
CITY_REQUIRED = "시/도는 필수입니다."
DISTRICT_REQUIRED = "시/군/구는 필수입니다."
BREEDS_REQUIRED = "품종을 최소 1개 이상 선택해주세요."
INVALID_PET_TYPE = "유효하지 않은 반려동물 종류입니다."
INVALID_PLAN = "유효하지 않은 인증 플랜입니다."
INVALID_LEVEL = "유효하지 않은 브리더 레벨입니다."

REGISTRATION_MESSAGE = "소셜 회원가입이 완료되었습니다."


class SocialAuthService(BaseService):
    """
    Social login lookup and sign-up completion.

    :param sessions: Issues and persists token pairs.
    :type sessions: AuthService
    :param token_issuer: Signs and verifies registration tokens.
    :type token_issuer: TokenIssuer
    """

    def __init__(
        self,
        *,
        sessions: AuthService,
        token_issuer: TokenIssuer,
    ) -> None:
        self.sessions = sessions
        self.tokens = token_issuer

    # ------------------------------------------------------------------ #
    # Temp id codec
    # ------------------------------------------------------------------ #

    def build_temp_id(self, provider: str, provider_id: str) -> str:
        """Return ``temp_{provider}_{providerId}_{epochMillis}``."""
        millis = int(self.now_utc().timestamp() * 1000)
        return f"{TEMP_ID_PREFIX}_{provider}_{provider_id}_{millis}"

    @staticmethod
    def parse_temp_id(temp_id: str | None) -> PendingSocialIdentity:
        """
        Recover ``(provider, provider_id)`` from a temp id.

        :raises BadRequestError: Unless the id has exactly four
            underscore-separated parts starting with ``temp`` and naming a
            supported provider.
        """
        parts = (temp_id or "").split("_")
        if len(parts) != 4 or parts[0] != TEMP_ID_PREFIX or not parts[2]:
            raise BadRequestError(INVALID_TEMP_ID)
        provider = parse_choice(AuthProvider, parts[1], INVALID_TEMP_ID)
        return PendingSocialIdentity(provider=provider.value, provider_id=parts[2])

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def handle_social_login(self, profile: OAuthProfile) -> SocialLoginResult:
        """
        Resolve a provider profile to an account.

        Adopters are searched before breeders. When neither is linked, the
        result carries a temp id and a registration token instead of a user.

        :param profile: Normalized provider profile.
        :returns: Lookup outcome.
        """
        provider = parse_choice(AuthProvider, profile.provider, UNSUPPORTED_PROVIDER)
        with self.ro_uow() as uow:
            account = find_social_account(uow, provider, profile.provider_id)
            view = view_of(account) if account is not None else None

        if view is not None:
            logger.info(
                "Social identity matched",
                extra={
                    "provider": provider.value,
                    "account_id": view.user_id,
                    "role": view.role.value,
                },
            )
            return SocialLoginResult(needs_additional_info=False, user=view)

        logger.info("Social identity is new", extra={"provider": provider.value})
        return SocialLoginResult(
            needs_additional_info=True,
            temp_user_id=self.build_temp_id(provider.value, profile.provider_id),
            registration_token=self.tokens.issue_registration_token(
                provider=provider.value,
                provider_id=profile.provider_id,
                email=profile.email,
                name=profile.name,
                profile_image=profile.profile_image,
            ),
        )

    def check_social_user(self, provider: str, provider_id: str) -> SocialUserCheckOut:
        """
        Report whether ``(provider, provider_id)`` is linked to an account.

        :raises BadRequestError: For an unsupported provider.
        """
        parsed = parse_choice(AuthProvider, provider, UNSUPPORTED_PROVIDER)
        with self.ro_uow() as uow:
            account = find_social_account(uow, parsed, provider_id)
            if account is None:
                return SocialUserCheckOut(exists=False)
            return SocialUserCheckOut(
                exists=True,
                user_role=Role(account.role).value,
                user_id=str(account.id),
                email=account.email,
            )

    # ------------------------------------------------------------------ #
    # Completion
    # ------------------------------------------------------------------ #

    def complete_social_registration(self, dto: SocialRegistrationIn) -> AuthResult:
        """
        Create the account for a pending social identity and open a session.

        Steps
        -----
        1. Recover the identity from the registration token, else the temp id.
        2. Re-check both tables for the identity (it may have been linked
           since the callback).
        3. Validate the role.
        4. Require ``email`` and ``name``; the token's claims fill gaps.
        5. Enforce email uniqueness across both tables.
        6. Create the adopter or breeder with role-specific checks.
        7. Issue and persist a token pair.

        :raises BadRequestError: Malformed temp id, role, email or missing fields.
        :raises UnauthorizedError: Expired or forged registration token.
        :raises ConflictError: Identity, email or nickname already taken.
        """
        identity = self._resolve_identity(dto)
        provider = AuthProvider(identity.provider)

        email = dto.email or identity.email
        name = dto.name or identity.name
        profile_image = dto.profile_image or identity.profile_image

        with self.rw_uow() as uow:
            if uow.adopters.find_by_social(provider, identity.provider_id) is not None:
                raise ConflictError("Adopter", ALREADY_ADOPTER)
            if uow.breeders.find_by_social(provider, identity.provider_id) is not None:
                raise ConflictError("Breeder", ALREADY_BREEDER)

            role = parse_choice(Role, dto.role, INVALID_ROLE)
            if not email or not name:
                raise BadRequestError(EMAIL_AND_NAME_REQUIRED)
            if email_taken(uow, email):
                raise ConflictError(role.value.capitalize(), EMAIL_IN_USE)

            if role is Role.ADOPTER:
                account: Account = self._create_adopter(
                    uow, dto, identity, email=email, name=name, profile_image=profile_image
                )
            else:
                account = self._create_breeder(
                    uow, dto, identity, email=email, name=name, profile_image=profile_image
                )

            pair = self.sessions.issue_session(uow, account)
            view = view_of(account)

        logger.info(
            "Social registration completed",
            extra={"provider": provider.value, "account_id": view.user_id, "role": role.value},
        )
        return AuthResult(tokens=pair, user=view, message=REGISTRATION_MESSAGE)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _resolve_identity(self, dto: SocialRegistrationIn) -> PendingSocialIdentity:
        if not dto.registration_token:
            return self.parse_temp_id(dto.temp_id)
        try:
            claims = self.tokens.decode_registration_token(dto.registration_token)
        except TokenDecodeError as exc:
            message = (
                REGISTRATION_TOKEN_EXPIRED
                if exc.kind is TokenErrorKind.EXPIRED
                else REGISTRATION_TOKEN_INVALID
            )
            raise UnauthorizedError(message) from exc
        provider = parse_choice(AuthProvider, claims.get("provider"), REGISTRATION_TOKEN_INVALID)
        return PendingSocialIdentity(
            provider=provider.value,
            provider_id=str(claims["provider_id"]),
            email=claims.get("email"),
            name=claims.get("name"),
            profile_image=claims.get("profile_image"),
        )

    def _create_adopter(
        self,
        uow: UnitOfWork,
        dto: SocialRegistrationIn,
        identity: PendingSocialIdentity,
        *,
        email: str,
        name: str,
        profile_image: str | None,
    ) -> Adopter:
        nickname = (dto.nickname or name).strip()
        if uow.adopters.nickname_exists(nickname):
            raise ConflictError("Adopter", NICKNAME_IN_USE)

        try:
            adopter = Adopter(
                email=email,
                full_name=name,
                nickname=nickname,
                phone=dto.phone,
                profile_image_url=profile_image,
                auth_provider=AuthProvider(identity.provider),
                provider_user_id=identity.provider_id,
                provider_email=identity.email or email,
                marketing_agreed=dto.marketing_agreed,
            )
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc

        try:
            return uow.adopters.add(adopter)
        except IntegrityError as exc:
            if violates(exc, "uq_adopters_nickname") or violates(exc, "adopters.nickname"):
                raise ConflictError("Adopter", NICKNAME_IN_USE) from exc
            raise

    def _create_breeder(
        self,
        uow: UnitOfWork,
        dto: SocialRegistrationIn,
        identity: PendingSocialIdentity,
        *,
        email: str,
        name: str,
        profile_image: str | None,
    ) -> Breeder:
        if not (dto.breeder_name or "").strip():
            raise BadRequestError(BREEDER_NAME_REQUIRED)
        if not (dto.city or "").strip():
            raise BadRequestError(CITY_REQUIRED)
        if not (dto.district or "").strip():
            raise BadRequestError(DISTRICT_REQUIRED)
        breeds = [b.strip() for b in dto.breeds if b and b.strip()]
        if not breeds:
            raise BadRequestError(BREEDS_REQUIRED)

        pet_type = parse_choice(PetType, dto.pet_type, INVALID_PET_TYPE) if dto.pet_type else None
        plan = parse_choice(
            VerificationPlan, dto.plan, INVALID_PLAN, default=VerificationPlan.BASIC
        )
        level = parse_choice(BreederLevel, dto.level, INVALID_LEVEL, default=BreederLevel.NEW)

        try:
            breeder = Breeder(
                email=email,
                name=name,
                breeder_name=dto.breeder_name.strip(),
                phone=dto.phone,
                profile_image_url=profile_image,
                introduction=dto.introduction,
                city=dto.city.strip(),
                district=dto.district.strip(),
                pet_type=pet_type,
                breeds=breeds,
                marketing_agreed=dto.marketing_agreed,
                social_provider=AuthProvider(identity.provider),
                social_provider_id=identity.provider_id,
                social_email=identity.email or email,
                verification_status=VerificationStatus.PENDING,
                verification_plan=plan,
                verification_level=level,
                verification_documents=[],
            )
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc
        return uow.breeders.add(breeder)
