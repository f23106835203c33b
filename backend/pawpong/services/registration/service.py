"""
RegistrationService
===================

Local sign-up for adopters and breeders, plus the duplicate checks the
sign-up forms call before submitting.

- Email is unique across *both* account tables; the service checks before
  insert and the per-table constraints catch the remaining race.
- A successful sign-up opens a session straight away.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from pawpong.models.adopter import Adopter
from pawpong.models.breeder import Breeder
from pawpong.models.enums import BreederLevel, PetType, VerificationPlan, VerificationStatus
from pawpong.services._shared.accounts import email_taken, parse_choice, view_of
from pawpong.services._shared.base import BaseService
from pawpong.services._shared.errors import BadRequestError, ConflictError, violates
from pawpong.services.auth.dto import AuthResult
from pawpong.services.auth.service import AuthService
from pawpong.services.registration.dto import AdopterRegistrationIn, BreederRegistrationIn

logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists"
NICKNAME_IN_USE = "이미 사용 중인 닉네임입니다."
INVALID_PET_TYPE = "유효하지 않은 반려동물 종류입니다."
INVALID_PLAN = "유효하지 않은 인증 플랜입니다."
INVALID_LEVEL = "유효하지 않은 브리더 레벨입니다."

ADOPTER_REGISTERED = "입양자 회원가입이 완료되었습니다."
BREEDER_REGISTERED = "브리더 회원가입이 완료되었습니다."


class RegistrationService(BaseService):
    """
    Orchestrates local account creation.

    :param sessions: Opens the first session of the new account.
    :type sessions: AuthService
    """

    def __init__(self, *, sessions: AuthService) -> None:
        self.sessions = sessions

    # ------------------------------------------------------------------ #
    # Sign-up
    # ------------------------------------------------------------------ #

    def register_adopter(self, dto: AdopterRegistrationIn) -> AuthResult:
        """
        Create an adopter and issue its first token pair.

        :param dto: Registration input.
        :type dto: :class:`AdopterRegistrationIn`
        :returns: Tokens and account info.
        :rtype: :class:`AuthResult`
        :raises ConflictError: Email used by any account, or nickname taken.
        :raises BadRequestError: Email or password unusable.
        """
        with self.rw_uow() as uow:
            if email_taken(uow, dto.email):
                raise ConflictError("Adopter", EMAIL_EXISTS)
            if uow.adopters.nickname_exists(dto.nickname):
                raise ConflictError("Adopter", NICKNAME_IN_USE)

            try:
                adopter = Adopter(
                    email=dto.email,
                    full_name=dto.name,
                    nickname=dto.nickname,
                    phone=dto.phone,
                    profile_image_url=dto.profile_image,
                    marketing_agreed=dto.marketing_agreed,
                )
                adopter.password = dto.password
            except ValueError as exc:
                raise BadRequestError(str(exc)) from exc

            try:
                uow.adopters.add(adopter)
            except IntegrityError as exc:
                if violates(exc, "uq_adopters_nickname") or violates(exc, "adopters.nickname"):
                    raise ConflictError("Adopter", NICKNAME_IN_USE) from exc
                if violates(exc, "uq_adopters_email") or violates(exc, "adopters.email"):
                    raise ConflictError("Adopter", EMAIL_EXISTS) from exc
                raise

            pair = self.sessions.issue_session(uow, adopter)
            view = view_of(adopter)

        logger.info("Adopter registered", extra={"account_id": view.user_id, "role": "adopter"})
        return AuthResult(tokens=pair, user=view, message=ADOPTER_REGISTERED)

    def register_breeder(self, dto: BreederRegistrationIn) -> AuthResult:
        """
        Create a breeder with a pending verification record and issue its
        first token pair.

        :raises ConflictError: Email used by any account.
        :raises BadRequestError: Unknown plan, level or pet type.
        """
        plan = parse_choice(
            VerificationPlan, dto.plan, INVALID_PLAN, default=VerificationPlan.BASIC
        )
        level = parse_choice(BreederLevel, dto.level, INVALID_LEVEL, default=BreederLevel.NEW)
        pet_type = parse_choice(PetType, dto.pet_type, INVALID_PET_TYPE) if dto.pet_type else None

        with self.rw_uow() as uow:
            if email_taken(uow, dto.email):
                raise ConflictError("Breeder", EMAIL_EXISTS)

            try:
                breeder = Breeder(
                    email=dto.email,
                    name=dto.name,
                    phone=dto.phone,
                    breeder_name=dto.breeder_name,
                    introduction=dto.introduction,
                    city=dto.city,
                    district=dto.district,
                    pet_type=pet_type,
                    breeds=[b.strip() for b in dto.breeds if b and b.strip()],
                    profile_image_url=dto.profile_image,
                    marketing_agreed=dto.marketing_agreed,
                    verification_status=VerificationStatus.PENDING,
                    verification_plan=plan,
                    verification_level=level,
                    verification_documents=[],
                )
                breeder.password = dto.password
            except ValueError as exc:
                raise BadRequestError(str(exc)) from exc

            try:
                uow.breeders.add(breeder)
            except IntegrityError as exc:
                if violates(exc, "uq_breeders_email") or violates(exc, "breeders.email"):
                    raise ConflictError("Breeder", EMAIL_EXISTS) from exc
                raise

            pair = self.sessions.issue_session(uow, breeder)
            view = view_of(breeder)

        logger.info("Breeder registered", extra={"account_id": view.user_id, "role": "breeder"})
        return AuthResult(tokens=pair, user=view, message=BREEDER_REGISTERED)

    # ------------------------------------------------------------------ #
    # Duplicate checks
    # ------------------------------------------------------------------ #

    def check_email_duplicate(self, email: str) -> bool:
        """Return ``True`` if any adopter or breeder already uses ``email``."""
        with self.ro_uow() as uow:
            return email_taken(uow, email)

    def check_nickname_duplicate(self, nickname: str) -> bool:
        """Return ``True`` if an adopter already uses ``nickname``."""
        with self.ro_uow() as uow:
            return uow.adopters.nickname_exists(nickname)
