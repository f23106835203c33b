"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app

from pawpong.api.deps import (
    current_identity,
    load_json,
    require_auth,
    require_role,
    success_response,
    timing,
    translate_service_errors,
)
from pawpong.core.extensions import limiter
from pawpong.schemas import (
    AdopterRegisterSchema,
    BreederDocumentsSchema,
    BreederRegisterSchema,
    CheckEmailSchema,
    CheckNicknameSchema,
    LoginSchema,
    RefreshSchema,
    SocialCheckUserSchema,
    SocialCompleteSchema,
    TokenResponseSchema,
)
from pawpong.services import (
    AdopterRegistrationIn,
    BreederDocumentsIn,
    BreederRegistrationIn,
    LoginIn,
    LogoutIn,
    RefreshIn,
    SocialRegistrationIn,
)
from pawpong.services.wiring import (
    build_auth_service,
    build_registration_service,
    build_social_auth_service,
    build_verification_service,
)

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
adopter_register_schema = AdopterRegisterSchema()
breeder_register_schema = BreederRegisterSchema()
check_email_schema = CheckEmailSchema()
check_nickname_schema = CheckNicknameSchema()
social_check_schema = SocialCheckUserSchema()
social_complete_schema = SocialCompleteSchema()
documents_schema = BreederDocumentsSchema()
token_schema = TokenResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


# --------------------------------------------------------------------------- #
# Local accounts
# --------------------------------------------------------------------------- #


@bp.post("/register/adopter")
@timing
@translate_service_errors
def register_adopter():
    """Create an adopter account and open its first session."""

    data = load_json(adopter_register_schema)
    service = build_registration_service()
    result = service.register_adopter(AdopterRegistrationIn(**data))
    return success_response(result.to_payload(), result.message, status=201)


@bp.post("/register/breeder")
@timing
@translate_service_errors
def register_breeder():
    """Create a breeder account (verification pending) and open its first session."""

    data = load_json(breeder_register_schema)
    data["breeds"] = tuple(data.get("breeds") or ())
    service = build_registration_service()
    result = service.register_breeder(BreederRegistrationIn(**data))
    return success_response(result.to_payload(), result.message, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
@translate_service_errors
def login():
    """Authenticate email and password."""

    data = load_json(login_schema)
    result = build_auth_service().login(LoginIn(**data))
    return success_response(result.to_payload(), result.message)


# --------------------------------------------------------------------------- #
# Session
# --------------------------------------------------------------------------- #


@bp.post("/refresh")
@timing
@translate_service_errors
def refresh():
    """Rotate the refresh token and return a new pair."""

    data = load_json(refresh_schema)
    pair = build_auth_service().refresh_token(RefreshIn(**data))
    return success_response(token_schema.dump(pair), "토큰이 재발급되었습니다.")


@bp.post("/logout")
@require_auth
@timing
@translate_service_errors
def logout():
    """Invalidate the caller's refresh token."""

    account_id, role = current_identity()
    service = build_auth_service()
    service.logout(LogoutIn(account_id=account_id, role=role))
    return success_response(None, "로그아웃되었습니다.")


# --------------------------------------------------------------------------- #
# Duplicate checks
# --------------------------------------------------------------------------- #


@bp.post("/check-email")
@timing
def check_email():
    data = load_json(check_email_schema)
    is_duplicate = build_registration_service().check_email_duplicate(data["email"])
    message = "이미 가입된 이메일입니다." if is_duplicate else "사용 가능한 이메일입니다."
    return success_response({"isDuplicate": is_duplicate}, message)


@bp.post("/check-nickname")
@timing
def check_nickname():
    data = load_json(check_nickname_schema)
    is_duplicate = build_registration_service().check_nickname_duplicate(data["nickname"])
    message = "이미 사용 중인 닉네임입니다." if is_duplicate else "사용 가능한 닉네임입니다."
    return success_response({"isDuplicate": is_duplicate}, message)


# --------------------------------------------------------------------------- #
# Social sign-up
# --------------------------------------------------------------------------- #


@bp.post("/social/check-user")
@timing
@translate_service_errors
def social_check_user():
    """Report whether a provider identity is already linked."""

    data = load_json(social_check_schema)
    result = build_social_auth_service().check_social_user(
        data["provider"], data["provider_id"]
    )
    message = "가입된 사용자입니다." if result.exists else "미가입 사용자입니다."
    return success_response(result.to_payload(), message)


@bp.post("/social/complete")
@timing
@translate_service_errors
def social_complete():
    """Complete a social sign-up started by an OAuth callback."""

    data = load_json(social_complete_schema)
    data["breeds"] = tuple(data.get("breeds") or ())
    service = build_social_auth_service()
    result = service.complete_social_registration(SocialRegistrationIn(**data))
    return success_response(result.to_payload(), result.message)


# --------------------------------------------------------------------------- #
# Breeder verification
# --------------------------------------------------------------------------- #


@bp.post("/breeder/submit-documents")
@require_role("breeder")
@timing
@translate_service_errors
def submit_documents():
    """Submit verification documents for the calling breeder."""

    data = load_json(documents_schema)
    breeder_id, _ = current_identity()
    service = build_verification_service()
    result = service.submit_breeder_documents(BreederDocumentsIn(breeder_id=breeder_id, **data))
    return success_response(result.to_payload(), "서류가 성공적으로 제출되었습니다.")
