"""
Unit tests for JWTTokenIssuer.

They decode with PyJWT directly so the claim layout is checked independently
of the issuer's own ``decode``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from pawpong.infra.jwt.token_issuer import JWTTokenIssuer
from pawpong.services._shared.ports import TokenDecodeError, TokenErrorKind

SECRET = "unit-test-secret-that-is-long-enough"
FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def _raw(token: str) -> dict:
    return jwt.decode(
        token, SECRET, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False}
    )


@pytest.fixture
def issuer() -> JWTTokenIssuer:
    return JWTTokenIssuer(secret=SECRET)


def test_issue_returns_pair_with_fixed_lifetimes(issuer):
    pair = issuer.issue(42, "a@example.com", "adopter")

    assert pair.access_token_expires_in == 3600
    assert pair.refresh_token_expires_in == 604800
    assert pair.access_token != pair.refresh_token


def test_access_and_refresh_claims(issuer):
    """Access carries no ``type``; refresh carries ``type == "refresh"``."""
    pair = issuer.issue(42, "a@example.com", "breeder")

    access = _raw(pair.access_token)
    refresh = _raw(pair.refresh_token)

    assert access["sub"] == "42"
    assert access["email"] == "a@example.com"
    assert access["role"] == "breeder"
    assert "type" not in access

    assert refresh["sub"] == "42"
    assert refresh["type"] == "refresh"


def test_expiry_is_relative_to_clock():
    issuer = JWTTokenIssuer(secret=SECRET, clock=lambda: FIXED_NOW)
    pair = issuer.issue("7", "b@example.com", "adopter")

    access = _raw(pair.access_token)
    refresh = _raw(pair.refresh_token)

    assert access["exp"] - access["iat"] == 3600
    assert refresh["exp"] - refresh["iat"] == 604800
    assert access["iat"] == int(FIXED_NOW.timestamp())


def test_each_token_gets_a_unique_jti():
    """Two pairs issued at the same instant still differ."""
    issuer = JWTTokenIssuer(secret=SECRET, clock=lambda: datetime.now(UTC).replace(microsecond=0))
    first = issuer.issue(1, "a@example.com", "adopter")
    second = issuer.issue(1, "a@example.com", "adopter")

    assert first.refresh_token != second.refresh_token
    assert _raw(first.refresh_token)["jti"] != _raw(second.refresh_token)["jti"]


def test_decode_round_trip(issuer):
    pair = issuer.issue(3, "c@example.com", "adopter")
    claims = issuer.decode(pair.refresh_token)
    assert claims["sub"] == "3"
    assert claims["type"] == "refresh"


def test_decode_expired_token_reports_expired(issuer):
    past = datetime.now(UTC) - timedelta(days=30)
    old = JWTTokenIssuer(secret=SECRET, clock=lambda: past).issue(1, "a@example.com", "adopter")

    with pytest.raises(TokenDecodeError) as excinfo:
        issuer.decode(old.refresh_token)
    assert excinfo.value.kind is TokenErrorKind.EXPIRED


def test_decode_garbage_reports_malformed(issuer):
    with pytest.raises(TokenDecodeError) as excinfo:
        issuer.decode("not-a-jwt")
    assert excinfo.value.kind is TokenErrorKind.MALFORMED


def test_decode_foreign_signature_reports_invalid(issuer):
    foreign = JWTTokenIssuer(secret="another-secret-of-sufficient-length").issue(
        1, "a@example.com", "adopter"
    )
    with pytest.raises(TokenDecodeError) as excinfo:
        issuer.decode(foreign.access_token)
    assert excinfo.value.kind is TokenErrorKind.INVALID


def test_decode_requires_exp(issuer):
    token = jwt.encode(
        {"sub": "1", "iat": datetime.now(UTC)}, SECRET, algorithm="HS256"
    )
    with pytest.raises(TokenDecodeError) as excinfo:
        issuer.decode(token)
    assert excinfo.value.kind is TokenErrorKind.INVALID


def test_registration_token_round_trip(issuer):
    token = issuer.issue_registration_token(
        provider="kakao",
        provider_id="12345",
        email=None,
        name="카카오사용자12345",
        profile_image=None,
    )
    claims = issuer.decode_registration_token(token)

    assert claims["provider"] == "kakao"
    assert claims["provider_id"] == "12345"
    assert claims["email"] is None
    assert claims["exp"] - claims["iat"] == 1800


def test_refresh_token_is_not_a_registration_token(issuer):
    pair = issuer.issue(1, "a@example.com", "adopter")
    with pytest.raises(TokenDecodeError) as excinfo:
        issuer.decode_registration_token(pair.refresh_token)
    assert excinfo.value.kind is TokenErrorKind.INVALID


def test_empty_secret_is_a_configuration_fault():
    with pytest.raises(RuntimeError):
        JWTTokenIssuer(secret="")


def test_from_app_reads_config(app):
    issuer = JWTTokenIssuer.from_app(app)
    assert issuer.secret == app.config["JWT_SECRET_KEY"]
    assert issuer.access_expires_in == app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    assert issuer.registration_expires_in == app.config["SOCIAL_REGISTRATION_TOKEN_EXPIRES"]
