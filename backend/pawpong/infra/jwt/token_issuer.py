from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt
from flask import Flask

from pawpong.services._shared.ports import (
    REFRESH_TOKEN_TYPE,
    SOCIAL_REGISTRATION_TOKEN_TYPE,
    TokenDecodeError,
    TokenErrorKind,
    TokenIssuer,
    TokenPair,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class JWTTokenIssuer(TokenIssuer):
    """
    PyJWT-backed issuer for access, refresh and social-registration tokens.

    All three kinds share ``secret`` and ``algorithm``. The ``type`` claim is
    the only discriminator: access tokens carry none, refresh tokens carry
    ``"refresh"``. The API layer decodes bearer tokens with
    this same issuer and refuses any token carrying a ``type`` claim.

    :param secret: HMAC signing secret. Must be non-empty.
    :param algorithm: JWS algorithm, ``HS256`` by default.
    :param access_expires_in: Access token lifetime in seconds.
    :param refresh_expires_in: Refresh token lifetime in seconds.
    :param registration_expires_in: Social-registration token lifetime in seconds.
    :param clock: Callable returning the current aware UTC time.
    """

    secret: str
    algorithm: str = "HS256"
    access_expires_in: int = 3600
    refresh_expires_in: int = 604800
    registration_expires_in: int = 1800
    clock: Callable[[], datetime] = field(default=_utcnow)

    def __post_init__(self) -> None:
        if not self.secret:
            raise RuntimeError("Token signing secret is not configured.")

    @classmethod
    def from_app(cls, app: Flask) -> JWTTokenIssuer:
        """Build an issuer from the ``JWT_*`` keys of ``app.config``."""
        cfg = app.config
        return cls(
            secret=cfg["JWT_SECRET_KEY"],
            algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
            access_expires_in=int(cfg.get("JWT_ACCESS_TOKEN_EXPIRES", 3600)),
            refresh_expires_in=int(cfg.get("JWT_REFRESH_TOKEN_EXPIRES", 604800)),
            registration_expires_in=int(cfg.get("SOCIAL_REGISTRATION_TOKEN_EXPIRES", 1800)),
        )

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def _sign(self, claims: dict[str, Any], lifetime: int) -> str:
        now = self.clock()
        payload = dict(claims)
        # Unique per token, so two pairs issued within the same second differ
        payload["jti"] = uuid4().hex
        payload["iat"] = now
        payload["exp"] = now + timedelta(seconds=lifetime)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def issue(self, subject_id: int | str, email: str, role: str) -> TokenPair:
        """
        Sign an access/refresh pair for one account.

        :param subject_id: Account primary key (stored as string ``sub``).
        :param email: Account email.
        :param role: ``"adopter"`` or ``"breeder"``.
        :returns: Both tokens and their lifetimes in seconds.
        """
        base = {"sub": str(subject_id), "email": email, "role": str(role)}
        access = self._sign(base, self.access_expires_in)
        refresh = self._sign({**base, "type": REFRESH_TOKEN_TYPE}, self.refresh_expires_in)
        return TokenPair(
            access_token=access,
            refresh_token=refresh,
            access_token_expires_in=self.access_expires_in,
            refresh_token_expires_in=self.refresh_expires_in,
        )

    def issue_registration_token(
        self,
        *,
        provider: str,
        provider_id: str,
        email: str | None,
        name: str | None,
        profile_image: str | None = None,
    ) -> str:
        """
        Sign the pending social identity carried from the OAuth callback to
        registration completion.
        """
        claims: dict[str, Any] = {
            "type": SOCIAL_REGISTRATION_TOKEN_TYPE,
            "provider": provider,
            "provider_id": str(provider_id),
            "email": email,
            "name": name,
            "profile_image": profile_image,
        }
        return self._sign(claims, self.registration_expires_in)

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry and return the claims.

        :raises TokenDecodeError: ``EXPIRED``, ``MALFORMED`` (not a JWS at all)
            or ``INVALID`` (bad signature, bad claims).
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenDecodeError(TokenErrorKind.EXPIRED) from exc
        except jwt.DecodeError as exc:
            # InvalidSignatureError subclasses DecodeError
            if isinstance(exc, jwt.InvalidSignatureError):
                raise TokenDecodeError(TokenErrorKind.INVALID) from exc
            raise TokenDecodeError(TokenErrorKind.MALFORMED) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenDecodeError(TokenErrorKind.INVALID) from exc

    def decode_registration_token(self, token: str) -> dict[str, Any]:
        """
        Verify a social-registration token.

        :raises TokenDecodeError: As :meth:`decode`, or ``INVALID`` when the
            token is of another type.
        """
        claims = self.decode(token)
        if claims.get("type") != SOCIAL_REGISTRATION_TOKEN_TYPE or not claims.get("provider_id"):
            raise TokenDecodeError(TokenErrorKind.INVALID, "not a registration token")
        return claims
