from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from pawpong.services._shared.ports import RefreshTokenHasher


@dataclass(frozen=True, slots=True)
class WerkzeugRefreshTokenGuard(RefreshTokenHasher):
    """
    Salted one-way hash for refresh tokens, built on ``werkzeug.security``.

    :param method: Werkzeug hash method spec (``"scrypt"``,
        ``"pbkdf2:sha256:600000"``...). The salt length stays at werkzeug's
        default.
    """

    method: str = "scrypt"

    def hash(self, raw_token: str) -> str:
        if not raw_token:
            raise ValueError("Refresh token must be a non-empty string.")
        return generate_password_hash(raw_token, method=self.method)

    def verify(self, raw_token: str, hashed_token: str | None) -> bool:
        if not raw_token or not hashed_token:
            return False
        return bool(check_password_hash(hashed_token, raw_token))
