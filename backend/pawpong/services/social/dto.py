"""
DTOs for SocialAuthService.

Contracts for the two-step social sign-up: the OAuth callback looks the
identity up, and, when it is new, the client comes back with the missing
profile fields to complete registration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pawpong.services._shared.accounts import AccountView

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SocialRegistrationIn:
    """
    Completion payload for a social sign-up.

    Either ``registration_token`` or ``temp_id`` identifies the pending
    social identity; the token wins when both are present.

    :param role: ``"adopter"`` or ``"breeder"``.
    :type role: str
    :param temp_id: ``temp_{provider}_{providerId}_{epochMillis}``.
    :type temp_id: str | None
    :param registration_token: Signed identity issued by the callback.
    :type registration_token: str | None
    :param email: Account email; falls back to the token's claim.
    :type email: str | None
    :param name: Real name; falls back to the token's claim.
    :type name: str | None
    :param nickname: Adopter nickname; defaults to ``name``.
    :type nickname: str | None
    :param breeder_name: Breeder business name (breeders only, required).
    :param city: Breeder city (breeders only, required).
    :param district: Breeder district (breeders only, required).
    :param breeds: Breeds handled (breeders only, at least one).
    :param plan: ``"basic"`` or ``"pro"``.
    :param level: ``"new"`` or ``"elite"``.
    """

    role: str
    temp_id: str | None = None
    registration_token: str | None = None
    email: str | None = None
    name: str | None = None
    nickname: str | None = None
    phone: str | None = None
    profile_image: str | None = None
    marketing_agreed: bool = False
    breeder_name: str | None = None
    introduction: str | None = None
    city: str | None = None
    district: str | None = None
    pet_type: str | None = None
    breeds: tuple[str, ...] = field(default_factory=tuple)
    plan: str | None = None
    level: str | None = None


@dataclass(frozen=True, slots=True)
class PendingSocialIdentity:
    """
    Provider identity recovered from a temp id or a registration token.

    Only the token form carries ``email``, ``name`` and ``profile_image``.
    """

    provider: str
    provider_id: str
    email: str | None = None
    name: str | None = None
    profile_image: str | None = None


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SocialLoginResult:
    """
    Outcome of a social-login lookup.

    Exactly one of ``user`` and ``temp_user_id`` is set.

    :param needs_additional_info: ``True`` when no account is linked yet.
    :param user: Linked account.
    :param temp_user_id: Temporary identifier for the completion call.
    :param registration_token: Signed form of the same pending identity.
    """

    needs_additional_info: bool
    user: AccountView | None = None
    temp_user_id: str | None = None
    registration_token: str | None = None

    def to_payload(self) -> dict[str, Any]:
        if self.user is not None:
            return {"needsAdditionalInfo": False, "user": self.user.to_user_info()}
        return {
            "needsAdditionalInfo": True,
            "tempUserId": self.temp_user_id,
            "registrationToken": self.registration_token,
        }


@dataclass(frozen=True, slots=True)
class SocialUserCheckOut:
    """Whether a provider identity is already linked, and to whom."""

    exists: bool
    user_role: str | None = None
    user_id: str | None = None
    email: str | None = None

    def to_payload(self) -> dict[str, Any]:
        if not self.exists:
            return {"exists": False}
        return {
            "exists": True,
            "userRole": self.user_role,
            "userId": self.user_id,
            "email": self.email,
        }
