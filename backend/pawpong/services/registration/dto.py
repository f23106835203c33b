"""
DTOs for RegistrationService.

Contracts for local (email + password) sign-up of adopters and breeders.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AdopterRegistrationIn:
    """
    Input payload for adopter sign-up.

    :param email: Login email (normalized by the model).
    :type email: str
    :param password: Raw password (the model setter hashes it).
    :type password: str
    :param name: Real name.
    :type name: str
    :param nickname: Public handle, unique among adopters.
    :type nickname: str
    :param phone: Optional contact number.
    :type phone: str | None
    :param marketing_agreed: Opt-in for marketing messages.
    :type marketing_agreed: bool
    """

    email: str
    password: str
    name: str
    nickname: str
    phone: str | None = None
    profile_image: str | None = None
    marketing_agreed: bool = False


@dataclass(frozen=True, slots=True)
class BreederRegistrationIn:
    """
    Input payload for breeder sign-up.

    Business fields are optional here; they become mandatory only for social
    completion, where no profile step follows.

    :param plan: ``"basic"`` (default) or ``"pro"``.
    :param level: ``"new"`` (default) or ``"elite"``.
    """

    email: str
    password: str
    name: str
    phone: str | None = None
    breeder_name: str | None = None
    introduction: str | None = None
    city: str | None = None
    district: str | None = None
    pet_type: str | None = None
    breeds: tuple[str, ...] = field(default_factory=tuple)
    plan: str | None = None
    level: str | None = None
    profile_image: str | None = None
    marketing_agreed: bool = False
