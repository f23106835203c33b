"""Closed vocabularies shared by account models, services and schemas."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum


class Role(str, Enum):
    """Account variant. Each role lives in its own table."""

    ADOPTER = "adopter"
    BREEDER = "breeder"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class AuthProvider(str, Enum):
    """OAuth providers a social linkage may point to."""

    GOOGLE = "google"
    NAVER = "naver"
    KAKAO = "kakao"


class VerificationStatus(str, Enum):
    """Breeder verification lifecycle.

    ``PENDING -> REVIEWING`` happens on document submission; the transition to
    ``APPROVED`` or ``REJECTED`` belongs to the admin review workflow.
    """

    PENDING = "pending"
    REVIEWING = "reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"


class VerificationPlan(str, Enum):
    BASIC = "basic"
    PRO = "pro"


class BreederLevel(str, Enum):
    NEW = "new"
    ELITE = "elite"


class PetType(str, Enum):
    CAT = "cat"
    DOG = "dog"


class DocumentType(str, Enum):
    """Kinds of verification document a breeder may upload."""

    ID_CARD = "id_card"
    ANIMAL_PRODUCTION_LICENSE = "animal_production_license"
    ADOPTION_CONTRACT_SAMPLE = "adoption_contract_sample"
    ASSOCIATION_DOCUMENT = "association_document"
    BREEDER_CERTIFICATION = "breeder_certification"
    TICA_CFA_DOCUMENT = "tica_cfa_document"


def sa_enum(enum_cls: type[Enum], name: str) -> SAEnum:
    """Build a portable SQLAlchemy ``Enum`` column type storing member values.

    :param enum_cls: Python enum class to persist.
    :param name: Constraint/type name used by the database.
    :returns: Non-native enum type with a CHECK constraint.
    :rtype: sqlalchemy.Enum
    """
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )
