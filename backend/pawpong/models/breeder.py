"""Breeder account model with its embedded verification sub-record."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pawpong.core.extensions import db

from .base import EmailMixin, PasswordMixin, PKMixin, ReprMixin, TimestampMixin
from .enums import (
    AccountStatus,
    AuthProvider,
    BreederLevel,
    PetType,
    Role,
    VerificationPlan,
    VerificationStatus,
    sa_enum,
)


class Breeder(PKMixin, ReprMixin, TimestampMixin, EmailMixin, PasswordMixin, db.Model):
    """
    Breeder account.

    The social linkage columns carry the same meaning as the adopter's
    ``auth_provider``/``provider_user_id``/``provider_email`` under different
    names, mirroring how the two account kinds evolved separately.

    Verification is stored inline as ``verification_*`` columns:

    ``verification_documents`` is an ordered JSON list of
    ``{"type", "url", "uploadedAt"}`` entries overwritten on every submission.
    """

    __tablename__ = "breeders"

    role = Role.BREEDER

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    breeder_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    introduction: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(50), nullable=True)
    district: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pet_type: Mapped[PetType | None] = mapped_column(
        sa_enum(PetType, "enum_breeder_pet_type"), nullable=True
    )
    breeds: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    marketing_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    social_provider: Mapped[AuthProvider | None] = mapped_column(
        sa_enum(AuthProvider, "enum_breeder_social_provider"), nullable=True
    )
    social_provider_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    social_email: Mapped[str | None] = mapped_column(String(254), nullable=True)

    refresh_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    account_status: Mapped[AccountStatus] = mapped_column(
        sa_enum(AccountStatus, "enum_breeder_account_status"),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )

    # -------------------- Verification --------------------
    verification_status: Mapped[VerificationStatus] = mapped_column(
        sa_enum(VerificationStatus, "enum_verification_status"),
        nullable=False,
        default=VerificationStatus.PENDING,
    )
    verification_plan: Mapped[VerificationPlan] = mapped_column(
        sa_enum(VerificationPlan, "enum_verification_plan"),
        nullable=False,
        default=VerificationPlan.BASIC,
    )
    verification_level: Mapped[BreederLevel] = mapped_column(
        sa_enum(BreederLevel, "enum_breeder_level"),
        nullable=False,
        default=BreederLevel.NEW,
    )
    verification_documents: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    verification_submitted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    verification_reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    verification_rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_breeders_email"),
        UniqueConstraint(
            "social_provider", "social_provider_id", name="uq_breeders_social_provider_id"
        ),
        Index("ix_breeders_social_provider_id", "social_provider_id"),
    )
