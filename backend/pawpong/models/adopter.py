"""Adopter account model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from pawpong.core.extensions import db

from .base import EmailMixin, PasswordMixin, PKMixin, ReprMixin, TimestampMixin
from .enums import AccountStatus, AuthProvider, Role, sa_enum


def default_notification_settings() -> dict[str, bool]:
    """Return the notification preferences every new adopter starts with."""
    return {
        "email_notifications": True,
        "sms_notifications": False,
        "marketing_notifications": False,
    }


class Adopter(PKMixin, ReprMixin, TimestampMixin, EmailMixin, PasswordMixin, db.Model):
    """
    Adopter account.

    Fields
    ------
    email : str
        Login email, unique across adopters *and* breeders (checked by the
        services before insert; the per-table constraint is a backstop).
    password_hash : str | None
        Hashed password. ``None`` for pure social accounts.
    full_name, nickname : str
        Display identity. ``nickname`` is unique among adopters.
    auth_provider, provider_user_id, provider_email
        Optional social linkage used as an alternate lookup key.
    refresh_token : str | None
        Hash of the only refresh token currently valid for this account.
    last_activity_at : datetime | None
        Touched on login, refresh and social login.
    """

    __tablename__ = "adopters"

    role = Role.ADOPTER

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    nickname: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    auth_provider: Mapped[AuthProvider | None] = mapped_column(
        sa_enum(AuthProvider, "enum_adopter_auth_provider"), nullable=True
    )
    provider_user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    provider_email: Mapped[str | None] = mapped_column(String(254), nullable=True)

    refresh_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_activity_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    account_status: Mapped[AccountStatus] = mapped_column(
        sa_enum(AccountStatus, "enum_adopter_account_status"),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )
    marketing_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    notification_settings: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=default_notification_settings
    )
    favorite_breeders: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    adoption_applications: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    written_reviews: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    submitted_reports: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint("email", name="uq_adopters_email"),
        UniqueConstraint("nickname", name="uq_adopters_nickname"),
        UniqueConstraint(
            "auth_provider", "provider_user_id", name="uq_adopters_auth_provider_user"
        ),
        Index("ix_adopters_provider_user_id", "provider_user_id"),
    )

    @validates("nickname")
    def _normalize_nickname(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Nickname is required.")
        return value.strip()
