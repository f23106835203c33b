"""Shared persistence for the two account tables.

Adopters and breeders store the same concepts (social linkage, refresh-token
hash, last activity) under different column names. Subclasses declare which
columns play each part and inherit the lookups and session-state writes.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, TypeVar

from sqlalchemy import select, update

from pawpong.models.enums import AuthProvider

from .base import BaseRepository

A = TypeVar("A")


class AccountRepository(BaseRepository[A]):
    """Role-agnostic account persistence.

    Subclasses set the column names below. Nothing here commits.
    """

    provider_column: ClassVar[str]
    provider_id_column: ClassVar[str]
    activity_column: ClassVar[str]

    def get_by_email(self, email: str) -> A | None:
        """
        Retrieve an account by email (normalized).

        :param email: Raw email; trimmed and lowercased before lookup.
        :returns: Account or ``None``.
        """
        normalized = (email or "").strip().lower()
        if not normalized:
            return None
        return self.find_one(email=normalized)

    def email_exists(self, email: str) -> bool:
        normalized = (email or "").strip().lower()
        return bool(normalized) and self.exists(email=normalized)

    def find_by_social(self, provider: AuthProvider | str, provider_id: str) -> A | None:
        """
        Resolve an account by its ``(provider, provider user id)`` linkage.

        :param provider: OAuth provider.
        :param provider_id: Provider-side stable user identifier.
        :returns: Linked account or ``None``.
        """
        stmt = select(self.model).where(
            getattr(self.model, self.provider_column) == AuthProvider(provider),
            getattr(self.model, self.provider_id_column) == str(provider_id),
        )
        return self.session.execute(stmt).scalars().first()

    # ----------------------------- Session state ------------------------------

    def set_refresh_token(self, account_id: int, token_hash: str | None) -> bool:
        """
        Overwrite the stored refresh-token hash unconditionally.

        ``None`` logs the account out.

        :returns: ``True`` if the account exists.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == account_id)  # type: ignore[attr-defined]
            .values(refresh_token=token_hash)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    def swap_refresh_token(self, account_id: int, *, expected: str, new: str) -> bool:
        """
        Replace the refresh-token hash only if it still equals ``expected``.

        This is a single conditional ``UPDATE`` so two callers presenting the
        same token cannot both rotate it.

        :param account_id: Account primary key.
        :param expected: Hash read (and verified) by the caller.
        :param new: Hash of the freshly issued refresh token.
        :returns: ``True`` when this call won the swap.
        """
        stmt = (
            update(self.model)
            .where(
                self.model.id == account_id,  # type: ignore[attr-defined]
                self.model.refresh_token == expected,  # type: ignore[attr-defined]
            )
            .values(refresh_token=new)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    def touch_activity(self, account: A, when: datetime) -> None:
        """Stamp the role-specific activity column and flush."""
        setattr(account, self.activity_column, when)
        self.flush()
