"""Adopter repository."""

from __future__ import annotations

from pawpong.models.adopter import Adopter

from .account import AccountRepository


class AdopterRepository(AccountRepository[Adopter]):
    """Persistence for :class:`pawpong.models.adopter.Adopter`."""

    model = Adopter

    provider_column = "auth_provider"
    provider_id_column = "provider_user_id"
    activity_column = "last_activity_at"

    def nickname_exists(self, nickname: str) -> bool:
        value = (nickname or "").strip()
        return bool(value) and self.exists(nickname=value)
