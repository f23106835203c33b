"""Breeder repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pawpong.models.breeder import Breeder
from pawpong.models.enums import BreederLevel, VerificationStatus

from .account import AccountRepository


class BreederRepository(AccountRepository[Breeder]):
    """Persistence for :class:`pawpong.models.breeder.Breeder`."""

    model = Breeder

    provider_column = "social_provider"
    provider_id_column = "social_provider_id"
    activity_column = "last_login_at"

    def replace_verification_documents(
        self,
        breeder: Breeder,
        *,
        documents: list[dict[str, Any]],
        level: BreederLevel,
        submitted_at: datetime,
    ) -> Breeder:
        """
        Overwrite the verification documents and move the record to review.

        :param breeder: Account being updated (already loaded in this UoW).
        :param documents: Ordered ``{"type", "url", "uploadedAt"}`` entries.
        :param level: Level the documents were submitted for.
        :param submitted_at: Submission timestamp.
        :returns: The updated breeder.
        """
        # New list object so the JSON column is flagged dirty
        breeder.verification_documents = list(documents)
        breeder.verification_status = VerificationStatus.REVIEWING
        breeder.verification_level = level
        breeder.verification_submitted_at = submitted_at
        self.flush()
        return breeder
