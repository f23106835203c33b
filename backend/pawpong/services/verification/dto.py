"""DTOs for BreederVerificationService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class BreederDocumentsIn:
    """
    Verification documents submitted by a breeder, as URLs.

    :param breeder_id: Token ``sub`` of the submitting breeder.
    :param level: ``"new"`` or ``"elite"``; decides which documents are required.
    :param id_card_url: Identity card (always required).
    :param animal_production_license_url: Production license (always required).
    :param adoption_contract_sample_url: Elite only, required.
    :param recent_association_document_url: Elite only, required.
    :param breeder_certification_url: Elite only, required.
    :param tica_cfa_document_url: Elite only, optional.
    """

    breeder_id: int | str
    level: str
    id_card_url: str | None = None
    animal_production_license_url: str | None = None
    adoption_contract_sample_url: str | None = None
    recent_association_document_url: str | None = None
    breeder_certification_url: str | None = None
    tica_cfa_document_url: str | None = None


@dataclass(frozen=True, slots=True)
class DocumentSubmissionOut:
    """
    Summary of an accepted submission.

    ``uploaded_documents`` maps the client-facing document names to URLs and
    only contains the documents that were stored.
    """

    breeder_id: str
    verification_status: str
    uploaded_documents: dict[str, str]
    is_documents_complete: bool
    submitted_at: datetime
    estimated_processing_time: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "breederId": self.breeder_id,
            "verificationStatus": self.verification_status,
            "uploadedDocuments": dict(self.uploaded_documents),
            "isDocumentsComplete": self.is_documents_complete,
            "submittedAt": self.submitted_at.isoformat(),
            "estimatedProcessingTime": self.estimated_processing_time,
        }
