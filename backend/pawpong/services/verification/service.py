"""
BreederVerificationService
==========================

Accepts a breeder's verification documents and moves the verification
record from ``pending`` (or ``rejected``) to ``reviewing``. Review itself
happens elsewhere, and an approved breeder cannot submit again.

Required documents depend on the level:

* ``new``: identity card and production license.
* ``elite``: the above, plus adoption contract sample, recent association
  document and breeder certification. A TICA/CFA document is optional.
"""

from __future__ import annotations

import logging
from typing import Any

from pawpong.models.enums import BreederLevel, DocumentType, VerificationStatus
from pawpong.services._shared.accounts import parse_choice
from pawpong.services._shared.base import BaseService
from pawpong.services._shared.errors import BadRequestError, ConflictError, NotFoundError
from pawpong.services.verification.dto import BreederDocumentsIn, DocumentSubmissionOut

logger = logging.getLogger(__name__)

ESTIMATED_PROCESSING_TIME = "3-5일"

BREEDER_NOT_FOUND = "브리더를 찾을 수 없습니다."
ALREADY_APPROVED = "이미 인증이 완료된 브리더입니다."
INVALID_LEVEL = "유효하지 않은 브리더 레벨입니다."

#: (document type, DTO attribute, response key, message when missing or None if optional)
_BASE_DOCUMENTS: tuple[tuple[DocumentType, str, str, str | None], ...] = (
    (DocumentType.ID_CARD, "id_card_url", "idCard", "신분증 사본은 필수입니다."),
    (
        DocumentType.ANIMAL_PRODUCTION_LICENSE,
        "animal_production_license_url",
        "animalProductionLicense",
        "동물생산업 등록증은 필수입니다.",
    ),
)
_ELITE_DOCUMENTS: tuple[tuple[DocumentType, str, str, str | None], ...] = (
    (
        DocumentType.ADOPTION_CONTRACT_SAMPLE,
        "adoption_contract_sample_url",
        "adoptionContractSample",
        "표준 입양계약서 샘플은 엘리트 레벨에 필수입니다.",
    ),
    (
        DocumentType.ASSOCIATION_DOCUMENT,
        "recent_association_document_url",
        "recentAssociationDocument",
        "최근 협회 활동 서류는 엘리트 레벨에 필수입니다.",
    ),
    (
        DocumentType.BREEDER_CERTIFICATION,
        "breeder_certification_url",
        "breederCertification",
        "브리더 인증 서류는 엘리트 레벨에 필수입니다.",
    ),
    (DocumentType.TICA_CFA_DOCUMENT, "tica_cfa_document_url", "ticaCfaDocument", None),
)


class BreederVerificationService(BaseService):
    """Verification-document submission for breeders."""

    def submit_breeder_documents(self, dto: BreederDocumentsIn) -> DocumentSubmissionOut:
        """
        Validate and store a document set, replacing any previous one.

        :param dto: Submission input.
        :type dto: :class:`BreederDocumentsIn`
        :returns: Submission summary with the flattened document URLs.
        :rtype: :class:`DocumentSubmissionOut`
        :raises BadRequestError: Unknown level, or the first missing required
            document for that level.
        :raises NotFoundError: No breeder with ``dto.breeder_id``.
        :raises ConflictError: The breeder is already approved.
        """
        level = parse_choice(BreederLevel, dto.level, INVALID_LEVEL)
        specs = _BASE_DOCUMENTS + (_ELITE_DOCUMENTS if level is BreederLevel.ELITE else ())

        now = self.now_utc()
        uploaded_at = now.isoformat()
        documents: list[dict[str, Any]] = []
        uploaded: dict[str, str] = {}
        for doc_type, attr, key, missing_message in specs:
            url = (getattr(dto, attr) or "").strip()
            if not url:
                if missing_message is not None:
                    raise BadRequestError(missing_message)
                continue
            documents.append({"type": doc_type.value, "url": url, "uploadedAt": uploaded_at})
            uploaded[key] = url

        try:
            breeder_id = int(str(dto.breeder_id))
        except ValueError as exc:
            raise NotFoundError("Breeder", dto.breeder_id, BREEDER_NOT_FOUND) from exc

        with self.rw_uow() as uow:
            breeder = uow.breeders.get(breeder_id)
            if breeder is None:
                raise NotFoundError("Breeder", breeder_id, BREEDER_NOT_FOUND)
            if breeder.verification_status is VerificationStatus.APPROVED:
                raise ConflictError("Breeder", ALREADY_APPROVED)
            uow.breeders.replace_verification_documents(
                breeder, documents=documents, level=level, submitted_at=now
            )
            status = breeder.verification_status.value

        logger.info(
            "Verification documents submitted",
            extra={"account_id": breeder_id, "role": "breeder"},
        )
        return DocumentSubmissionOut(
            breeder_id=str(breeder_id),
            verification_status=status,
            uploaded_documents=uploaded,
            is_documents_complete=True,
            submitted_at=now,
            estimated_processing_time=ESTIMATED_PROCESSING_TIME,
        )
