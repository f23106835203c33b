# tests/unit/services/test_verification_service.py
from __future__ import annotations

from datetime import UTC, datetime

import pytest
from freezegun import freeze_time
from pawpong.models import BreederLevel, VerificationStatus
from pawpong.services import BreederDocumentsIn
from pawpong.services._shared.errors import BadRequestError, ConflictError, NotFoundError

from tests.factories.breeder import BreederFactory

CDN = "https://cdn.example.com"


def _elite_docs(breeder_id, **overrides) -> BreederDocumentsIn:
    fields = dict(
        breeder_id=breeder_id,
        level="elite",
        id_card_url=f"{CDN}/id.png",
        animal_production_license_url=f"{CDN}/license.png",
        adoption_contract_sample_url=f"{CDN}/contract.pdf",
        recent_association_document_url=f"{CDN}/association.pdf",
        breeder_certification_url=f"{CDN}/cert.pdf",
    )
    fields.update(overrides)
    return BreederDocumentsIn(**fields)


class TestSubmitBreederDocuments:
    @freeze_time("2025-06-01 09:30:00")
    def test_new_level_stores_required_documents(self, verification_service):
        breeder = BreederFactory()

        out = verification_service.submit_breeder_documents(
            BreederDocumentsIn(
                breeder_id=str(breeder.id),
                level="new",
                id_card_url=f"{CDN}/id.png",
                animal_production_license_url=f" {CDN}/license.png ",
            )
        )

        submitted = datetime(2025, 6, 1, 9, 30, tzinfo=UTC)
        assert out.verification_status == "reviewing"
        assert out.is_documents_complete is True
        assert out.estimated_processing_time == "3-5일"
        assert out.submitted_at == submitted
        assert out.uploaded_documents == {
            "idCard": f"{CDN}/id.png",
            "animalProductionLicense": f"{CDN}/license.png",
        }
        assert breeder.verification_status is VerificationStatus.REVIEWING
        # SQLite hands timestamps back naive
        assert breeder.verification_submitted_at.replace(tzinfo=UTC) == submitted
        assert [d["type"] for d in breeder.verification_documents] == [
            "id_card",
            "animal_production_license",
        ]
        assert breeder.verification_documents[0]["uploadedAt"] == submitted.isoformat()

    def test_elite_keeps_document_order_with_optional_tica(self, verification_service):
        breeder = BreederFactory()

        out = verification_service.submit_breeder_documents(
            _elite_docs(breeder.id, tica_cfa_document_url=f"{CDN}/tica.pdf")
        )

        assert [d["type"] for d in breeder.verification_documents] == [
            "id_card",
            "animal_production_license",
            "adoption_contract_sample",
            "association_document",
            "breeder_certification",
            "tica_cfa_document",
        ]
        assert out.uploaded_documents["ticaCfaDocument"] == f"{CDN}/tica.pdf"
        assert breeder.verification_level is BreederLevel.ELITE

    def test_elite_without_tica(self, verification_service):
        breeder = BreederFactory()

        out = verification_service.submit_breeder_documents(_elite_docs(breeder.id))

        assert "ticaCfaDocument" not in out.uploaded_documents
        assert len(breeder.verification_documents) == 5

    def test_resubmission_replaces_documents(self, verification_service):
        breeder = BreederFactory(
            verification_documents=[{"type": "id_card", "url": "old", "uploadedAt": "x"}]
        )

        verification_service.submit_breeder_documents(_elite_docs(breeder.id))

        assert "old" not in [d["url"] for d in breeder.verification_documents]

    def test_approved_breeder_cannot_resubmit(self, verification_service, session):
        breeder = BreederFactory(verification_status=VerificationStatus.APPROVED)
        session.commit()

        with pytest.raises(ConflictError, match="이미 인증이 완료된 브리더입니다."):
            verification_service.submit_breeder_documents(_elite_docs(breeder.id))

        assert breeder.verification_status is VerificationStatus.APPROVED
        assert breeder.verification_documents == []

    def test_rejected_breeder_can_resubmit(self, verification_service):
        breeder = BreederFactory(verification_status=VerificationStatus.REJECTED)

        out = verification_service.submit_breeder_documents(_elite_docs(breeder.id))

        assert out.verification_status == "reviewing"

    def test_id_card_is_required(self, verification_service):
        breeder = BreederFactory()
        with pytest.raises(BadRequestError, match="신분증 사본은 필수입니다."):
            verification_service.submit_breeder_documents(
                BreederDocumentsIn(
                    breeder_id=breeder.id,
                    level="new",
                    animal_production_license_url=f"{CDN}/license.png",
                )
            )
        assert breeder.verification_status is VerificationStatus.PENDING

    def test_license_is_required(self, verification_service):
        with pytest.raises(BadRequestError, match="동물생산업 등록증은 필수입니다."):
            verification_service.submit_breeder_documents(
                BreederDocumentsIn(breeder_id=1, level="new", id_card_url=f"{CDN}/id.png")
            )

    @pytest.mark.parametrize(
        "missing, message",
        [
            ("adoption_contract_sample_url", "표준 입양계약서 샘플은 엘리트 레벨에 필수입니다."),
            ("recent_association_document_url", "최근 협회 활동 서류는 엘리트 레벨에 필수입니다."),
            ("breeder_certification_url", "브리더 인증 서류는 엘리트 레벨에 필수입니다."),
        ],
    )
    def test_elite_requirements(self, verification_service, missing, message):
        breeder = BreederFactory()
        with pytest.raises(BadRequestError, match=message):
            verification_service.submit_breeder_documents(
                _elite_docs(breeder.id, **{missing: None})
            )

    def test_unknown_level(self, verification_service):
        with pytest.raises(BadRequestError, match="유효하지 않은 브리더 레벨입니다."):
            verification_service.submit_breeder_documents(
                BreederDocumentsIn(breeder_id=1, level="gold")
            )

    @pytest.mark.parametrize("breeder_id", [999_999, "not-a-number"])
    def test_unknown_breeder(self, verification_service, breeder_id):
        with pytest.raises(NotFoundError, match="브리더를 찾을 수 없습니다."):
            verification_service.submit_breeder_documents(_elite_docs(breeder_id))

    def test_payload_shape(self, verification_service):
        breeder = BreederFactory()
        payload = verification_service.submit_breeder_documents(
            _elite_docs(breeder.id)
        ).to_payload()

        assert payload["breederId"] == str(breeder.id)
        assert payload["verificationStatus"] == "reviewing"
        assert payload["isDocumentsComplete"] is True
        assert isinstance(payload["submittedAt"], str)
