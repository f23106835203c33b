from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pawpong.models import AuthProvider, BreederLevel, VerificationStatus
from pawpong.repositories import AdopterRepository, BreederRepository

from tests.factories.adopter import AdopterFactory
from tests.factories.breeder import BreederFactory


@pytest.fixture
def adopters(session) -> AdopterRepository:
    return AdopterRepository(session=session)


@pytest.fixture
def breeders(session) -> BreederRepository:
    return BreederRepository(session=session)


class TestLookups:
    def test_get_by_email_normalizes(self, adopters):
        adopter = AdopterFactory(email="Mixed@Example.com")
        assert adopter.email == "mixed@example.com"
        assert adopters.get_by_email("  MIXED@example.com ") is adopter

    def test_get_by_email_empty_is_none(self, adopters):
        assert adopters.get_by_email("") is None

    def test_email_exists_per_table(self, adopters, breeders):
        BreederFactory(email="both@example.com")
        assert breeders.email_exists("both@example.com") is True
        assert adopters.email_exists("both@example.com") is False

    def test_nickname_exists(self, adopters):
        AdopterFactory(nickname="펫러버")
        assert adopters.nickname_exists("펫러버") is True
        assert adopters.nickname_exists(" 펫러버 ") is True
        assert adopters.nickname_exists("다른닉") is False

    def test_find_by_social_uses_role_specific_columns(self, adopters, breeders):
        adopter = AdopterFactory(social=True, provider_user_id="kakao-1")
        breeder = BreederFactory(social=True, social_provider_id="google-1")

        assert adopters.find_by_social(AuthProvider.KAKAO, "kakao-1") is adopter
        assert breeders.find_by_social("google", "google-1") is breeder
        assert adopters.find_by_social("google", "google-1") is None

    def test_find_by_social_requires_matching_provider(self, adopters):
        AdopterFactory(social=True, provider_user_id="same-id")
        assert adopters.find_by_social(AuthProvider.NAVER, "same-id") is None


class TestRefreshTokenState:
    def test_set_refresh_token_overwrites_and_clears(self, adopters, session):
        adopter = AdopterFactory()

        assert adopters.set_refresh_token(adopter.id, "hash-1") is True
        session.refresh(adopter)
        assert adopter.refresh_token == "hash-1"

        assert adopters.set_refresh_token(adopter.id, None) is True
        session.refresh(adopter)
        assert adopter.refresh_token is None

    def test_set_refresh_token_unknown_account(self, adopters):
        assert adopters.set_refresh_token(999_999, "hash") is False

    def test_swap_succeeds_only_against_expected_hash(self, breeders, session):
        """Compare-and-swap: the second swap from the same hash loses."""
        breeder = BreederFactory(refresh_token="hash-old")

        assert breeders.swap_refresh_token(breeder.id, expected="hash-old", new="hash-a") is True
        assert breeders.swap_refresh_token(breeder.id, expected="hash-old", new="hash-b") is False
        session.refresh(breeder)
        assert breeder.refresh_token == "hash-a"

    def test_swap_fails_after_logout(self, adopters):
        adopter = AdopterFactory(refresh_token="hash-old")
        adopters.set_refresh_token(adopter.id, None)
        assert adopters.swap_refresh_token(adopter.id, expected="hash-old", new="n") is False

    def test_touch_activity_uses_role_column(self, adopters, breeders):
        when = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        adopter = AdopterFactory()
        breeder = BreederFactory()

        adopters.touch_activity(adopter, when)
        breeders.touch_activity(breeder, when)

        assert adopter.last_activity_at == when
        assert breeder.last_login_at == when


class TestVerificationDocuments:
    def test_replace_moves_to_reviewing(self, breeders):
        breeder = BreederFactory(
            verification_documents=[{"type": "id_card", "url": "old", "uploadedAt": "x"}]
        )
        submitted = datetime(2025, 5, 1, tzinfo=UTC)
        docs = [{"type": "id_card", "url": "https://cdn.example.com/id.png", "uploadedAt": "y"}]

        breeders.replace_verification_documents(
            breeder, documents=docs, level=BreederLevel.ELITE, submitted_at=submitted
        )

        assert breeder.verification_documents == docs
        assert breeder.verification_status is VerificationStatus.REVIEWING
        assert breeder.verification_level is BreederLevel.ELITE
        assert breeder.verification_submitted_at == submitted

