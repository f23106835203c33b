"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from pawpong.models import Adopter, Breeder, Role
from pawpong.repositories import AdopterRepository, BreederRepository
from pawpong.uow import SQLAlchemyUnitOfWork

from tests.factories.adopter import AdopterFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db, session):
        """
        GIVEN a writer UoW
        WHEN we add an adopter inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = db.session.query(Adopter).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.adopters.add(AdopterFactory.build())

        after = db.session.query(Adopter).count()
        assert after == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = db.session.query(Breeder).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.breeders.add(
                Breeder(email="rollback@example.com", name="롤백", verification_documents=[])
            )
            raise RuntimeError("boom")

        after = db.session.query(Breeder).count()
        assert after == initial

    @pytest.mark.parametrize(
        "role, repo_cls",
        [(Role.ADOPTER, AdopterRepository), ("breeder", BreederRepository)],
    )
    def test_accounts_selects_repository_by_role(self, session, role, repo_cls):
        with SQLAlchemyUnitOfWork() as uow:
            assert isinstance(uow.accounts(role), repo_cls)

    def test_accounts_rejects_unknown_role(self, session):
        with pytest.raises(ValueError), SQLAlchemyUnitOfWork() as uow:
            uow.accounts("admin")
