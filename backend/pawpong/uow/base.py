"""
Abstract Unit of Work contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawpong.models.enums import Role
    from pawpong.repositories import AccountRepository, AdopterRepository, BreederRepository


class UnitOfWork(ABC):
    """
    Transactional boundary for one use-case.

    Exposes the adopter and breeder repositories bound to the same
    session, commits on success and rolls back on error.
    """

    adopters: AdopterRepository
    breeders: BreederRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
    @abstractmethod
    def accounts(self, role: Role | str) -> AccountRepository: ...
