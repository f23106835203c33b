"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. The translation to HTTP responses (RFC 7807) is handled by
``pawpong/core/errors.py`` via ``BaseService.translate_exceptions()``.

Messages are user-facing and distinguish the precise cause so clients can
branch (re-login vs. fix input).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g., ``'uq_adopters_nickname'``) or, for SQLite,
        the ``table.column`` pair it reports.

    Returns
    -------
    bool
        True if the driver message mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer or BaseService translates them to APIError.
    """


class BadRequestError(ServiceError):
    """Input is syntactically valid but cannot be acted upon (missing field, bad temp id)."""


class UnauthorizedError(ServiceError):
    """Credentials or tokens were rejected."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Breeder").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    :param message: Optional client-facing message overriding the default.
    :type message: str | None
    """

    entity: str
    key: str | int
    message: str | None = None

    def __str__(self) -> str:
        return self.message or f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Adopter").
    :type entity: str
    :param detail: Client-facing explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail
