"""Unit of Work abstractions and concrete implementations.

Services open a :class:`SQLAlchemyUnitOfWork` for writes and a
:class:`SQLAlchemyReadOnlyUnitOfWork` for lookups; both expose the adopter and
breeder repositories on one session.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
