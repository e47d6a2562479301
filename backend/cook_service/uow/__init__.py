"""Unit of Work abstractions and the SQLAlchemy implementation.

The relational cook store opens one unit of work per operation so that each
check-then-write sequence is a single transaction.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyUnitOfWork

__all__ = ["UnitOfWork", "SQLAlchemyUnitOfWork"]
