"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between the storage port,
the identity resolver and the favorites ledger.

Each transport classifies them by class, never by message text: the HTTP
binding in ``cook_service/core/errors.py`` turns them into RFC 7807 problems
and the RPC binding in ``cook_service/api/v1/rpc.py`` into canonical codes.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *columns: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the error message; SQLite only
    reports ``table.column``, so the qualified column names are accepted as a
    fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_cooks_email').
    columns : str
        Qualified column names (``"cooks.email"``) covered by the constraint.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    return bool(columns) and all(col.lower() in message for col in columns)


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Transports translate them to their own error vocabulary.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class InvalidInputError(ServiceError):
    """
    Raised when a request carries missing or malformed fields.

    :param detail: Short human-readable explanation.
    :type detail: str
    :param field: Offending field, when a single one is at fault.
    :type field: str | None
    """

    detail: str
    field: str | None = None

    def __str__(self) -> str:
        if self.field:
            return f"Invalid {self.field}: {self.detail}"
        return self.detail


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the store.

    :param entity: Entity name (e.g., "Cook").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a uniqueness rule is violated.

    :param entity: Entity name (e.g., "Cook").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class UnauthorizedError(ServiceError):
    """Raised when a caller identity or credential cannot be verified."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InternalError(ServiceError):
    """
    Raised when a dependency (store, hasher) fails unexpectedly.

    The message is meant for logs only; transports never echo it to clients.
    """

    def __init__(self, message: str = "Internal error") -> None:
        super().__init__(message)
