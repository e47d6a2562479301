"""
cook_service.services._shared.ports
===================================

Collection of *ports* (hexagonal interfaces) that decouple the identity
resolver and the favorites ledger from concrete infrastructure.

Modules
-------
- :mod:`cook_store`:
    Defines :class:`~.CookStore`, the read-models it returns
    (:class:`~.CookRecord`, :class:`~.MenuRecord`, :class:`~.FavoriteRecord`),
    :class:`~.LinkResult` and the store errors.

- :mod:`credential_hasher`:
    Defines :class:`~.CredentialHasher` and :class:`~.HashingError`.

Design Notes
------------
Concrete adapters (SQLAlchemy, Redis, werkzeug) live under
``cook_service.infra`` and are selected once by the application factory.
"""

from __future__ import annotations

from .cook_store import (
    CookRecord,
    CookStore,
    DuplicateKeyError,
    FavoriteRecord,
    LinkResult,
    MenuRecord,
    StoreError,
)
from .credential_hasher import EXTERNAL_MARKER_PREFIX, CredentialHasher, HashingError

__all__ = [
    "CookStore",
    "CookRecord",
    "MenuRecord",
    "FavoriteRecord",
    "LinkResult",
    "StoreError",
    "DuplicateKeyError",
    "CredentialHasher",
    "HashingError",
    "EXTERNAL_MARKER_PREFIX",
]
