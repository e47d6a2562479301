"""Service layer public API.

This package exposes the essential building blocks for the service layer so
that callers can import from :mod:`cook_service.services` without knowing the
internal structure.

Re-exports
----------
- Base primitives (from ``cook_service.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Identity service (from ``cook_service.services.identity``)
    * :class:`IdentityService`
    * DTOs: :class:`CookRegisterIn`, :class:`ExternalIdentityIn`,
      :class:`CookUpdateIn`, :class:`CookAuthIn`, :class:`CookPublicOut`

- Favorites service (from ``cook_service.services.favorites``)
    * :class:`FavoritesService`
    * DTOs: :class:`FavoriteMenuOut`
"""

from __future__ import annotations

from cook_service.services._shared.base import BaseService, ServiceContext
from cook_service.services.favorites.dto import FavoriteMenuOut
from cook_service.services.favorites.service import FavoritesService
from cook_service.services.identity.dto import (
    CookAuthIn,
    CookPublicOut,
    CookRegisterIn,
    CookUpdateIn,
    ExternalIdentityIn,
)
from cook_service.services.identity.service import IdentityService

__all__ = [
    "BaseService",
    "ServiceContext",
    "IdentityService",
    "CookRegisterIn",
    "ExternalIdentityIn",
    "CookUpdateIn",
    "CookAuthIn",
    "CookPublicOut",
    "FavoritesService",
    "FavoriteMenuOut",
]
