"""Convenience exports for application schemas."""

from __future__ import annotations

from .cook import (
    CookRegisterSchema,
    CookSchema,
    CookUpdateSchema,
    CredentialsSchema,
    ExternalIdentitySchema,
    ExternalLinkSchema,
)
from .favorite import FavoriteMenuInSchema, FavoriteMenuSchema

__all__ = [
    "CookRegisterSchema",
    "CookSchema",
    "CookUpdateSchema",
    "CredentialsSchema",
    "ExternalIdentitySchema",
    "ExternalLinkSchema",
    "FavoriteMenuInSchema",
    "FavoriteMenuSchema",
]
