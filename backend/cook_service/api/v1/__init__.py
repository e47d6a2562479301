"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .favorites import bp as favorites_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .profile import bp as profile_bp  # noqa: E402
from .rpc import bp as rpc_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1/health
    (auth_bp, ""),  # -> /api/v1/register, /api/v1/oauth/google
    (profile_bp, ""),  # -> /api/v1/profile
    (favorites_bp, "/favorite-menus"),
    (rpc_bp, "/rpc"),  # -> /api/v1/rpc/CookService/<Method>
]
