"""Input normalization rules shared by the identity and favorites services."""

from __future__ import annotations

import re
from uuid import UUID

from cook_service.services._shared.errors import InvalidInputError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_MENU_ID_LENGTH = 64
MAX_NAME_LENGTH = 100


def clean_optional(value: str | None) -> str | None:
    """Trim ``value``; empty or whitespace-only strings become ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_email(value: str | None) -> str:
    """
    Return the stored form of an email (trimmed, lowercased).

    :raises InvalidInputError: When missing or not shaped like an address.
    """
    email = clean_optional(value)
    if email is None:
        raise InvalidInputError("is required", field="email")
    email = email.lower()
    if not EMAIL_RE.match(email):
        raise InvalidInputError("does not look like an email address", field="email")
    return email


def normalize_name(value: str | None) -> str:
    """Return the stored form of a display name (trimmed, case kept)."""
    name = clean_optional(value)
    if name is None:
        raise InvalidInputError("is required", field="name")
    return name


def validate_cook_id(value: str | None) -> str:
    """
    Validate an opaque caller identity and return its canonical form.

    Cook ids are generated UUID strings; anything else is rejected before
    touching the store.
    """
    raw = clean_optional(value)
    if raw is None:
        raise InvalidInputError("is required", field="cook_id")
    try:
        return str(UUID(raw))
    except ValueError as exc:
        raise InvalidInputError("invalid cook ID format", field="cook_id") from exc


def validate_menu_id(value: str | None) -> str:
    """Validate a menu identifier (opaque string of 1..64 characters)."""
    raw = clean_optional(value)
    if raw is None:
        raise InvalidInputError("is required", field="menu_id")
    if len(raw) > MAX_MENU_ID_LENGTH:
        raise InvalidInputError(
            f"must be at most {MAX_MENU_ID_LENGTH} characters", field="menu_id"
        )
    return raw
