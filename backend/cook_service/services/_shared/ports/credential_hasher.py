from __future__ import annotations

from typing import Protocol

EXTERNAL_MARKER_PREFIX = "ext$sha256$"


class HashingError(Exception):
    """Raised when a secret cannot be hashed; fatal to the enclosing operation."""


class CredentialHasher(Protocol):
    """
    One-way transform of secrets into their storable form.

    Implementations are stateless and never return the input unchanged.
    """

    def hash_secret(self, secret: str) -> str:
        """Return a salted one-way hash of ``secret``."""

    def verify_secret(self, secret: str, hashed: str) -> bool:
        """Return ``True`` when ``secret`` matches ``hashed``."""

    def external_marker(self, subject_id: str) -> str:
        """Return the deterministic marker stored for an external subject id."""
