# cook_service/infra/security/werkzeug_hasher.py
from __future__ import annotations

import hashlib
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from cook_service.services._shared.ports import (
    EXTERNAL_MARKER_PREFIX,
    CredentialHasher,
    HashingError,
)


@dataclass(slots=True)
class WerkzeugCredentialHasher(CredentialHasher):
    """
    Adapter for ``werkzeug.security`` password hashing.

    :param method: Hash method passed to :func:`generate_password_hash`
        (e.g. ``"scrypt"`` or ``"pbkdf2:sha256:600000"``).
    """

    method: str = "scrypt"

    def hash_secret(self, secret: str) -> str:
        if not isinstance(secret, str) or not secret:
            raise HashingError("secret must be a non-empty string")
        try:
            return generate_password_hash(secret, method=self.method)
        except (ValueError, TypeError) as exc:
            raise HashingError(f"cannot hash secret with method {self.method!r}") from exc

    def verify_secret(self, secret: str, hashed: str) -> bool:
        # Markers are never valid local credentials
        if not secret or not hashed or hashed.startswith(EXTERNAL_MARKER_PREFIX):
            return False
        try:
            return bool(check_password_hash(hashed, secret))
        except (ValueError, TypeError):
            return False

    def external_marker(self, subject_id: str) -> str:
        if not isinstance(subject_id, str) or not subject_id:
            raise HashingError("external subject id must be a non-empty string")
        digest = hashlib.sha256(subject_id.encode("utf-8")).hexdigest()
        return f"{EXTERNAL_MARKER_PREFIX}{digest}"
