"""Authentication helpers for tests."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token


def issue_token(identity: str, expires_delta: timedelta | None = None) -> str:
    """Generate a JWT whose ``sub`` claim is ``identity``.

    Parameters
    ----------
    identity:
        Cook id to encode in the token.
    expires_delta:
        Optional expiry delta. If ``None``, the default expiry is used.
    """

    return create_access_token(identity=identity, expires_delta=expires_delta)


def bearer(identity: str) -> dict[str, str]:
    """Return an ``Authorization`` header carrying a fresh token for ``identity``."""

    return {"Authorization": f"Bearer {issue_token(identity)}"}


def expired_token(identity: str) -> str:
    """Return an already expired JWT for ``identity``."""

    return create_access_token(identity=identity, expires_delta=timedelta(seconds=-1))
