"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from cook_service.core.config import STORE_BACKENDS
from cook_service.infra.security.werkzeug_hasher import WerkzeugCredentialHasher
from cook_service.services._shared.ports import CookStore, CredentialHasher

# Global naming convention for all constraints; the stores match
# IntegrityErrors against these names.
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None

COOK_STORE_KEY = "cook_store"
HASHER_KEY = "credential_hasher"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT verification, the cook store and hasher.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. The storage backend is
        chosen once here from ``COOK_STORE_BACKEND`` and exposed through
        ``app.extensions["cook_store"]``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from cook_service import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
    else:
        timeout = float(app.config.get("STORE_TIMEOUT_SECONDS", 5.0))
        redis_client = redis.Redis.from_url(
            redis_url,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
        try:
            redis_client.ping()
        except RedisError as exc:
            raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
        app.extensions["redis_client"] = redis_client

    app.extensions[COOK_STORE_KEY] = build_cook_store(app)
    app.extensions[HASHER_KEY] = WerkzeugCredentialHasher(
        method=app.config.get("PASSWORD_HASH_METHOD", "scrypt")
    )


def build_cook_store(app: Flask) -> CookStore:
    """Instantiate the storage backend named by ``COOK_STORE_BACKEND``.

    :param app: Application whose configuration selects the backend.
    :returns: A :class:`CookStore` implementation.
    :raises RuntimeError: On an unknown backend or a missing Redis client.
    """
    backend = str(app.config.get("COOK_STORE_BACKEND", "sql")).strip().lower()
    if backend not in STORE_BACKENDS:
        raise RuntimeError(f"Unknown COOK_STORE_BACKEND {backend!r}")

    if backend == "redis":
        from cook_service.infra.redis.redis_cook_store import RedisCookStore

        client = app.extensions.get("redis_client")
        if client is None:
            raise RuntimeError("COOK_STORE_BACKEND=redis requires REDIS_URL to be set.")
        return RedisCookStore(r=client)

    from cook_service.infra.sql.sql_cook_store import SqlCookStore

    return SqlCookStore()


def get_cook_store() -> CookStore:
    """Return the cook store bound to the current application."""
    store = current_app.extensions.get(COOK_STORE_KEY)
    if store is None:
        raise RuntimeError("Cook store is not initialized. Call init_app() first.")
    return store


def get_credential_hasher() -> CredentialHasher:
    """Return the credential hasher bound to the current application."""
    hasher = current_app.extensions.get(HASHER_KEY)
    if hasher is None:
        raise RuntimeError("Credential hasher is not initialized. Call init_app() first.")
    return hasher
