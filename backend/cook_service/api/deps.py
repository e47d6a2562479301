"""Shared API helpers: caller identity, service wiring and response helpers."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from cook_service.core.errors import Unauthorized
from cook_service.core.extensions import get_cook_store, get_credential_hasher
from cook_service.core.logger import ensure_request_id
from cook_service.services import FavoritesService, IdentityService, ServiceContext

F = TypeVar("F", bound=Callable[..., Any])


def service_context(transport: str = "http") -> ServiceContext:
    """Build the request-scoped context handed to services."""

    return ServiceContext(request_id=ensure_request_id(), transport=transport)


def identity_service(transport: str = "http") -> IdentityService:
    """Return an :class:`IdentityService` bound to the configured store and hasher."""

    return IdentityService(
        get_cook_store(),
        get_credential_hasher(),
        ctx=service_context(transport),
    )


def favorites_service(transport: str = "http") -> FavoritesService:
    """Return a :class:`FavoritesService` bound to the configured store."""

    return FavoritesService(get_cook_store(), ctx=service_context(transport))


def resolve_caller_id() -> str:
    """Resolve the caller identity for HTTP routes.

    A verified bearer token's ``sub`` claim wins; otherwise the
    ``COOK_ID_HEADER`` header (``X-Cook-ID`` by default) is used.

    :raises Unauthorized: When neither is present.
    """

    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity:
        return str(identity)
    header = current_app.config.get("COOK_ID_HEADER", "X-Cook-ID")
    value = (request.headers.get(header) or "").strip()
    if value:
        return value
    raise Unauthorized("Missing caller identity")


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty mapping when absent."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
