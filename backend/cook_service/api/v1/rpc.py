"""RPC-style binding: ``POST /rpc/CookService/<Method>`` with JSON bodies.

The caller identity travels in the ``RPC_METADATA_HEADER`` header (``cookID``
by default). Failures are reported with canonical RPC status codes instead of
RFC 7807 problems.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from cook_service.api.deps import (
    favorites_service,
    identity_service,
    json_body,
    json_response,
    timing,
)
from cook_service.core.logger import ensure_request_id
from cook_service.schemas import (
    CookRegisterSchema,
    CookSchema,
    CookUpdateSchema,
    FavoriteMenuInSchema,
    FavoriteMenuSchema,
)
from cook_service.services import CookRegisterIn, CookUpdateIn
from cook_service.services._shared.errors import (
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)

log = logging.getLogger(__name__)

SERVICE_NAME = "CookService"

# Service error class -> (canonical RPC code, HTTP status of the envelope)
RPC_CODES: dict[type[ServiceError], tuple[str, int]] = {
    InvalidInputError: ("INVALID_ARGUMENT", HTTPStatus.BAD_REQUEST),
    ConflictError: ("ALREADY_EXISTS", HTTPStatus.CONFLICT),
    NotFoundError: ("NOT_FOUND", HTTPStatus.NOT_FOUND),
    UnauthorizedError: ("UNAUTHENTICATED", HTTPStatus.UNAUTHORIZED),
    InternalError: ("INTERNAL", HTTPStatus.INTERNAL_SERVER_ERROR),
}

HTTP_RPC_CODES: dict[int, str] = {
    400: "INVALID_ARGUMENT",
    401: "UNAUTHENTICATED",
    404: "NOT_FOUND",
    405: "UNIMPLEMENTED",
    413: "RESOURCE_EXHAUSTED",
    415: "INVALID_ARGUMENT",
}

bp = Blueprint("rpc", __name__)

register_schema = CookRegisterSchema()
update_schema = CookUpdateSchema()
favorite_in_schema = FavoriteMenuInSchema()
cook_schema = CookSchema()
favorites_schema = FavoriteMenuSchema(many=True)


class RpcError(Exception):
    """Transport-level RPC failure carrying its canonical code."""

    def __init__(self, code: str, message: str, status: int) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = int(status)


def rpc_code(exc: ServiceError) -> tuple[str, int]:
    """Resolve the canonical RPC code for a service error by class."""
    for klass in type(exc).__mro__:
        if klass in RPC_CODES:
            code, status = RPC_CODES[klass]
            return code, int(status)
    return "INTERNAL", int(HTTPStatus.INTERNAL_SERVER_ERROR)


def _rpc_error_response(code: str, message: str, status: int, details: Any = None):
    error: dict[str, Any] = {"code": code, "message": message, "request_id": ensure_request_id()}
    if details:
        error["details"] = details
    return json_response({"error": error}, status=status)


def caller_id() -> str:
    """Read the caller identity from the RPC metadata header."""
    header = current_app.config.get("RPC_METADATA_HEADER", "cookID")
    value = (request.headers.get(header) or "").strip()
    if not value:
        raise RpcError("UNAUTHENTICATED", f"missing {header} metadata", HTTPStatus.UNAUTHORIZED)
    return value


# --------------------------------------------------------------------------- #
# Methods
# --------------------------------------------------------------------------- #


def verify_cook_details(body: dict[str, Any]) -> dict[str, Any]:
    data = register_schema.load(body)
    cook = identity_service("rpc").register(CookRegisterIn(**data))
    return {"profile": cook_schema.dump(cook)}


def view_profile(body: dict[str, Any]) -> dict[str, Any]:
    cook = identity_service("rpc").view_profile(caller_id())
    return {"profile": cook_schema.dump(cook)}


def update_profile(body: dict[str, Any]) -> dict[str, Any]:
    cook_id = caller_id()
    data = update_schema.load(body)
    cook = identity_service("rpc").update_profile(cook_id, CookUpdateIn(**data))
    return {"profile": cook_schema.dump(cook)}


def get_favorite_menus(body: dict[str, Any]) -> dict[str, Any]:
    items = favorites_service("rpc").list_favorites(caller_id())
    return {"favoriteMenus": favorites_schema.dump(items)}


def add_favorite_menu(body: dict[str, Any]) -> dict[str, Any]:
    cook_id = caller_id()
    data = favorite_in_schema.load(body)
    items = favorites_service("rpc").add_favorite(cook_id, data["menu_id"])
    return {"favoriteMenus": favorites_schema.dump(items)}


def remove_favorite_menu(body: dict[str, Any]) -> dict[str, Any]:
    cook_id = caller_id()
    data = favorite_in_schema.load(body)
    items = favorites_service("rpc").remove_favorite(cook_id, data["menu_id"])
    return {"favoriteMenus": favorites_schema.dump(items)}


METHODS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "VerifyCookDetails": verify_cook_details,
    "ViewProfile": view_profile,
    "UpdateProfile": update_profile,
    "GetFavoriteMenus": get_favorite_menus,
    "AddFavoriteMenu": add_favorite_menu,
    "RemoveFavoriteMenu": remove_favorite_menu,
}


@bp.post(f"/{SERVICE_NAME}/<string:method>")
@timing
def dispatch(method: str):
    """Invoke ``method`` with the JSON request body as its message."""

    handler = METHODS.get(method)
    if handler is None:
        raise RpcError(
            "UNIMPLEMENTED", f"unknown method {SERVICE_NAME}/{method}", HTTPStatus.NOT_IMPLEMENTED
        )
    return json_response(handler(json_body()))


# --------------------------------------------------------------------------- #
# Error translation
# --------------------------------------------------------------------------- #


@bp.errorhandler(RpcError)
def handle_rpc_error(err: RpcError):
    log.warning("RpcError: code=%s msg=%s", err.code, err.message)
    return _rpc_error_response(err.code, err.message, err.status)


@bp.errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):
    log.warning("RpcError: code=INVALID_ARGUMENT msg=validation failed")
    return _rpc_error_response(
        "INVALID_ARGUMENT", "validation failed", HTTPStatus.BAD_REQUEST, details=err.messages
    )


@bp.errorhandler(ServiceError)
def handle_service_error(err: ServiceError):
    code, status = rpc_code(err)
    if status >= 500:
        log.error("RpcError: code=%s", code, exc_info=err)
        return _rpc_error_response(code, "internal error", status)
    log.warning("RpcError: code=%s msg=%s", code, err)
    return _rpc_error_response(code, str(err), status)


@bp.errorhandler(HTTPException)
def handle_http_exception(err: HTTPException):
    status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
    code = HTTP_RPC_CODES.get(status, "UNKNOWN")
    log.warning("RpcError: code=%s status=%s", code, status)
    return _rpc_error_response(code, (err.description or code).strip(), status)


@bp.errorhandler(Exception)
def handle_unexpected_error(err: Exception):
    log.error("RpcError: code=INTERNAL", exc_info=err)
    return _rpc_error_response("INTERNAL", "internal error", HTTPStatus.INTERNAL_SERVER_ERROR)
