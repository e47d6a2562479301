"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from cook_service.api.deps import json_response, timing
from cook_service.core.extensions import get_cook_store
from cook_service.services._shared.ports import StoreError

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application and storage backend health information."""

    store = get_cook_store()
    store_status = "ok"
    try:
        if not store.ping():
            store_status = "fail"
    except StoreError:
        current_app.logger.exception("healthcheck.store_error")
        store_status = "fail"
    payload = {
        "status": "ok" if store_status == "ok" else "degraded",
        "store": {"backend": store.backend, "status": store_status},
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if store_status == "ok" else 503)
