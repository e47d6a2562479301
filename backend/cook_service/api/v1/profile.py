"""Profile endpoints for the resolved caller."""

from __future__ import annotations

from flask import Blueprint

from cook_service.api.deps import (
    identity_service,
    json_body,
    json_response,
    resolve_caller_id,
    timing,
)
from cook_service.schemas import CookSchema, CookUpdateSchema
from cook_service.services import CookUpdateIn

bp = Blueprint("profile", __name__)

update_schema = CookUpdateSchema()
cook_schema = CookSchema()


@bp.get("/profile")
@timing
def view_profile():
    cook = identity_service().view_profile(resolve_caller_id())
    return json_response({"data": cook_schema.dump(cook)})


@bp.put("/profile")
@timing
def update_profile():
    """Apply a partial patch (``name``, ``email``, ``avatar``) to the caller."""

    caller_id = resolve_caller_id()
    data = update_schema.load(json_body())
    cook = identity_service().update_profile(caller_id, CookUpdateIn(**data))
    return json_response({"data": cook_schema.dump(cook)})
