"""Registration and external sign-in endpoints."""

from __future__ import annotations

from flask import Blueprint

from cook_service.api.deps import identity_service, json_body, json_response, timing
from cook_service.schemas import (
    CookRegisterSchema,
    CookSchema,
    CredentialsSchema,
    ExternalIdentitySchema,
    ExternalLinkSchema,
)
from cook_service.services import CookAuthIn, CookRegisterIn, ExternalIdentityIn

bp = Blueprint("auth", __name__)

register_schema = CookRegisterSchema()
external_schema = ExternalIdentitySchema()
credentials_schema = CredentialsSchema()
cook_schema = CookSchema()
link_schema = ExternalLinkSchema()


@bp.post("/register")
@timing
def register():
    """Register a cook with a local secret and return the profile."""

    data = register_schema.load(json_body())
    cook = identity_service().register(CookRegisterIn(**data))
    return json_response({"data": cook_schema.dump(cook)})


@bp.post("/oauth/google")
@timing
def oauth_google():
    """Resolve or link an externally asserted identity; never conflicts."""

    data = external_schema.load(json_body())
    cook = identity_service().resolve_or_link_external(ExternalIdentityIn(**data))
    return json_response({"data": link_schema.dump(cook)})


@bp.post("/authenticate")
@timing
def authenticate():
    """Verify a locally registered secret and return the profile."""

    data = credentials_schema.load(json_body())
    cook = identity_service().authenticate(CookAuthIn(**data))
    return json_response({"data": cook_schema.dump(cook)})
