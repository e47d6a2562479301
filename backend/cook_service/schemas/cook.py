"""Cook profile schemas (HTTP and RPC bodies)."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class CookRegisterSchema(Schema):
    """Payload for local registration (``POST /register``, ``VerifyCookDetails``)."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    secret = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=256))
    avatar = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=512))


class ExternalIdentitySchema(Schema):
    """Payload for external sign-in (``POST /oauth/google``)."""

    class Meta:
        unknown = EXCLUDE

    external_subject_id = fields.String(
        required=True,
        data_key="externalSubjectId",
        validate=validate.Length(min=1, max=255),
    )
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    avatar = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=512))


class CookUpdateSchema(Schema):
    """Partial profile patch; blank values are ignored by the service."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=100))
    email = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=254))
    avatar = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=512))


class CredentialsSchema(Schema):
    """Payload for local credential verification."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    secret = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class CookSchema(Schema):
    """Public representation of a cook (never includes the secret)."""

    id = fields.String(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    avatar = fields.String(allow_none=True)


class ExternalLinkSchema(Schema):
    """Response of external sign-in: the resolved profile id only."""

    profile_id = fields.String(required=True, data_key="profileId", attribute="id")
