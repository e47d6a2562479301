"""Favorite menu schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class FavoriteMenuInSchema(Schema):
    """Payload naming the menu to add or remove."""

    class Meta:
        unknown = EXCLUDE

    menu_id = fields.String(
        required=True,
        data_key="menuId",
        validate=validate.Length(min=1, max=64),
    )


class FavoriteMenuSchema(Schema):
    """One favorite menu as returned to its owner."""

    menu_id = fields.String(required=True, data_key="menuId")
    name = fields.String(required=True)
    description = fields.String()
    ingredients = fields.List(fields.String())
    added_at = fields.DateTime(required=True, data_key="addedAt")
