"""Favorite menu endpoints for the resolved caller."""

from __future__ import annotations

from flask import Blueprint

from cook_service.api.deps import (
    favorites_service,
    json_body,
    json_response,
    resolve_caller_id,
    timing,
)
from cook_service.schemas import FavoriteMenuInSchema, FavoriteMenuSchema

bp = Blueprint("favorites", __name__)

favorite_in_schema = FavoriteMenuInSchema()
favorites_schema = FavoriteMenuSchema(many=True)


@bp.get("")
@timing
def list_favorites():
    items = favorites_service().list_favorites(resolve_caller_id())
    return json_response({"data": favorites_schema.dump(items)})


@bp.post("")
@timing
def add_favorite():
    """Favorite a menu; repeating the call is a no-op."""

    caller_id = resolve_caller_id()
    data = favorite_in_schema.load(json_body())
    items = favorites_service().add_favorite(caller_id, data["menu_id"])
    return json_response({"data": favorites_schema.dump(items)})


@bp.delete("/<string:menu_id>")
@timing
def remove_favorite(menu_id: str):
    """Unfavorite a menu; removing an absent link still succeeds."""

    items = favorites_service().remove_favorite(resolve_caller_id(), menu_id)
    return json_response({"data": favorites_schema.dump(items)})
