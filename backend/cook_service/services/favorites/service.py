"""
FavoritesService
================

Favorites ledger for a resolved cook: idempotent add, silent remove and
storage-ordered listing.
"""

from __future__ import annotations

from datetime import UTC, datetime

from cook_service.services._shared.base import BaseService
from cook_service.services._shared.errors import InternalError, NotFoundError
from cook_service.services._shared.policies.common import validate_cook_id, validate_menu_id
from cook_service.services._shared.ports import LinkResult
from cook_service.services.favorites.dto import FavoriteMenuOut


class FavoritesService(BaseService):
    """
    Application service for the (cook, menu) favorite relation.

    Every mutation is one conditional write in the store; the returned list is
    read afterwards so callers always see the current state.
    """

    def list_favorites(self, cook_id: str) -> list[FavoriteMenuOut]:
        """
        List the caller's favorites in storage order.

        :param cook_id: Resolved caller identity.
        :type cook_id: str
        :returns: Favorite menus (relational: by ``added_at``; document:
            array order).
        :rtype: list[FavoriteMenuOut]
        :raises NotFoundError: When the cook does not exist.
        """
        cook_id = validate_cook_id(cook_id)
        records = self.guarded(lambda: self.store.list_favorites(cook_id))
        if records is None:
            raise NotFoundError(self.entity, cook_id)
        return [FavoriteMenuOut.from_record(record) for record in records]

    def add_favorite(self, cook_id: str, menu_id: str) -> list[FavoriteMenuOut]:
        """
        Add ``menu_id`` to the caller's favorites (set union).

        :raises NotFoundError: When the cook or the menu does not exist.
        """
        cook_id = validate_cook_id(cook_id)
        menu_id = validate_menu_id(menu_id)

        result = self.guarded(
            lambda: self.store.add_favorite(cook_id, menu_id, added_at=datetime.now(UTC))
        )
        if result is LinkResult.COOK_MISSING:
            raise NotFoundError(self.entity, cook_id)
        if result is LinkResult.MENU_MISSING:
            raise NotFoundError("Menu", menu_id)
        if result is LinkResult.ADDED:
            self.log_event("favorite.added", cook_id=cook_id, menu_id=menu_id)
        elif result is not LinkResult.ALREADY_PRESENT:
            raise InternalError(f"unexpected link result {result.name} for add")
        return self.list_favorites(cook_id)

    def remove_favorite(self, cook_id: str, menu_id: str) -> list[FavoriteMenuOut]:
        """
        Remove ``menu_id`` from the caller's favorites (set difference).

        Removing a menu that is not favorited succeeds silently.

        :raises NotFoundError: When the cook does not exist.
        """
        cook_id = validate_cook_id(cook_id)
        menu_id = validate_menu_id(menu_id)

        result = self.guarded(lambda: self.store.remove_favorite(cook_id, menu_id))
        if result is LinkResult.COOK_MISSING:
            raise NotFoundError(self.entity, cook_id)
        if result is LinkResult.REMOVED:
            self.log_event("favorite.removed", cook_id=cook_id, menu_id=menu_id)
        elif result is not LinkResult.ABSENT:
            raise InternalError(f"unexpected link result {result.name} for remove")
        return self.list_favorites(cook_id)
