"""Favorite link repository backing the relational favorites ledger."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from cook_service.models.favorite import FavoriteLink
from cook_service.models.menu import Menu
from cook_service.repositories.base import BaseRepository


class FavoriteLinkRepository(BaseRepository[FavoriteLink]):
    """Persistence-only repository for :class:`FavoriteLink`."""

    model = FavoriteLink

    def list_for_cook(self, cook_id: str) -> list[tuple[FavoriteLink, Menu]]:
        """Return ``(link, menu)`` pairs ordered by ``added_at`` then ``id``.

        :param cook_id: Owner of the links.
        :type cook_id: str
        :returns: Links joined with their live catalog rows.
        :rtype: list[tuple[FavoriteLink, Menu]]
        """
        stmt = (
            select(FavoriteLink, Menu)
            .join(Menu, Menu.id == FavoriteLink.menu_id)
            .where(FavoriteLink.cook_id == cook_id)
            .order_by(FavoriteLink.added_at.asc(), FavoriteLink.id.asc())
        )
        return [(link, menu) for link, menu in self.session.execute(stmt).all()]

    def get_link(self, cook_id: str, menu_id: str) -> FavoriteLink | None:
        stmt = select(FavoriteLink).where(
            FavoriteLink.cook_id == cook_id, FavoriteLink.menu_id == menu_id
        )
        return cast(FavoriteLink | None, self.session.execute(stmt).scalars().first())

    def delete_link(self, cook_id: str, menu_id: str) -> bool:
        """Delete the (cook, menu) link in one statement.

        :returns: ``True`` when a row was removed.
        """
        stmt = delete(FavoriteLink).where(
            FavoriteLink.cook_id == cook_id, FavoriteLink.menu_id == menu_id
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)
