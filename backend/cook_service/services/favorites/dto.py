"""DTOs for FavoritesService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from cook_service.services._shared.ports import FavoriteRecord


@dataclass(frozen=True, slots=True)
class FavoriteMenuOut:
    """
    One favorite menu as seen by the owning cook.

    :param menu_id: Favorited menu identifier.
    :param name: Menu name (live row or snapshot, depending on the backend).
    :param description: Menu description.
    :param ingredients: Ordered ingredient list.
    :param added_at: When the link was created (UTC).
    """

    menu_id: str
    name: str
    description: str
    ingredients: tuple[str, ...]
    added_at: datetime

    @classmethod
    def from_record(cls, record: FavoriteRecord) -> FavoriteMenuOut:
        return cls(
            menu_id=record.menu.id,
            name=record.menu.name,
            description=record.menu.description,
            ingredients=record.menu.ingredients,
            added_at=record.added_at,
        )
