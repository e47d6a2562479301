"""Menu repository (read-mostly catalog)."""

from __future__ import annotations

from cook_service.models.menu import Menu
from cook_service.repositories.base import BaseRepository


class MenuRepository(BaseRepository[Menu]):
    """Persistence-only repository for :class:`Menu`."""

    model = Menu

    def _updatable_fields(self):
        return {"name", "description", "ingredients"}
