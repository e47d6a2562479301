from .base import BaseRepository
from .cook import CookRepository
from .favorite import FavoriteLinkRepository
from .menu import MenuRepository

__all__ = [
    "BaseRepository",
    "CookRepository",
    "FavoriteLinkRepository",
    "MenuRepository",
]
