from cook_service.models.cook import Cook
from cook_service.models.favorite import FavoriteLink
from cook_service.models.menu import Menu

__all__ = ["Cook", "FavoriteLink", "Menu"]
