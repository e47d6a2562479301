"""Factory Boy definitions for catalog menus and favorite links."""

from __future__ import annotations

from datetime import UTC, datetime

from cook_service.models import FavoriteLink, Menu

import factory
from tests.factories import BaseFactory
from tests.factories.cook import CookFactory


class MenuFactory(BaseFactory):
    class Meta:
        model = Menu

    id = factory.Sequence(lambda n: f"menu-{n}")
    name = factory.Sequence(lambda n: f"Menu {n}")
    description = factory.Faker("sentence", nb_words=6)
    ingredients = factory.LazyFunction(lambda: ["rice", "garlic"])


class FavoriteLinkFactory(BaseFactory):
    """Persist one (cook, menu) pairing."""

    class Meta:
        model = FavoriteLink

    id = None  # let autoincrement handle it
    cook = factory.SubFactory(CookFactory)
    menu = factory.SubFactory(MenuFactory)
    added_at = factory.LazyFunction(lambda: datetime.now(UTC))
