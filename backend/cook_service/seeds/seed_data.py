"""Idempotent menu catalog seeding for local development environments."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from cook_service.services._shared.ports import CookStore, MenuRecord

LOGGER = logging.getLogger(__name__)

MENU_FIXTURES: list[dict[str, Any]] = [
    {
        "id": "pad-thai",
        "name": "Pad Thai",
        "description": "Stir-fried rice noodles with tamarind, egg and peanuts.",
        "ingredients": ["rice noodles", "tamarind paste", "egg", "tofu", "peanuts", "lime"],
    },
    {
        "id": "tom-yum-goong",
        "name": "Tom Yum Goong",
        "description": "Hot and sour shrimp soup with lemongrass.",
        "ingredients": ["shrimp", "lemongrass", "galangal", "kaffir lime leaves", "chili"],
    },
    {
        "id": "green-curry",
        "name": "Green Curry",
        "description": "Coconut curry with green chili paste and Thai basil.",
        "ingredients": ["green curry paste", "coconut milk", "chicken", "eggplant", "basil"],
    },
    {
        "id": "som-tam",
        "name": "Som Tam",
        "description": "Pounded green papaya salad.",
        "ingredients": ["green papaya", "tomato", "long beans", "fish sauce", "lime"],
    },
    {
        "id": "mango-sticky-rice",
        "name": "Mango Sticky Rice",
        "description": "Sweet glutinous rice with ripe mango and coconut cream.",
        "ingredients": ["glutinous rice", "mango", "coconut cream", "palm sugar"],
    },
]


def menu_from_fixture(fixture: Mapping[str, Any]) -> MenuRecord:
    """Build a :class:`MenuRecord` from a JSON-like mapping.

    :raises ValueError: When ``id`` or ``name`` is missing or ``id`` exceeds 64 chars.
    """
    menu_id = str(fixture.get("id") or "").strip()
    name = str(fixture.get("name") or "").strip()
    if not menu_id or len(menu_id) > 64:
        raise ValueError(f"Menu fixture has an invalid id: {fixture.get('id')!r}")
    if not name:
        raise ValueError(f"Menu fixture {menu_id!r} has no name")
    return MenuRecord(
        id=menu_id,
        name=name,
        description=str(fixture.get("description") or ""),
        ingredients=tuple(str(item) for item in fixture.get("ingredients") or ()),
    )


def load_fixture_file(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of menu objects from ``path``."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Menu fixture file must contain a JSON array")
    return data


def seed_menus(
    store: CookStore,
    fixtures: Iterable[Mapping[str, Any]] = MENU_FIXTURES,
    *,
    verbose: bool = False,
) -> dict[str, dict[str, int]]:
    """Insert or refresh catalog menus through the active cook store.

    Existing menus are overwritten with the fixture content; favorites stored
    as snapshots by the document backend are not touched.
    """
    created = existing = 0
    for fixture in fixtures:
        menu = menu_from_fixture(fixture)
        if store.get_menu(menu.id) is None:
            created += 1
        else:
            existing += 1
        store.put_menu(menu)
        if verbose:
            LOGGER.info("Seeded menu %s", menu.id, extra={"menu_id": menu.id})
    return {"menus": {"created": created, "existing": existing}}


__all__ = ["MENU_FIXTURES", "seed_menus", "load_fixture_file", "menu_from_fixture"]
