"""Favorites ledger behaviour, exercised against both storage backends."""

from __future__ import annotations

import uuid

import pytest
from cook_service.services._shared.errors import InvalidInputError, NotFoundError
from cook_service.services._shared.ports import MenuRecord
from cook_service.services.favorites.service import FavoritesService
from cook_service.services.identity.dto import CookRegisterIn
from cook_service.services.identity.service import IdentityService


class TestFavoritesService:
    """Set semantics: idempotent add, silent remove, storage-ordered listing."""

    @pytest.fixture()
    def service(self, store) -> FavoritesService:
        return FavoritesService(store)

    @pytest.fixture()
    def cook_id(self, store, hasher) -> str:
        identity = IdentityService(store, hasher)
        cook = identity.register(
            CookRegisterIn(name="chef", email="chef@example.com", secret="s3cret")
        )
        return cook.id

    # -------------------------- Listing ----------------------------------- #

    def test_new_cook_has_no_favorites(self, service, cook_id):
        assert service.list_favorites(cook_id) == []

    def test_list_for_unknown_cook_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.list_favorites(str(uuid.uuid4()))

    # -------------------------- Add --------------------------------------- #

    def test_add_returns_current_list_in_insertion_order(self, service, cook_id):
        service.add_favorite(cook_id, "pad-thai")
        items = service.add_favorite(cook_id, "green-curry")

        assert [item.menu_id for item in items] == ["pad-thai", "green-curry"]
        first = items[0]
        assert first.name == "Pad Thai"
        assert first.ingredients == ("rice noodles", "tamarind", "peanuts")
        assert first.added_at.tzinfo is not None

    def test_add_is_idempotent(self, service, cook_id):
        once = service.add_favorite(cook_id, "pad-thai")
        twice = service.add_favorite(cook_id, "pad-thai")

        assert [item.menu_id for item in twice] == ["pad-thai"]
        assert twice[0].added_at == once[0].added_at

    def test_add_unknown_menu_is_not_found(self, service, cook_id):
        with pytest.raises(NotFoundError) as exc:
            service.add_favorite(cook_id, "no-such-menu")
        assert exc.value.entity == "Menu"
        assert service.list_favorites(cook_id) == []

    def test_add_for_unknown_cook_is_not_found(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.add_favorite(str(uuid.uuid4()), "pad-thai")
        assert exc.value.entity == "Cook"

    @pytest.mark.parametrize("menu_id", ["", "   ", "x" * 65])
    def test_add_rejects_malformed_menu_id(self, service, cook_id, menu_id):
        with pytest.raises(InvalidInputError):
            service.add_favorite(cook_id, menu_id)

    # -------------------------- Remove ------------------------------------ #

    def test_remove_drops_only_that_menu(self, service, cook_id):
        service.add_favorite(cook_id, "pad-thai")
        service.add_favorite(cook_id, "green-curry")

        items = service.remove_favorite(cook_id, "pad-thai")

        assert [item.menu_id for item in items] == ["green-curry"]

    def test_remove_absent_menu_succeeds_silently(self, service, cook_id):
        service.add_favorite(cook_id, "pad-thai")

        items = service.remove_favorite(cook_id, "som-tam")

        assert [item.menu_id for item in items] == ["pad-thai"]

    def test_remove_for_unknown_cook_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.remove_favorite(str(uuid.uuid4()), "pad-thai")

    def test_re_adding_after_remove_appends_at_the_end(self, service, cook_id):
        service.add_favorite(cook_id, "pad-thai")
        service.add_favorite(cook_id, "green-curry")
        service.remove_favorite(cook_id, "pad-thai")

        items = service.add_favorite(cook_id, "pad-thai")

        assert [item.menu_id for item in items] == ["green-curry", "pad-thai"]

    def test_favorites_are_private_to_each_cook(self, service, store, hasher, cook_id):
        other = IdentityService(store, hasher).register(
            CookRegisterIn(name="other", email="other@example.com", secret="x")
        )
        service.add_favorite(cook_id, "pad-thai")

        assert service.list_favorites(other.id) == []


class TestFavoriteSnapshots:
    """Catalog edits reach relational favorites but not document snapshots."""

    def _setup(self, store, hasher):
        cook = IdentityService(store, hasher).register(
            CookRegisterIn(name="snap", email="snap@example.com", secret="x")
        )
        service = FavoritesService(store)
        service.add_favorite(cook.id, "som-tam")
        store.put_menu(MenuRecord(id="som-tam", name="Som Tam Thai", ingredients=("papaya",)))
        return service.list_favorites(cook.id)[0]

    def test_relational_favorites_follow_the_catalog(self, sql_store, hasher):
        sql_store.put_menu(MenuRecord(id="som-tam", name="Som Tam"))
        assert self._setup(sql_store, hasher).name == "Som Tam Thai"

    def test_document_favorites_keep_the_snapshot(self, redis_store, hasher):
        redis_store.put_menu(MenuRecord(id="som-tam", name="Som Tam"))
        assert self._setup(redis_store, hasher).name == "Som Tam"
