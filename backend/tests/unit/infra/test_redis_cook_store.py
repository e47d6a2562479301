# tests/unit/infra/test_redis_cook_store.py
"""
Unit tests for RedisCookStore using fakeredis.

These tests exercise the key layout and the conditional writes:
- insert + index keys
- update moving index keys
- favorites snapshots (add / remove / ordering)
- failure translation into StoreError
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest
import redis
from cook_service.services._shared.ports import (
    DuplicateKeyError,
    LinkResult,
    MenuRecord,
    StoreError,
)


def _now() -> datetime:
    """Return a timezone-aware UTC "now"."""
    return datetime.now(UTC)


@pytest.fixture
def menu(redis_store) -> MenuRecord:
    record = MenuRecord(id="pad-thai", name="Pad Thai", ingredients=("noodles", "egg"))
    redis_store.put_menu(record)
    return record


def _insert(store, name="alice", email="alice@example.com", secret="hash"):
    return store.insert_cook(name=name, email=email, secret=secret)


def test_insert_writes_document_and_index_keys(redis_store, fake_redis):
    cook = _insert(redis_store)

    doc = json.loads(fake_redis.get(f"cook:{cook.id}"))
    assert doc["name"] == "alice"
    assert doc["favorites"] == []
    for field, value in (("email", "alice@example.com"), ("name", "alice"), ("secret", "hash")):
        assert fake_redis.get(f"cook:{field}:{value}").decode() == cook.id


def test_insert_rejects_duplicates_by_field(redis_store):
    _insert(redis_store)

    with pytest.raises(DuplicateKeyError) as exc:
        _insert(redis_store, name="other")
    assert exc.value.field == "email"

    with pytest.raises(DuplicateKeyError) as exc:
        _insert(redis_store, email="other@example.com", secret="hash-2")
    assert exc.value.field == "name"

    with pytest.raises(DuplicateKeyError) as exc:
        _insert(redis_store, name="other", email="other@example.com")
    assert exc.value.field == "secret"


def test_lookups_by_every_index(redis_store):
    cook = _insert(redis_store)

    assert redis_store.get_cook(cook.id) == cook
    assert redis_store.find_cook_by_email("alice@example.com") == cook
    assert redis_store.find_cook_by_name("alice") == cook
    assert redis_store.find_cook_by_secret("hash") == cook
    assert redis_store.find_cook_by_name("nobody") is None


def test_update_moves_index_keys(redis_store, fake_redis):
    cook = _insert(redis_store)

    updated = redis_store.update_cook(cook.id, {"email": "new@example.com", "avatar": "a.png"})

    assert updated.email == "new@example.com"
    assert updated.avatar == "a.png"
    assert fake_redis.get("cook:email:alice@example.com") is None
    assert fake_redis.get("cook:email:new@example.com").decode() == cook.id


def test_update_rejects_value_owned_by_another_cook(redis_store):
    _insert(redis_store, name="bob", email="bob@example.com", secret="h-bob")
    cook = _insert(redis_store)

    with pytest.raises(DuplicateKeyError) as exc:
        redis_store.update_cook(cook.id, {"name": "bob"})
    assert exc.value.field == "name"
    assert redis_store.get_cook(cook.id).name == "alice"


def test_update_missing_cook_returns_none(redis_store):
    assert redis_store.update_cook("missing", {"name": "x"}) is None


def test_add_favorite_snapshots_menu(redis_store, fake_redis, menu):
    cook = _insert(redis_store)

    assert redis_store.add_favorite(cook.id, menu.id, added_at=_now()) is LinkResult.ADDED
    redis_store.put_menu(MenuRecord(id=menu.id, name="Renamed"))

    favorites = redis_store.list_favorites(cook.id)
    assert [f.menu.name for f in favorites] == ["Pad Thai"]
    assert favorites[0].menu.ingredients == ("noodles", "egg")


def test_add_favorite_outcomes(redis_store, menu):
    cook = _insert(redis_store)

    assert redis_store.add_favorite("missing", menu.id, added_at=_now()) is LinkResult.COOK_MISSING
    assert redis_store.add_favorite(cook.id, "missing", added_at=_now()) is LinkResult.MENU_MISSING
    assert redis_store.add_favorite(cook.id, menu.id, added_at=_now()) is LinkResult.ADDED
    assert (
        redis_store.add_favorite(cook.id, menu.id, added_at=_now() + timedelta(seconds=5))
        is LinkResult.ALREADY_PRESENT
    )
    assert len(redis_store.list_favorites(cook.id)) == 1


def test_remove_favorite_outcomes(redis_store, menu):
    cook = _insert(redis_store)
    redis_store.add_favorite(cook.id, menu.id, added_at=_now())

    assert redis_store.remove_favorite("missing", menu.id) is LinkResult.COOK_MISSING
    assert redis_store.remove_favorite(cook.id, "other") is LinkResult.ABSENT
    assert redis_store.remove_favorite(cook.id, menu.id) is LinkResult.REMOVED
    assert redis_store.list_favorites(cook.id) == []


def test_list_favorites_unknown_cook_returns_none(redis_store):
    assert redis_store.list_favorites("missing") is None


def test_corrupt_document_raises_store_error(redis_store, fake_redis):
    fake_redis.set("cook:broken", "{not json")

    with pytest.raises(StoreError):
        redis_store.get_cook("broken")


def test_connection_failure_raises_store_error(redis_store, monkeypatch):
    def boom(*args, **kwargs):
        raise redis.ConnectionError("down")

    monkeypatch.setattr(redis_store.r, "get", boom)

    with pytest.raises(StoreError):
        redis_store.get_cook("any")


def test_ping(redis_store):
    assert redis_store.ping() is True
