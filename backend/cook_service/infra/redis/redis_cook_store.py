# comments in English; reST docstrings
from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from cook_service.services._shared.ports import (
    CookRecord,
    CookStore,
    DuplicateKeyError,
    FavoriteRecord,
    LinkResult,
    MenuRecord,
    StoreError,
)

# Profile fields mirrored by an ``cook:{field}:{value}`` index key
INDEXED_FIELDS = ("email", "name", "secret")
UPDATABLE_FIELDS = frozenset({"name", "email", "avatar", "secret"})


def _b(value: bytes | str | None) -> str | None:
    if value is None:
        return None
    return value.decode() if isinstance(value, bytes | bytearray) else str(value)


def _load(raw: bytes | str | None) -> dict[str, Any] | None:
    return json.loads(raw) if raw else None


def _menu_doc(menu: MenuRecord) -> dict[str, Any]:
    return {
        "id": menu.id,
        "name": menu.name,
        "description": menu.description,
        "ingredients": list(menu.ingredients),
    }


def _menu_record(doc: Mapping[str, Any]) -> MenuRecord:
    return MenuRecord(
        id=doc["id"],
        name=doc.get("name", ""),
        description=doc.get("description", ""),
        ingredients=tuple(doc.get("ingredients", ())),
    )


def _cook_record(doc: Mapping[str, Any]) -> CookRecord:
    return CookRecord(
        id=doc["id"],
        name=doc["name"],
        email=doc["email"],
        secret=doc["secret"],
        avatar=doc.get("avatar"),
    )


@dataclass(slots=True)
class RedisCookStore(CookStore):
    """
    Document cook store: one JSON profile per cook with embedded favorites.

    Key layout
    ----------
    ``cook:{id}``
        Profile document; ``favorites`` is an array of menu snapshots copied
        at favorite time.
    ``cook:email:{email}``, ``cook:name:{name}``, ``cook:secret:{secret}``
        Index keys holding the owning cook id; they enforce uniqueness.
    ``menu:{id}``
        Catalog menu documents.

    Check-then-write sequences use WATCH/MULTI/EXEC and retry on
    :class:`redis.WatchError`.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis
    backend: str = "redis"

    # -------------------- helpers --------------------

    @staticmethod
    def _k(cook_id: str) -> str:
        return f"cook:{cook_id}"

    @staticmethod
    def _ki(field: str, value: str) -> str:
        return f"cook:{field}:{value}"

    @staticmethod
    def _km(menu_id: str) -> str:
        return f"menu:{menu_id}"

    @staticmethod
    def _now() -> str:
        return datetime.now(UTC).isoformat()

    @contextmanager
    def _translate(self) -> Iterator[None]:
        """Map client failures (connection, timeout, corrupt JSON) onto StoreError."""
        try:
            yield
        except RedisError as exc:
            raise StoreError(f"document store failure: {exc.__class__.__name__}") from exc
        except ValueError as exc:
            raise StoreError("document store returned a malformed document") from exc

    def _get_doc(self, key: str) -> dict[str, Any] | None:
        return _load(self.r.get(key))

    def _find_by_index(self, field: str, value: str) -> CookRecord | None:
        with self._translate():
            cook_id = _b(self.r.get(self._ki(field, value)))
            if cook_id is None:
                return None
            doc = self._get_doc(self._k(cook_id))
            return _cook_record(doc) if doc else None

    # -------------------- cooks ----------------------

    def get_cook(self, cook_id: str) -> CookRecord | None:
        with self._translate():
            doc = self._get_doc(self._k(cook_id))
            return _cook_record(doc) if doc else None

    def find_cook_by_email(self, email: str) -> CookRecord | None:
        return self._find_by_index("email", email)

    def find_cook_by_name(self, name: str) -> CookRecord | None:
        return self._find_by_index("name", name)

    def find_cook_by_secret(self, secret: str) -> CookRecord | None:
        return self._find_by_index("secret", secret)

    def insert_cook(
        self, *, name: str, email: str, secret: str, avatar: str | None = None
    ) -> CookRecord:
        """
        Create the profile document and its index keys in one transaction.

        The index keys are watched so a concurrent insert claiming the same
        email, name or marker aborts this EXEC and the checks run again.
        """
        now = self._now()
        doc: dict[str, Any] = {
            "id": str(uuid4()),
            "name": name,
            "email": email,
            "secret": secret,
            "avatar": avatar,
            "created_at": now,
            "updated_at": now,
            "favorites": [],
        }
        index_keys = {field: self._ki(field, doc[field]) for field in INDEXED_FIELDS}

        with self._translate():
            while True:
                try:
                    with self.r.pipeline() as p:
                        p.watch(*index_keys.values())
                        for field, key in index_keys.items():
                            if p.exists(key):
                                p.unwatch()
                                raise DuplicateKeyError(field)

                        p.multi()
                        p.set(self._k(doc["id"]), json.dumps(doc))
                        for key in index_keys.values():
                            p.set(key, doc["id"])
                        p.execute()
                    return _cook_record(doc)
                except redis.WatchError:
                    # Concurrent modification detected; retry loop
                    continue

    def update_cook(self, cook_id: str, changes: Mapping[str, str | None]) -> CookRecord | None:
        """
        Apply ``changes`` and move the index keys of changed unique fields.

        A changed field is rejected when its index key is owned by another
        cook; the profile key and every target index key are watched.
        """
        updates = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        key = self._k(cook_id)

        with self._translate():
            while True:
                try:
                    with self.r.pipeline() as p:
                        p.watch(key)
                        doc = _load(p.get(key))
                        if doc is None:
                            p.unwatch()
                            return None

                        moves: list[tuple[str, str]] = []
                        for field in INDEXED_FIELDS:
                            value = updates.get(field)
                            if value is None or value == doc.get(field):
                                continue
                            new_key = self._ki(field, value)
                            p.watch(new_key)
                            owner = _b(p.get(new_key))
                            if owner is not None and owner != cook_id:
                                p.unwatch()
                                raise DuplicateKeyError(field)
                            moves.append((self._ki(field, doc[field]), new_key))

                        doc.update(updates)
                        doc["updated_at"] = self._now()

                        p.multi()
                        p.set(key, json.dumps(doc))
                        for old_key, new_key in moves:
                            p.delete(old_key)
                            p.set(new_key, cook_id)
                        p.execute()
                    return _cook_record(doc)
                except redis.WatchError:
                    continue

    # -------------------- menus ----------------------

    def get_menu(self, menu_id: str) -> MenuRecord | None:
        with self._translate():
            doc = self._get_doc(self._km(menu_id))
            return _menu_record(doc) if doc else None

    def put_menu(self, menu: MenuRecord) -> None:
        with self._translate():
            self.r.set(self._km(menu.id), json.dumps(_menu_doc(menu)))

    # -------------------- favorites ------------------

    def list_favorites(self, cook_id: str) -> list[FavoriteRecord] | None:
        with self._translate():
            doc = self._get_doc(self._k(cook_id))
            if doc is None:
                return None
            return [
                FavoriteRecord(
                    menu=_menu_record(entry["menu"]),
                    added_at=datetime.fromisoformat(entry["added_at"]),
                )
                for entry in doc.get("favorites", [])
            ]

    def add_favorite(self, cook_id: str, menu_id: str, *, added_at: datetime) -> LinkResult:
        """
        Append a snapshot of the menu to the cook's ``favorites`` array.

        The snapshot is a copy: later edits to ``menu:{id}`` never reach it.
        """
        key, menu_key = self._k(cook_id), self._km(menu_id)

        with self._translate():
            while True:
                try:
                    with self.r.pipeline() as p:
                        p.watch(key, menu_key)
                        doc = _load(p.get(key))
                        if doc is None:
                            p.unwatch()
                            return LinkResult.COOK_MISSING
                        menu = _load(p.get(menu_key))
                        if menu is None:
                            p.unwatch()
                            return LinkResult.MENU_MISSING

                        favorites = doc.setdefault("favorites", [])
                        if any(entry["menu"]["id"] == menu_id for entry in favorites):
                            p.unwatch()
                            return LinkResult.ALREADY_PRESENT

                        favorites.append(
                            {"menu": _menu_doc(_menu_record(menu)), "added_at": added_at.isoformat()}
                        )
                        p.multi()
                        p.set(key, json.dumps(doc))
                        p.execute()
                    return LinkResult.ADDED
                except redis.WatchError:
                    continue

    def remove_favorite(self, cook_id: str, menu_id: str) -> LinkResult:
        key = self._k(cook_id)

        with self._translate():
            while True:
                try:
                    with self.r.pipeline() as p:
                        p.watch(key)
                        doc = _load(p.get(key))
                        if doc is None:
                            p.unwatch()
                            return LinkResult.COOK_MISSING

                        favorites = doc.get("favorites", [])
                        kept = [entry for entry in favorites if entry["menu"]["id"] != menu_id]
                        if len(kept) == len(favorites):
                            p.unwatch()
                            return LinkResult.ABSENT

                        doc["favorites"] = kept
                        p.multi()
                        p.set(key, json.dumps(doc))
                        p.execute()
                    return LinkResult.REMOVED
                except redis.WatchError:
                    continue

    # -------------------- health ---------------------

    def ping(self) -> bool:
        with self._translate():
            return bool(self.r.ping())
