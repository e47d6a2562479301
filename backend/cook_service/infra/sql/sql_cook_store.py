# cook_service/infra/sql/sql_cook_store.py
from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cook_service.models import Cook, FavoriteLink, Menu
from cook_service.services._shared.errors import violates
from cook_service.services._shared.ports import (
    CookRecord,
    CookStore,
    DuplicateKeyError,
    FavoriteRecord,
    LinkResult,
    MenuRecord,
    StoreError,
)
from cook_service.uow import SQLAlchemyUnitOfWork

# (field, constraint name, qualified columns) used to classify IntegrityErrors
_COOK_UNIQUES = (
    ("email", "uq_cooks_email", ("cooks.email",)),
    ("name", "uq_cooks_name", ("cooks.name",)),
    ("secret", "uq_cooks_secret", ("cooks.secret",)),
)
_FAVORITE_UNIQUE = "uq_favorite_links_cook_menu"
_FAVORITE_COLUMNS = ("favorite_links.cook_id", "favorite_links.menu_id")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _cook_record(cook: Cook) -> CookRecord:
    return CookRecord(
        id=cook.id,
        name=cook.name,
        email=cook.email,
        secret=cook.secret,
        avatar=cook.avatar,
    )


def _menu_record(menu: Menu) -> MenuRecord:
    return MenuRecord(
        id=menu.id,
        name=menu.name,
        description=menu.description or "",
        ingredients=tuple(str(item) for item in (menu.ingredients or [])),
    )


@dataclass(slots=True)
class SqlCookStore(CookStore):
    """
    Relational cook store: ``cooks``, ``menus`` and ``favorite_links`` tables.

    Every method runs inside its own :class:`SQLAlchemyUnitOfWork`, so each
    check-then-write sequence commits or rolls back as one transaction.
    Profile rows are locked with ``SELECT ... FOR UPDATE`` before they are
    mutated; the named unique constraints settle races the checks miss.
    """

    backend: str = "sql"

    # -------------------- helpers --------------------

    @staticmethod
    def _duplicate_field(exc: IntegrityError) -> str:
        for field, constraint, columns in _COOK_UNIQUES:
            if violates(exc, constraint, *columns):
                return field
        return "unknown"

    @contextmanager
    def _translate(self) -> Iterator[None]:
        """Map SQLAlchemy failures onto the store error contract."""
        try:
            yield
        except IntegrityError as exc:
            raise DuplicateKeyError(self._duplicate_field(exc)) from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"relational store failure: {exc.__class__.__name__}") from exc

    # -------------------- cooks ----------------------

    def get_cook(self, cook_id: str) -> CookRecord | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            cook = uow.cooks.get(cook_id)
            return _cook_record(cook) if cook else None

    def find_cook_by_email(self, email: str) -> CookRecord | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            cook = uow.cooks.get_by_email(email)
            return _cook_record(cook) if cook else None

    def find_cook_by_name(self, name: str) -> CookRecord | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            cook = uow.cooks.get_by_name(name)
            return _cook_record(cook) if cook else None

    def find_cook_by_secret(self, secret: str) -> CookRecord | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            cook = uow.cooks.get_by_secret(secret)
            return _cook_record(cook) if cook else None

    def insert_cook(
        self, *, name: str, email: str, secret: str, avatar: str | None = None
    ) -> CookRecord:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            if uow.cooks.exists(email=email):
                raise DuplicateKeyError("email")
            if uow.cooks.exists(name=name):
                raise DuplicateKeyError("name")
            if uow.cooks.exists(secret=secret):
                raise DuplicateKeyError("secret")
            cook = uow.cooks.add(Cook(name=name, email=email, secret=secret, avatar=avatar))
            return _cook_record(cook)

    def update_cook(self, cook_id: str, changes: Mapping[str, str | None]) -> CookRecord | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            cook = uow.cooks.get_for_update(cook_id)
            if cook is None:
                return None
            for field in ("email", "name", "secret"):
                value = changes.get(field)
                if value is not None and uow.cooks.taken_by_other(
                    cook_id, field=field, value=value
                ):
                    raise DuplicateKeyError(field)
            uow.cooks.assign_updates(cook, changes)
            return _cook_record(cook)

    # -------------------- menus ----------------------

    def get_menu(self, menu_id: str) -> MenuRecord | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            menu = uow.menus.get(menu_id)
            return _menu_record(menu) if menu else None

    def put_menu(self, menu: MenuRecord) -> None:
        fields = {
            "name": menu.name,
            "description": menu.description,
            "ingredients": list(menu.ingredients),
        }
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            row = uow.menus.get_for_update(menu.id)
            if row is None:
                uow.menus.add(Menu(id=menu.id, **fields))
            else:
                uow.menus.assign_updates(row, fields)

    # -------------------- favorites ------------------

    def list_favorites(self, cook_id: str) -> list[FavoriteRecord] | None:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            if uow.cooks.get(cook_id) is None:
                return None
            return [
                FavoriteRecord(
                    menu=_menu_record(menu),
                    added_at=_as_utc(link.added_at),
                    link_id=link.id,
                )
                for link, menu in uow.favorites.list_for_cook(cook_id)
            ]

    def add_favorite(self, cook_id: str, menu_id: str, *, added_at: datetime) -> LinkResult:
        with self._translate():
            try:
                with SQLAlchemyUnitOfWork() as uow:
                    if uow.cooks.get_for_update(cook_id) is None:
                        return LinkResult.COOK_MISSING
                    if uow.menus.get(menu_id) is None:
                        return LinkResult.MENU_MISSING
                    if uow.favorites.get_link(cook_id, menu_id) is not None:
                        return LinkResult.ALREADY_PRESENT
                    uow.favorites.add(
                        FavoriteLink(cook_id=cook_id, menu_id=menu_id, added_at=added_at)
                    )
                    return LinkResult.ADDED
            except IntegrityError as exc:
                # A concurrent add won the unique (cook_id, menu_id) slot
                if violates(exc, _FAVORITE_UNIQUE, *_FAVORITE_COLUMNS):
                    return LinkResult.ALREADY_PRESENT
                raise

    def remove_favorite(self, cook_id: str, menu_id: str) -> LinkResult:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            if uow.cooks.get_for_update(cook_id) is None:
                return LinkResult.COOK_MISSING
            removed = uow.favorites.delete_link(cook_id, menu_id)
            return LinkResult.REMOVED if removed else LinkResult.ABSENT

    # -------------------- health ---------------------

    def ping(self) -> bool:
        with self._translate(), SQLAlchemyUnitOfWork() as uow:
            return uow.session.execute(text("SELECT 1")).scalar() == 1
