from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Protocol


class LinkResult(Enum):
    """Outcome of an atomic favorite link insert/delete."""

    ADDED = auto()
    ALREADY_PRESENT = auto()
    REMOVED = auto()
    ABSENT = auto()
    COOK_MISSING = auto()
    MENU_MISSING = auto()


class StoreError(Exception):
    """Raised by store adapters when the backend fails (I/O, timeout, driver)."""


class DuplicateKeyError(StoreError):
    """
    Raised when a write would break a uniqueness invariant.

    :ivar field: Colliding profile field (``"email"``, ``"name"`` or ``"secret"``).
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"duplicate value for {field}")
        self.field = field


@dataclass(frozen=True, slots=True)
class CookRecord:
    """
    Read-model for a stored cook profile.

    :ivar id: Generated UUID string.
    :ivar name: Unique display name.
    :ivar email: Unique, normalized email.
    :ivar secret: Password hash or external identity marker.
    :ivar avatar: Optional avatar reference.
    """

    id: str
    name: str
    email: str
    secret: str
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class MenuRecord:
    """Read-model for a catalog menu."""

    id: str
    name: str
    description: str = ""
    ingredients: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class FavoriteRecord:
    """
    One favorite link with the menu it points to.

    For the relational backend ``menu`` is the live catalog row; for the
    document backend it is the snapshot copied when the link was created.
    """

    menu: MenuRecord
    added_at: datetime
    link_id: int | None = None


class CookStore(Protocol):
    """
    Persistence port for cook profiles and their favorite menus.

    Implementations own no business rules; every method is a single atomic
    transition in the backend. Backend failures surface as :class:`StoreError`.
    """

    backend: str

    def get_cook(self, cook_id: str) -> CookRecord | None:
        """Fetch a profile by id."""

    def find_cook_by_email(self, email: str) -> CookRecord | None:
        """Fetch a profile by normalized email."""

    def find_cook_by_name(self, name: str) -> CookRecord | None:
        """Fetch a profile by exact (trimmed) name."""

    def find_cook_by_secret(self, secret: str) -> CookRecord | None:
        """Fetch a profile by its stored secret (external identity marker)."""

    def insert_cook(
        self, *, name: str, email: str, secret: str, avatar: str | None = None
    ) -> CookRecord:
        """
        Create a profile with a freshly generated id.

        :raises DuplicateKeyError: When ``email`` or ``name`` (or the external
            marker, for the document backend) is already taken.
        """

    def update_cook(self, cook_id: str, changes: Mapping[str, str | None]) -> CookRecord | None:
        """
        Apply ``changes`` (subset of ``name``, ``email``, ``avatar``, ``secret``).

        Uniqueness is re-checked against every *other* profile inside the same
        atomic write.

        :returns: Updated record, or ``None`` when the profile does not exist.
        :raises DuplicateKeyError: When a changed field collides.
        """

    def get_menu(self, menu_id: str) -> MenuRecord | None:
        """Fetch a catalog menu."""

    def put_menu(self, menu: MenuRecord) -> None:
        """Insert or replace a catalog menu (seeding only)."""

    def list_favorites(self, cook_id: str) -> Sequence[FavoriteRecord] | None:
        """
        List the profile's favorites in storage order.

        :returns: Favorites, or ``None`` when the profile does not exist.
        """

    def add_favorite(self, cook_id: str, menu_id: str, *, added_at: datetime) -> LinkResult:
        """Conditionally insert the (cook, menu) link."""

    def remove_favorite(self, cook_id: str, menu_id: str) -> LinkResult:
        """Conditionally delete the (cook, menu) link."""

    def ping(self) -> bool:
        """Return ``True`` when the backend answers."""
