"""Cook repository: lookups by every unique identifier."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from cook_service.models.cook import Cook
from cook_service.repositories.base import BaseRepository


class CookRepository(BaseRepository[Cook]):
    """Persistence-only repository for :class:`Cook`.

    Uniqueness rules live in the services and the ``uq_cooks_*``
    constraints; this class only answers lookups.
    """

    model = Cook

    def _filterable_fields(self):
        return {
            "email": Cook.email,
            "name": Cook.name,
            "secret": Cook.secret,
        }

    def _updatable_fields(self):
        return {"name", "email", "avatar", "secret"}

    def get_by_email(self, email: str) -> Cook | None:
        """Fetch a cook by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Cook instance or ``None`` when not found.
        :rtype: Cook | None
        """
        stmt = select(Cook).where(Cook.email == email.lower().strip())
        return cast(Cook | None, self.session.execute(stmt).scalars().first())

    def get_by_name(self, name: str) -> Cook | None:
        stmt = select(Cook).where(Cook.name == name.strip())
        return cast(Cook | None, self.session.execute(stmt).scalars().first())

    def get_by_secret(self, secret: str) -> Cook | None:
        stmt = select(Cook).where(Cook.secret == secret)
        return cast(Cook | None, self.session.execute(stmt).scalars().first())

    def taken_by_other(self, cook_id: str, *, field: str, value: str) -> bool:
        """Return ``True`` when another cook already holds ``value`` in ``field``.

        :param cook_id: Cook whose own row is excluded from the check.
        :param field: ``"name"`` or ``"email"``.
        :param value: Normalized candidate value.
        """
        column = self._filterable_fields()[field]
        stmt = select(Cook.id).where(column == value, Cook.id != cook_id).limit(1)
        return self.session.execute(stmt).first() is not None
