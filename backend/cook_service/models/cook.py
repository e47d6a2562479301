"""Cook model: the profile entity owning credentials and favorites."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from cook_service.core.extensions import db

from .base import ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .favorite import FavoriteLink


def _new_cook_id() -> str:
    return str(uuid4())


class Cook(ReprMixin, TimestampMixin, db.Model):
    """
    Profile of a cook, created by registration or external sign-in.

    Fields
    ------
    id : str
        Generated UUID string; never caller-supplied.
    name : str
        Display name. Unique, trimmed, case-sensitive.
    email : str
        Contact email. Unique, stored lowercased and trimmed.
    secret : str
        Password hash or external identity marker. Unique, never returned to
        callers.
    avatar : str | None
        Optional avatar reference (URL).
    """

    __tablename__ = "cooks"

    # Columns
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_cook_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    secret: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)

    favorites: Mapped[list[FavoriteLink]] = relationship(
        back_populates="cook",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("email", name="uq_cooks_email"),
        UniqueConstraint("name", name="uq_cooks_name"),
        UniqueConstraint("secret", name="uq_cooks_secret"),
    )

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email to its stored form.

        :param key: Field name (``email``).
        :param value: Email to normalize.
        :returns: Lowercased, trimmed email.
        :raises ValueError: If email is missing.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        return value.strip().lower()

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()
