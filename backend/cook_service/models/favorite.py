"""Join table relating cooks to their favorite menus."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cook_service.core.extensions import db

from .base import PKMixin, ReprMixin

if TYPE_CHECKING:
    from .cook import Cook
    from .menu import Menu


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FavoriteLink(PKMixin, ReprMixin, db.Model):
    """
    One (cook, menu) favorite pairing.

    The ``(cook_id, menu_id)`` pair is unique so a repeated add can never
    create a duplicate row. Listing order is ``added_at`` then ``id``.
    """

    __tablename__ = "favorite_links"

    cook_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("cooks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    menu_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    cook: Mapped[Cook] = relationship(back_populates="favorites")
    menu: Mapped[Menu] = relationship()

    __table_args__ = (UniqueConstraint("cook_id", "menu_id", name="uq_favorite_links_cook_menu"),)
