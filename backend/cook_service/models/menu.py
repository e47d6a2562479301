"""Menu model: read-only catalog entry referenced by favorites."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cook_service.core.extensions import db

from .base import ReprMixin


class Menu(ReprMixin, db.Model):
    """
    Catalog menu owned outside this service.

    Rows are loaded by the ``seed menus`` CLI command; the service only reads
    them to validate and render favorites.
    """

    __tablename__ = "menus"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    ingredients: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
