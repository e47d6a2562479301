"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from cook_service.models import Cook
from cook_service.uow import SQLAlchemyUnitOfWork
from tests.factories.cook import CookFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN we create a cook via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = db.session.query(Cook).count()

        with SQLAlchemyUnitOfWork() as uow:
            c = CookFactory.build()  # build = no persist
            uow.cooks.add(c)

        after = db.session.query(Cook).count()
        assert after == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = db.session.query(Cook).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            c = CookFactory.build()
            uow.cooks.add(c)
            raise RuntimeError("boom")

        after = db.session.query(Cook).count()
        assert after == initial

    def test_repositories_share_the_session(self, session):
        """
        GIVEN a writer UoW
        WHEN repositories are accessed
        THEN they all use the same session instance.
        """
        with SQLAlchemyUnitOfWork() as uow:
            assert uow.cooks.session is uow.session
            assert uow.menus.session is uow.session
            assert uow.favorites.session is uow.session
