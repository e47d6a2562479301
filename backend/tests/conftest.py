"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Store-level tests
can also run against an in-memory Redis provided by ``fakeredis``.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from cook_service.core.config import TestingConfig
from cook_service.core.extensions import COOK_STORE_KEY
from cook_service.core.extensions import db as _db  # Flask-SQLAlchemy instance
from cook_service.factory import create_app  # application factory under test
from cook_service.infra.redis.redis_cook_store import RedisCookStore
from cook_service.infra.security.werkzeug_hasher import WerkzeugCredentialHasher
from cook_service.infra.sql.sql_cook_store import SqlCookStore
from cook_service.services._shared.ports import MenuRecord
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

MENUS = (
    MenuRecord(
        id="pad-thai",
        name="Pad Thai",
        description="Stir-fried rice noodles.",
        ingredients=("rice noodles", "tamarind", "peanuts"),
    ),
    MenuRecord(
        id="green-curry",
        name="Green Curry",
        description="Coconut curry.",
        ingredients=("curry paste", "coconut milk"),
    ),
    MenuRecord(id="som-tam", name="Som Tam", ingredients=("papaya", "lime")),
)


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    The pysqlite driver manages transactions on its own and breaks SAVEPOINT
    semantics; the listeners hand BEGIN back to SQLAlchemy.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        engine = _db.engine

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by nested transactions in each test.
    """
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in an outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    Every ``commit()`` issued by the unit of work only releases a SAVEPOINT;
    the outer transaction is rolled back at teardown.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session joining it through SAVEPOINTs
    SessionFactory = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    scoped = scoped_session(SessionFactory)

    # 3) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Cook store backends --------------------------------------------------------
@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def sql_store(session):
    """Relational store running inside the per-test transaction."""
    return SqlCookStore()


@pytest.fixture
def redis_store(fake_redis):
    """Document store backed by FakeRedis."""
    return RedisCookStore(r=fake_redis)


@pytest.fixture(params=["sql", "redis"])
def store(request):
    """Run the requesting test once per storage backend, with menus seeded."""
    backend = request.getfixturevalue(f"{request.param}_store")
    for menu in MENUS:
        backend.put_menu(menu)
    return backend


@pytest.fixture(scope="session")
def hasher():
    """Cheap hasher so suites stay fast."""
    return WerkzeugCredentialHasher(method=TestingConfig.PASSWORD_HASH_METHOD)


@pytest.fixture
def client(app, store):
    """HTTP test client whose app uses the parametrized cook store."""
    original = app.extensions[COOK_STORE_KEY]
    app.extensions[COOK_STORE_KEY] = store
    try:
        yield app.test_client()
    finally:
        app.extensions[COOK_STORE_KEY] = original
