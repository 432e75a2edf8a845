# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-townhall")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

from townhall.core.security import create_access_token  # noqa: E402
from townhall.db.session import Base, enable_sqlite_foreign_keys  # noqa: E402
from townhall.db.session import get_db as app_get_session  # noqa: E402
from townhall.main import app as fastapi_app  # noqa: E402
from townhall.models import Category, Thread, User  # noqa: E402
from townhall.services.forum import seed_categories  # noqa: E402

TEST_DB_URL = "sqlite://"

_GITHUB_ID_COUNTER = count(1000)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_user(db_session: Session, username: str) -> User:
    """Persist a GitHub-backed user with a unique GitHub id."""
    user = User(
        github_id=next(_GITHUB_ID_COUNTER),
        username=username,
        avatar_url=f"https://avatars.example.com/{username}.png",
    )
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted test user."""
    yield make_user(db_session, "octocat")


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    yield make_user(db_session, "hubot")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def categories(db_session: Session) -> list[Category]:
    """Seed and return the default forum categories."""
    seed_categories(db_session)
    return list(db_session.query(Category).order_by(Category.id).all())


@pytest.fixture()
def general_category(categories: list[Category]) -> Category:
    return next(category for category in categories if category.slug == "general")


@pytest.fixture()
def test_thread(db_session: Session, test_user: User, general_category: Category) -> Thread:
    """Create a thread in the general category."""
    thread = Thread(
        category_id=general_category.id,
        user_id=test_user.id,
        title="Welcome",
        body="Say hello here",
    )
    db_session.add(thread)
    db_session.flush()
    db_session.refresh(thread)
    return thread


@pytest.fixture()
def user_factory(db_session: Session):
    """Return a callable creating additional persisted users."""

    def _create(username: str) -> User:
        return make_user(db_session, username)

    return _create


@pytest.fixture()
def headers_for():
    """Return a callable building bearer headers for any user."""
    return bearer
