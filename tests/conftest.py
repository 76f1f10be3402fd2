# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_URL", "http://beam.test")

from beam_stage.api.v1.dependencies import get_slack_notifier_dep
from beam_stage.core.security import create_access_token
from beam_stage.db.session import Base, create_tables, drop_tables, enable_sqlite_foreign_keys
from beam_stage.db.session import get_db as app_get_session
from beam_stage.main import app as fastapi_app
from beam_stage.models import ROLE_ADMIN, Post, User
from beam_stage.schemas.user import Caller
from beam_stage.services.markdown import render_markdown
from beam_stage.services.slack import NewPostNotice

TEST_DB_URL = "sqlite://"


class RecordingNotifier:
    """Stand-in for the Slack notifier that remembers what it was asked to send."""

    def __init__(self) -> None:
        self.notices: list[NewPostNotice] = []

    async def post_created(self, notice: NewPostNotice) -> None:
        self.notices.append(notice)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    create_tables(bind=engine)
    try:
        yield engine
    finally:
        drop_tables(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every table is emptied after each test.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    notifier: RecordingNotifier,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_slack_notifier_dep] = lambda: notifier
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_slack_notifier_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app, base_url="http://test")


def _make_user(session: Session, user_id: str, name: str, role: str = "USER") -> User:
    user = User(id=user_id, name=name, email=f"{user_id}@beam.test", role=role)
    session.add(user)
    session.commit()
    return user


def _headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, name=user.name, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return the primary test user."""
    return _make_user(db_session, "user-alice", "Alice")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second regular user."""
    return _make_user(db_session, "user-bob", "Bob")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Create and return an administrator."""
    return _make_user(db_session, "user-root", "Root", role=ROLE_ADMIN)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _headers(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    return _headers(admin_user)


@pytest.fixture()
def caller(test_user: User) -> Caller:
    return Caller(id=test_user.id, name=test_user.name)


@pytest.fixture()
def other_caller(other_user: User) -> Caller:
    return Caller(id=other_user.id, name=other_user.name)


@pytest.fixture()
def admin_caller(admin_user: User) -> Caller:
    return Caller(id=admin_user.id, name=admin_user.name, is_admin=True)


@pytest.fixture()
def make_post(db_session: Session, test_user: User) -> Any:
    """Factory persisting posts directly, bypassing the service."""

    def _make_post(
        title: str = "Hello",
        content: str = "Some **markdown**",
        *,
        author: User | None = None,
        hidden: bool = False,
    ) -> Post:
        post = Post(
            title=title,
            content=content,
            content_html=render_markdown(content),
            author_id=(author or test_user).id,
            hidden=hidden,
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Any) -> Post:
    """Create a baseline post owned by the primary test user."""
    return make_post()
