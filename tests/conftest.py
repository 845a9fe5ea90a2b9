"""Shared fixtures: in-memory database and an authenticated test client."""

from __future__ import annotations

import os
from typing import Dict, Iterator, Optional

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from judgepanel import models  # noqa: F401 - register tables
from judgepanel.api.deps import get_identity
from judgepanel.app import app
from judgepanel.core import AuthorizationError, get_session
from judgepanel.models import Judge, Team
from judgepanel.services.judges import Identity


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def judge(session: Session) -> Judge:
    judge = Judge(external_id="google-judge-1", name="Grace Hopper", email="grace@example.com")
    session.add(judge)
    session.commit()
    session.refresh(judge)
    return judge


@pytest.fixture
def other_judge(session: Session) -> Judge:
    judge = Judge(external_id="google-judge-2", name="Alan Turing", email="alan@example.com")
    session.add(judge)
    session.commit()
    session.refresh(judge)
    return judge


@pytest.fixture
def make_team(session: Session):
    def _make(name: str, judge: Optional[Judge] = None) -> Team:
        team = Team(name=name, judge_id=judge.id if judge else None)
        session.add(team)
        session.commit()
        session.refresh(team)
        return team

    return _make


@pytest.fixture
def identity_holder() -> Dict[str, Optional[Identity]]:
    return {
        "identity": Identity(
            external_id="google-judge-1", name="Grace Hopper", email="grace@example.com"
        )
    }


@pytest.fixture
def client(engine, identity_holder) -> Iterator[TestClient]:
    def _session_override() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    def _identity_override() -> Identity:
        identity = identity_holder["identity"]
        if identity is None:
            raise AuthorizationError()
        return identity

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_identity] = _identity_override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def cookie_client(engine) -> Iterator[TestClient]:
    """Client that authenticates through the real session-cookie dependency."""

    def _session_override() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
