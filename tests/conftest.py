"""Shared fixtures: in-memory database, seeded catalogue, API client and users."""

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import goalpath.db.init_db  # noqa: F401  (registers every model)
from goalpath.db.base import Base
from goalpath.deps import get_db
from goalpath.main import app
from goalpath.seed import seed

_emails = itertools.count(1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed(session)
    yield session
    session.close()


@pytest.fixture
def client(session_factory, db):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_and_login(client: TestClient, email: str | None = None, password: str = "s3cret-pass") -> dict:
    email = email or f"user{next(_emails)}@example.com"
    r = client.post("/auth/register", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    # tests authenticate with explicit headers only
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


@pytest.fixture
def other_headers(client):
    return register_and_login(client)


@pytest.fixture
def make_project(client):
    keys = itertools.count(1)

    def _make(headers, **overrides):
        body = {"name": "Side income", "key": f"SI{next(keys)}", **overrides}
        r = client.post("/api/projects", json=body, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["project"]

    return _make


@pytest.fixture
def make_goal(client, make_project):
    def _make(headers, channel="TRADING", **overrides):
        project = make_project(headers)
        body = {
            "project_id": project["id"],
            "title": "Make $50 trading",
            "channel": channel,
            "timebox_days": 30,
            "constraints": ["paper trade first"],
            **overrides,
        }
        r = client.post("/api/goals", json=body, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["goal"]

    return _make


BEGINNER_TRADING_ANSWERS = [
    ("tq-1", 2),
    ("tq-2", ["None of the above"]),
    ("tq-3", "No, I haven't started trading yet"),
    ("tq-4", 0),
]


@pytest.fixture
def completed_assessment(client, auth_headers, make_goal):
    """A finished beginner-level trading assessment and its goal."""

    def _make(headers=None, answers=None):
        headers = headers or auth_headers
        goal = make_goal(headers)
        r = client.post("/api/assessments", json={"goal_id": goal["id"]}, headers=headers)
        assert r.status_code == 200, r.text
        assessment_id = r.json()["assessment"]["id"]

        r = client.put(f"/api/assessments/{assessment_id}", json={"action": "start"}, headers=headers)
        assert r.status_code == 200, r.text
        for question_id, answer in answers or BEGINNER_TRADING_ANSWERS:
            r = client.post(
                f"/api/assessments/{assessment_id}/responses",
                json={"question_id": question_id, "answer": answer},
                headers=headers,
            )
            assert r.status_code == 200, r.text

        r = client.put(f"/api/assessments/{assessment_id}", json={"action": "complete"}, headers=headers)
        assert r.status_code == 200, r.text
        return goal, assessment_id, r.json()

    return _make
