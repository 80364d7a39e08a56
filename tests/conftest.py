"""Shared pytest fixtures for the scorecard tests."""

from __future__ import annotations

import os

# catálogo en memoria, antes de importar app.db
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("ADMIN_KEY", None)

import pytest
from fastapi.testclient import TestClient

from app import crud, schemas
from app.db import SessionLocal
from app.main import app
from app.roster import Roster, get_roster


def make_course(ranks, pars=None, course_id="test") -> schemas.Course:
    pars = pars or [4] * len(ranks)
    return schemas.Course(
        id=course_id,
        name=f"Course {course_id}",
        holes=[
            {"number": i + 1, "par": par, "rank": rank}
            for i, (rank, par) in enumerate(zip(ranks, pars))
        ],
    )


@pytest.fixture
def course() -> schemas.Course:
    # 18 hoyos, el hoyo n tiene HCP n
    pars = [4, 5, 4, 3, 4, 3, 4, 5, 4, 4, 4, 3, 5, 4, 5, 3, 4, 4]
    return make_course(list(range(1, 19)), pars)


@pytest.fixture
def roster(course) -> Roster:
    return Roster(course=course)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    for c in crud.get_courses(session):
        if c.name != crud.DEFAULT_COURSE.name:
            session.delete(c)
    session.commit()
    session.close()


@pytest.fixture
def client(db):
    session_roster = Roster()
    app.dependency_overrides[get_roster] = lambda: session_roster
    client = TestClient(app)
    yield client
    app.dependency_overrides.pop(get_roster, None)


@pytest.fixture
def course_factory():
    return make_course
