"""
Shared fixtures: in-memory SQLite, cheap bcrypt rounds and a controllable clock.
"""

import datetime
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from moodrecipe.core.config import Settings
from moodrecipe.core.context import build_context
from moodrecipe.core.database import init_db
from moodrecipe.main import create_app
from moodrecipe.services.recipes import seed_catalog

T0 = datetime.datetime(2026, 1, 15, 12, 0, tzinfo=datetime.timezone.utc)

CATALOG: List[Dict] = [
    {
        "title": "R1",
        "mood_tags": ["happy"],
        "dietary_tags": ["vegan"],
        "ingredients": ["apples"],
        "instructions": "Slice.",
    },
    {
        "title": "R2",
        "mood_tags": ["happy"],
        "dietary_tags": ["vegan", "gluten-free"],
        "ingredients": ["rice", "beans"],
        "instructions": "Cook.",
    },
    {
        "title": "R3",
        "mood_tags": ["sad"],
        "dietary_tags": ["vegan"],
        "ingredients": ["potatoes"],
        "instructions": "Mash.",
    },
]


class FakeClock:
    """Callable clock whose time only moves when a test says so."""

    def __init__(self, now: datetime.datetime = T0):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += datetime.timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        JWT_EXPIRE_MINUTES=60,
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ctx(settings, clock):
    context = build_context(settings, clock=clock)
    init_db(context.engine)
    yield context
    context.engine.dispose()


@pytest.fixture
def db(ctx):
    session = ctx.session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog(db) -> List[int]:
    """Seed R1, R2, R3 and return their ids in storage order."""
    seed_catalog(db, CATALOG)
    from moodrecipe.models.recipe import Recipe

    return [r.id for r in db.query(Recipe).order_by(Recipe.id).all()]


@pytest.fixture
def app(settings, clock):
    return create_app(settings, clock=clock)


@pytest.fixture
def client(app):
    # Context manager form runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def api_catalog(app, client) -> List[int]:
    session = app.state.context.session_factory()
    try:
        seed_catalog(session, CATALOG)
        from moodrecipe.models.recipe import Recipe

        return [r.id for r in session.query(Recipe).order_by(Recipe.id).all()]
    finally:
        session.close()
