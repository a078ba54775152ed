import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app import models  # noqa: F401
from app.config import Settings
from app.deps import get_db, get_settings
from app.main import app


class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeHttp:
    """requests yerine geçen sahte istemci: URL (sorgu hariç) → yanıt ya da exception."""

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        outcome = self.routes.get(url, self.routes.get(url.split("?")[0], self.default))
        if outcome is None:
            return FakeResponse(404, "", "Not Found")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


FEED = {
    "Date": "20240301",
    "Clues": {
        "c1": "NRDEGA", "a1": "GARDEN", "o1": "2,4",
        "c2": "LTPNA", "a2": "PLANT", "o2": "1,3",
        "c3": "OOTR", "a3": "ROOT",
        "c4": "DEES", "a4": "SEED", "o4": "4",
    },
    "Caption": {"v1": "What the gardener had after a long day"},
    "Solution": {"s1": "[A]  {GREEN} THUMB"},
    "Image": "https://img.test/tmjmf240301.gif",
}


def jsonp(payload, callback="jsonCallback"):
    return f"/**/{callback}({json.dumps(payload)})"


@pytest.fixture
def feed():
    return json.loads(json.dumps(FEED))


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        FEED_BASE_URL="https://feeds.test/data",
        FEED_PREFIX="tmjmf",
        FEED_VARIANT="current",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine, test_settings):
    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
