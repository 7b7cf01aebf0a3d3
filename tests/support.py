import fnmatch
import os
import unittest

import redis

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SEED_DEFAULTS", "false")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from scheduleboard import models  # noqa: E402,F401
from scheduleboard.database import Base, get_db  # noqa: E402
from scheduleboard.main import app  # noqa: E402


def make_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine, autocommit=False, autoflush=False)


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory SQLite database per test"""

    def setUp(self) -> None:
        self.engine, self.Session = make_session_factory()
        self.db = self.Session()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db uses the test database"""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def create_professional(self, name: str, initials: str = None) -> dict:
        payload = {"name": name}
        if initials:
            payload["initials"] = initials
        resp = self.client.post("/professionals", json=payload)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def create_slot(self, start: str, end: str, base: bool = True) -> dict:
        resp = self.client.post("/time-slots", json={"startTime": start, "endTime": end, "isBaseSlot": base})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def create_kind(self, code: str, name: str, color: str = "#3b82f6") -> dict:
        resp = self.client.post("/activity-kinds", json={"code": code, "name": name, "color": color})
        self.assertIn(resp.status_code, (200, 201), resp.text)
        return resp.json()


class FakeRedis:
    """Dictionary-backed stand-in for the handful of redis.Redis calls the cache makes"""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value

    def incr(self, key):
        self.store[key] = int(self.store.get(key) or 0) + 1
        return self.store[key]

    def keys(self, pattern="*"):
        return [k for k in list(self.store) if fnmatch.fnmatch(k, pattern)]

    def delete(self, *keys):
        return sum(1 for k in keys if self.store.pop(k, None) is not None)


class BrokenRedis:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise redis.exceptions.ConnectionError("redis is down")

        return fail
