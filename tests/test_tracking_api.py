import os
import unittest
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from event_catalog.core.config import settings
from event_catalog.core.security import create_jwt
from event_catalog.db.session import get_db
from event_catalog.main import app
from event_catalog.models.tracking_event import TrackingEvent


class TrackingApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        TrackingEvent.__table__.create(bind=cls.engine)

        def override_get_db():
            db = cls.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        cls.client = TestClient(app)
        token = create_jwt({"sub": "visitor-1"}, settings.AUTH_JWT_SECRET, timedelta(minutes=5), settings.AUTH_JWT_ALGORITHM)
        cls.headers = {"Authorization": f"Bearer {token}"}

    @classmethod
    def tearDownClass(cls):
        cls.client.close()
        app.dependency_overrides.clear()
        TrackingEvent.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def test_requires_token(self):
        self.assertEqual(self.client.get("/tracking").status_code, 401)
        self.assertEqual(self.client.post("/tracking", json={"action": "view"}).status_code, 401)

    def test_records_and_lists_newest_first(self):
        first = self.client.post(
            "/tracking",
            json={"action": "view", "payload": "evt-1"},
            headers={**self.headers, "User-Agent": "pytest-agent"},
        )
        self.assertEqual(first.status_code, 201, first.text)
        second = self.client.post(
            "/tracking",
            json={"action": "click", "user_agent": "explicit", "user_name": "ana"},
            headers=self.headers,
        )
        self.assertEqual(second.status_code, 201)

        response = self.client.get("/tracking", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        rows = response.json()["data"]
        self.assertEqual([row["action"] for row in rows[:2]], ["click", "view"])
        self.assertEqual(rows[0]["user_agent"], "explicit")
        self.assertEqual(rows[1]["user_agent"], "pytest-agent")
        self.assertEqual(rows[1]["payload"], "evt-1")

    def test_blank_action_is_rejected(self):
        response = self.client.post("/tracking", json={"action": "   "}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "action is required"})
        response = self.client.post("/tracking", json={}, headers=self.headers)
        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
