"""Shared helpers: a fresh in-memory database per test and an API client bound to it."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from homeroom.core.database import get_db
from homeroom.main import app
from homeroom.models import Base


def make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


class DatabaseTestCase(unittest.TestCase):
    """Gives each test its own empty schema and a session on it."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.db: Session = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus the app wired to that database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def signup(self, username: str, password: str = "password123", is_admin: bool = False, **extra) -> dict:
        resp = self.client.post(
            "/api/users",
            json={"username": username, "password": password, "isAdmin": is_admin, **extra},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def login(self, username: str, password: str = "password123") -> str:
        resp = self.client.post("/api/auth/login", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["authToken"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
