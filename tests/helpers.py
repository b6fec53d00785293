"""Shared helpers for API tests: a fresh in-memory database per test and account/payload builders."""

import unittest
from datetime import date, timedelta
from typing import Any
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models import Base

DEFAULT_PASSWORD = "Secret123!"


def days_from_today(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def event_payload(**overrides: Any) -> dict[str, Any]:
    """Minimal valid event body dated 30 days ahead."""
    payload: dict[str, Any] = {
        "title": "Farmers Market",
        "town": "Banff",
        "category": "Market",
        "date": days_from_today(30),
    }
    payload.update(overrides)
    return payload


def post_payload(**overrides: Any) -> dict[str, Any]:
    """Minimal valid community post body."""
    payload: dict[str, Any] = {
        "type": "roadConditions",
        "town": "Canmore",
        "title": "Highway 1 check",
        "body": "Icy near the Banff exit this morning.",
        "targetDate": days_from_today(1),
    }
    payload.update(overrides)
    return payload


class ApiTestCase(unittest.TestCase):
    """Runs the app against a private in-memory SQLite database."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def _get_test_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_test_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.engine.dispose()

    def register(
        self,
        role: str | None = "local",
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        display_name: str = "Test Member",
    ) -> tuple[str, dict[str, Any]]:
        """Register an account and return (token, identity)."""
        body: dict[str, Any] = {
            "email": email or f"member_{uuid4().hex[:10]}@example.com",
            "password": password,
            "displayName": display_name,
        }
        if role is not None:
            body["role"] = role
        response = self.client.post("/auth/register", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        payload = response.json()
        return payload["token"], payload["identity"]

    def create_event(self, token: str, **overrides: Any) -> dict[str, Any]:
        response = self.client.post(
            "/events", json=event_payload(**overrides), headers=auth_headers(token)
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_post(self, token: str, **overrides: Any) -> dict[str, Any]:
        response = self.client.post(
            "/community", json=post_payload(**overrides), headers=auth_headers(token)
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()
