"""
Test configuration and fixtures for ChefAI.

- In-memory Mongo (mongomock-motor) injected through the get_db override
- TestClient without the lifespan context, so startup never dials a real server
- Registered-user fixtures returning bearer headers
"""

import asyncio
from typing import Any, Dict, Generator

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from chefai.core.config import settings
from chefai.db.init import get_db
from chefai.main import app


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    """No real credentials during tests, whatever the local .env says."""
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    monkeypatch.setattr(settings, "GOOGLE_VISION_API_KEY", None)
    monkeypatch.setattr(settings, "AI_STRICT_PARSING", False)
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    return AsyncMongoMockClient()["chefai_test"]


def run(coro):
    """Drive a mongomock-motor coroutine from a sync test."""
    return asyncio.run(coro)


# =============================================================================
# TestClient Fixtures
# =============================================================================


@pytest.fixture
def client(db) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def register(client: TestClient):
    """Factory: register a user through the API, return (token, user)."""

    def _register(
        name: str = "Test User",
        email: str = "testuser@example.com",
        password: str = "testpassword123",
    ):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["user"]

    return _register


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(register) -> Dict[str, str]:
    token, _ = register()
    return bearer(token)


@pytest.fixture
def other_headers(register) -> Dict[str, str]:
    token, _ = register(name="Other User", email="other@example.com")
    return bearer(token)


@pytest.fixture
def admin_headers(register, db) -> Dict[str, str]:
    token, user = register(name="Admin", email="admin@example.com")
    run(db["users"].update_one({"_id": ObjectId(user["id"])}, {"$set": {"is_admin": True}}))
    return bearer(token)


# =============================================================================
# Payloads
# =============================================================================


@pytest.fixture
def recipe_payload() -> Dict[str, Any]:
    return {
        "title": "Tomato Basil Pasta",
        "description": "Quick weeknight pasta.",
        "ingredients": ["200g spaghetti", "4 tomatoes", "basil"],
        "instructions": ["Boil pasta", "Make sauce", "Combine"],
        "cookingTime": 25,
        "servings": 2,
        "difficulty": "Easy",
        "cuisine": "Italian",
        "tags": ["Quick", "Vegetarian"],
    }
