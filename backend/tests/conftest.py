"""Shared fixtures for the gratitude journal tests."""

import os
import tempfile

# Point the app at a throwaway SQLite file before any app module reads config
_tmp_dir = tempfile.mkdtemp(prefix="gratitude-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp_dir}/test.db"
os.environ["SEED_ACHIEVEMENTS"] = "false"
os.environ["OPENROUTER_API_KEYS"] = ""
os.environ["GROQ_API_KEYS"] = ""

import pytest

import models  # noqa: F401  (registers every table on Base.metadata)
from database import Base, SessionLocal, engine
from models.achievement import Achievement, RequirementKind
from services.user_service import UserService


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    def _make(username: str = "alice"):
        return UserService.create(db, username, f"{username}@example.com", "secret123")
    return _make


@pytest.fixture
def make_achievement(db):
    def _make(name: str, kind: RequirementKind, threshold: int, icon: str = "⭐"):
        achievement = Achievement(
            name=name,
            description=f"{name} achievement",
            icon=icon,
            requirement_type=kind,
            requirement_value=threshold,
        )
        db.add(achievement)
        db.commit()
        db.refresh(achievement)
        return achievement
    return _make


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    """Register a user through the API and return its bearer header."""
    def _register(username: str = "alice"):
        resp = client.post("/api/v1/auth/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret123",
        })
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}
    return _register
