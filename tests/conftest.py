# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from taskboard.main import create_app
from taskboard.security import Identity

API = "/api/v1"


@pytest.fixture()
def app(tmp_path: Path):
    """Application bound to a throwaway SQLite file."""
    return create_app(f"sqlite:///{tmp_path / 'taskboard.sqlite3'}")


@pytest.fixture()
def client(app) -> TestClient:
    # Entering the client runs the lifespan, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app, client):
    with app.state.database.session() as session:
        yield session


@pytest.fixture()
def register(client: TestClient):
    """Register a user through the API and return its credentials and auth header."""

    def _register(
        email: str = "alice@example.com",
        name: str = "Alice",
        password: str = "s3cret-pass",
    ) -> SimpleNamespace:
        resp = client.post(
            f"{API}/user/register",
            json={
                "email": email,
                "name": name,
                "password": password,
                "confirmPassword": password,
            },
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return SimpleNamespace(
            id=body["data"]["id"],
            name=name,
            email=email,
            password=password,
            token=body["token"],
            headers={"x-auth-token": body["token"]},
            identity=Identity(id=body["data"]["id"], email=email),
        )

    return _register


@pytest.fixture()
def create_task(client: TestClient):
    def _create(headers: dict, **fields) -> dict:
        payload = {
            "title": "Write report",
            "priority": "high",
            "checkLists": [{"title": "outline", "checked": False}],
        }
        payload.update(fields)
        resp = client.post(f"{API}/task/createTask", json=payload, headers=headers)
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]["task"]

    return _create
