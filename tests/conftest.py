from __future__ import annotations

import pytest

from app import create_app
from database import db

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
        "JWT_SECRET": JWT_SECRET,
        "BCRYPT_LOG_ROUNDS": 4,
        "ADMIN_USERNAME": ADMIN_USERNAME,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token(client) -> str:
    resp = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp.get_json()["token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}


def employee_payload(**overrides) -> dict:
    payload = {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "mobile": "9876543210",
        "designation": "HR",
        "gender": "F",
        "course": ["MCA"],
    }
    payload.update(overrides)
    return payload
