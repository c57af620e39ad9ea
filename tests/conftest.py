import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan: fresh MemStorage, seeded catalog
    with TestClient(app) as c:
        yield c


def login_headers(client, username, password):
    """Logs in and returns Bearer headers, leaving the cookie jar empty."""
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.headers['X-Session-Token']}"}


@pytest.fixture
def user_headers(client):
    return login_headers(client, "testuser", "password123")


@pytest.fixture
def admin_headers(client):
    return login_headers(client, "admin", "admin123")


def register(client, username, email, referral_code=None, **extra):
    body = {
        "username": username,
        "password": "secret123",
        "name": username.title(),
        "email": email,
        **extra,
    }
    if referral_code:
        body["referral_code"] = referral_code
    response = client.post("/api/register", json=body)
    client.cookies.clear()
    return response
