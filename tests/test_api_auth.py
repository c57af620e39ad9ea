from conftest import login_headers, register


def test_register_creates_user_and_session(client):
    response = client.post("/api/register", json={
        "username": "ramesh",
        "password": "secret123",
        "name": "Ramesh Kumar",
        "email": "ramesh@example.com",
        "phone": "+91 98765 43219",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "ramesh"
    assert data["role"] == "user"
    assert data["phone"] == "9876543219"
    assert data["referral_rewards"] == 0
    assert "password" not in data

    # cookie from registration authenticates follow-up requests
    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["id"] == data["id"]


def test_register_duplicate_username_is_case_insensitive(client):
    response = register(client, "TestUser", "other@example.com")
    assert response.status_code == 400
    assert response.json()["error"] == "Username already exists"


def test_register_duplicate_email(client):
    response = register(client, "someone", "TEST@example.com")
    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


def test_register_validation(client):
    response = register(client, "x", "not-an-email")
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_register_rejects_name_empty_after_sanitising(client):
    response = register(client, "bracketed", "bracketed@example.com", name="[]")
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"

    login = client.post("/api/login", json={"username": "bracketed", "password": "secret123"})
    assert login.status_code == 401


def test_login_and_current_user(client):
    headers = login_headers(client, "testuser", "password123")

    response = client.get("/api/user", headers=headers)
    assert response.status_code == 200
    assert response.json()["username"] == "testuser"


def test_login_is_case_insensitive_on_username(client):
    headers = login_headers(client, "TESTUSER", "password123")
    assert client.get("/api/user", headers=headers).json()["username"] == "testuser"


def test_login_wrong_password(client):
    response = client.post("/api/login", json={"username": "testuser", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["code"] == "AUTHENTICATION_FAILED"


def test_current_user_requires_session(client):
    response = client.get("/api/user")
    assert response.status_code == 401

    response = client.get("/api/user", headers={"Authorization": "Bearer bogus"})
    assert response.status_code == 401


def test_logout_ends_session(client):
    headers = login_headers(client, "testuser", "password123")

    assert client.post("/api/logout", headers=headers).status_code == 200
    assert client.get("/api/user", headers=headers).status_code == 401
