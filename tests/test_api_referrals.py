from conftest import login_headers, register


def test_referral_summary(client, user_headers):
    me = client.get("/api/user", headers=user_headers).json()

    response = client.get("/api/referral", headers=user_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["referral_code"] == me["referral_code"]
    assert data["referral_link"] == f"http://testserver/auth?ref={me['referral_code']}"
    assert data["referral_rewards"] == 0
    assert data["referred_users"] == 0


def test_registration_with_referral_code_credits_referrer(client, user_headers):
    code = client.get("/api/user", headers=user_headers).json()["referral_code"]

    first = register(client, "friend1", "friend1@example.com", referral_code=code)
    second = register(client, "friend2", "friend2@example.com", referral_code=code.lower())
    assert first.status_code == 201
    assert second.status_code == 201

    data = client.get("/api/referral", headers=user_headers).json()
    assert data["referral_rewards"] == 100
    assert data["referred_users"] == 2


def test_unknown_referral_code_still_registers(client):
    response = register(client, "friend", "friend@example.com", referral_code="NOSUCH00")
    assert response.status_code == 201

    headers = login_headers(client, "friend", "secret123")
    assert client.get("/api/referral", headers=headers).json()["referral_rewards"] == 0


def test_referral_requires_login(client):
    assert client.get("/api/referral").status_code == 401
