from app.db.seed import SERVICE_CATALOG


NEW_SERVICE = {
    "name": "Senior Citizen Card",
    "description": "Apply for senior citizen identity card",
    "category": "Welfare",
    "price": 120,
    "processing_time": "10-15 days",
    "requirements": "Age proof, address proof",
    "icon": "fa-user",
}


def test_list_services(client):
    response = client.get("/api/services")
    assert response.status_code == 200
    services = response.json()
    assert len(services) == len(SERVICE_CATALOG)
    assert [s["id"] for s in services] == list(range(1, len(SERVICE_CATALOG) + 1))


def test_list_services_is_stable_across_calls(client):
    first = client.get("/api/services").json()
    second = client.get("/api/services").json()
    assert first == second


def test_filter_by_category(client):
    response = client.get("/api/services", params={"category": "Identity"})
    assert response.status_code == 200
    names = [s["name"] for s in response.json()]
    assert names == [s.name for s in SERVICE_CATALOG if s.category == "Identity"]


def test_empty_category_matches_nothing(client):
    response = client.get("/api/services?category=")
    assert response.status_code == 200
    assert response.json() == []


def test_categories(client):
    categories = client.get("/api/services/categories").json()["categories"]
    assert categories[0] == "Identity"
    assert set(categories) == {s.category for s in SERVICE_CATALOG}
    assert len(categories) == len(set(categories))


def test_get_service(client):
    response = client.get("/api/services/2")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Aadhaar Card"
    assert data["badge"] == "Essential"


def test_get_missing_service(client):
    response = client.get("/api/services/999")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_admin_can_create_service(client, admin_headers):
    response = client.post("/api/services", json=NEW_SERVICE, headers=admin_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == len(SERVICE_CATALOG) + 1
    assert data["badge"] is None


def test_regular_user_cannot_create_service(client, user_headers):
    response = client.post("/api/services", json=NEW_SERVICE, headers=user_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "PERMISSION_DENIED"


def test_create_service_requires_login(client):
    assert client.post("/api/services", json=NEW_SERVICE).status_code == 401
