from conftest import PASSWORD, register_and_login


def test_register_returns_user_without_password(client):
    r = client.post("/api/auth/register", json={
        "email": "New.User@Example.com",
        "password": PASSWORD,
        "first_name": "New",
        "last_name": "User",
    })
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    user = body["data"]["user"]
    assert user["email"] == "new.user@example.com"
    assert user["subscription_plan"] == "free"
    assert "password_hash" not in user


def test_duplicate_registration_is_rejected(client, auth_headers):
    r = client.post("/api/auth/register", json={
        "email": "ada@example.com",
        "password": PASSWORD,
        "first_name": "Ada",
        "last_name": "Again",
    })
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Email already registered"}


def test_register_validation_errors_are_field_level(client):
    r = client.post("/api/auth/register", json={"email": "not-an-email", "password": "short"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation errors"
    fields = {e["field"] for e in body["errors"]}
    assert {"email", "password", "first_name", "last_name"} <= fields


def test_login_with_wrong_password(client, auth_headers):
    r = client.post("/api/auth/login", data={"username": "ada@example.com", "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_me_returns_current_user(client):
    headers = register_and_login(client, "me@example.com", "Mae", "Jemison")
    r = client.get("/api/auth/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["user"]["first_name"] == "Mae"


def test_protected_route_without_token(client):
    r = client.get("/api/deadlines/")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "No token, authorization denied"}


def test_protected_route_with_bad_token(client):
    r = client.get("/api/deadlines/", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_service_probes(client):
    assert client.get("/").json()["status"] == "running"
    r = client.get("/health")
    assert r.json() == {"status": "healthy"}
    assert r.headers["Cross-Origin-Opener-Policy"] == "same-origin-allow-popups"


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json()["success"] is False
