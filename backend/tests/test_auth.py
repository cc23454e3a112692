# backend/tests/test_auth.py
from config import settings
from models.log import Log


def test_login_sets_session_cookie(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "admin"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "admin"
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]
    assert settings.SESSION_COOKIE_NAME in resp.cookies

    assert client.get("/auth/user").json()["username"] == "admin"


def test_login_wrong_password(db, client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"
    failed = db.query(Log).filter(Log.action == "LOGIN", Log.status == "FAIL").all()
    assert len(failed) == 1
    assert failed[0].meta == {"username": "admin"}


def test_login_unknown_user(client):
    resp = client.post("/auth/login", json={"username": "ghost", "password": "admin"})
    assert resp.status_code == 401


def test_bearer_header_is_accepted(client):
    token = client.post("/auth/login", json={"username": "admin", "password": "admin"}).json()["access_token"]
    client.cookies.clear()

    resp = client.get("/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


def test_garbage_token_is_rejected(client):
    resp = client.get("/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Authentication required"


def test_logout_clears_session(admin_client):
    assert admin_client.get("/auth/user").status_code == 200

    assert admin_client.post("/auth/logout").json() == {"success": True}

    assert admin_client.get("/auth/user").status_code == 401


def test_change_password(client, admin_client):
    resp = admin_client.post("/auth/change-password", json={"current_password": "admin", "new_password": "s3cret!"})
    assert resp.status_code == 200

    assert client.post("/auth/login", json={"username": "admin", "password": "admin"}).status_code == 401
    assert client.post("/auth/login", json={"username": "admin", "password": "s3cret!"}).status_code == 200


def test_change_password_wrong_current(admin_client):
    resp = admin_client.post("/auth/change-password", json={"current_password": "bad", "new_password": "whatever"})
    assert resp.status_code == 400


def test_viewer_cannot_use_admin_endpoints(viewer_client):
    assert viewer_client.get("/auth/user").json()["role"] == "viewer"
    assert viewer_client.get("/products").status_code == 403
    assert viewer_client.post("/generate-sku", json={"category": "ELC"}).status_code == 403
    assert viewer_client.get("/receipts").status_code == 403
