import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

PROFILE = {"name": "Asha", "flat": "12B", "floor": "3", "block": "C", "role": "resident"}


@pytest.fixture
def client():
    app = create_app(Settings(EXPOSE_OTP_IN_RESPONSE=True, STORAGE_BACKEND="memory"))
    with TestClient(app) as c:
        yield c


def send_otp(client, phone="5551234567"):
    resp = client.post("/api/auth/send-otp", json={"phone": phone})
    assert resp.status_code == 200
    return resp.json()


def test_send_otp_returns_code_in_dev_mode(client):
    body = send_otp(client, "555-123-4567")
    assert body["success"] is True
    assert body["phone"] == "5551234567"
    assert len(body["code"]) == 6
    assert "expiresAt" in body


def test_send_otp_omits_code_by_default():
    app = create_app(Settings(STORAGE_BACKEND="memory"))
    with TestClient(app) as c:
        body = c.post("/api/auth/send-otp", json={"phone": "5551234567"}).json()
    assert body["success"] is True
    assert "code" not in body


def test_send_otp_rejects_malformed_phone(client):
    resp = client.post("/api/auth/send-otp", json={"phone": "12345"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "INVALID_INPUT"
    assert resp.json()["success"] is False


def test_register_then_login_flow(client):
    code = send_otp(client)["code"]

    resp = client.post("/api/auth/verify-otp", json={"phone": "5551234567", "code": code})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "MISSING_REGISTRATION_FIELDS"
    assert body["data"]["missing"] == ["name", "flat", "floor", "block", "role"]

    resp = client.post("/api/auth/verify-otp", json=dict(PROFILE, phone="5551234567", code=code))
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["isVerified"] is True
    assert user["role"] == "resident"
    assert set(user) == {"id", "name", "phone", "flat", "floor", "block", "role", "isVerified"}

    resp = client.post("/api/auth/verify-otp", json={"phone": "5551234567", "code": code})
    assert resp.status_code == 400
    assert resp.json()["error"] == "INVALID_OR_EXPIRED_OTP"

    # returning user logs in with a fresh code and no profile
    code = send_otp(client)["code"]
    resp = client.post("/api/auth/verify-otp", json={"phone": "(555) 123 4567", "otp": code})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == user["id"]


def test_verify_requires_phone_and_code(client):
    resp = client.post("/api/auth/verify-otp", json={"phone": "5551234567"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "INVALID_INPUT"


def test_verify_rejects_unknown_role(client):
    code = send_otp(client)["code"]
    resp = client.post("/api/auth/verify-otp", json=dict(PROFILE, role="mayor", phone="5551234567", code=code))
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


def test_get_user(client):
    code = send_otp(client)["code"]
    user = client.post("/api/auth/verify-otp", json=dict(PROFILE, phone="5551234567", code=code)).json()["user"]

    resp = client.get(f"/api/user/{user['id']}")
    assert resp.status_code == 200
    assert resp.json() == user

    resp = client.get("/api/user/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["error"] == "NOT_FOUND"


def test_services_create_and_list(client):
    payload = {
        "title": "Dog walking",
        "description": "Evening walks",
        "price": 15,
        "category": "pet-care",
        "offeredByUserId": "user-1",
    }
    resp = client.post("/api/services", json=payload)
    assert resp.status_code == 201
    created = resp.json()
    assert created["price"] == "15"
    assert created["offeredByUserId"] == "user-1"
    assert "createdAt" in created

    client.post("/api/services", json=dict(payload, title="Tutoring", offeredByUserId="user-2"))

    listed = client.get("/api/services").json()
    assert len(listed) == 2

    mine = client.get("/api/user/user-1/services").json()
    assert [s["id"] for s in mine] == [created["id"]]
    assert client.get("/api/user/unknown/services").json() == []


def test_services_validation_error(client):
    resp = client.post("/api/services", json={"title": "Dog walking"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["success"] is False


def test_services_reject_blank_fields(client):
    resp = client.post("/api/services", json={
        "title": " ",
        "description": "Evening walks",
        "price": "15",
        "category": "pet-care",
        "offeredByUserId": "user-1",
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["storage"] == "memory"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_send_otp_expiry_carries_utc_offset(client):
    expires_at = send_otp(client)["expiresAt"]
    assert expires_at.endswith("Z") or expires_at.endswith("+00:00")


def test_register_with_free_text_flat(client):
    code = send_otp(client, "123456789012345678901")["code"]
    resp = client.post("/api/auth/verify-otp", json=dict(
        PROFILE, flat="Flat 12B, Sunrise Towers", phone="123456789012345678901", code=code,
    ))
    assert resp.status_code == 200
    assert resp.json()["user"]["flat"] == "Flat 12B, Sunrise Towers"


def test_sql_backend_serves_auth_and_services():
    app = create_app(Settings(EXPOSE_OTP_IN_RESPONSE=True, STORAGE_BACKEND="sql", DATABASE_URL="sqlite://"))
    with TestClient(app) as c:
        body = send_otp(c)
        assert body["expiresAt"].endswith("Z") or body["expiresAt"].endswith("+00:00")

        resp = c.post("/api/auth/verify-otp", json=dict(PROFILE, phone="5551234567", code=body["code"]))
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["isVerified"] is True

        resp = c.post("/api/services", json={
            "title": "Dog walking",
            "description": "Evening walks",
            "price": "15",
            "category": "pet-care",
            "offeredByUserId": user["id"],
        })
        assert resp.status_code == 201
        assert [s["id"] for s in c.get(f"/api/user/{user['id']}/services").json()] == [resp.json()["id"]]
        assert c.get("/health").json()["storage"] == "sql"
