"""
Tests for registration, login and the error envelope.
"""
from app.models import Student

API = "/api/v1"


def register_payload(role="Admin", email="owner@example.com", **overrides):
    payload = {
        "email": email,
        "password": "Password123",
        "first_name": "Asha",
        "last_name": "Rao",
        "role": role,
    }
    payload.update(overrides)
    return payload


class TestRegister:
    def test_first_user_must_be_admin(self, client):
        response = client.post(f"{API}/auth/register", json=register_payload(role="Student"))

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["message"] == "The first user must be an Admin"
        assert "timestamp" in body["error"]
        assert body["request_id"] == response.headers["X-Request-ID"]

    def test_admin_then_student(self, client, db_session):
        response = client.post(f"{API}/auth/register", json=register_payload())
        assert response.status_code == 201
        assert response.json()["role"] == "Admin"
        assert "password_hash" not in response.json()

        response = client.post(
            f"{API}/auth/register",
            json=register_payload(role="Student", email="Student@Example.com", guardian_name="Ravi"),
        )
        assert response.status_code == 201
        user = response.json()
        assert user["email"] == "student@example.com"
        student = db_session.query(Student).filter(Student.user_id == user["id"]).one()
        assert student.guardian_name == "Ravi"

    def test_only_one_admin(self, client):
        client.post(f"{API}/auth/register", json=register_payload())
        response = client.post(
            f"{API}/auth/register", json=register_payload(email="second@example.com")
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Only one Admin is allowed"

    def test_duplicate_email(self, client):
        client.post(f"{API}/auth/register", json=register_payload())
        response = client.post(
            f"{API}/auth/register",
            json=register_payload(role="Warden", email="OWNER@example.com"),
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_ENTRY"

    def test_weak_password_is_a_validation_error(self, client):
        response = client.post(
            f"{API}/auth/register", json=register_payload(password="onlyletters")
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "body.password" in error["details"]["field_errors"]


class TestLogin:
    def test_login_returns_token(self, client):
        client.post(f"{API}/auth/register", json=register_payload())

        response = client.post(
            f"{API}/auth/login", json={"email": "owner@example.com", "password": "Password123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "Admin"

        headers = {"Authorization": f"Bearer {body['access_token']}"}
        assert client.get(f"{API}/rooms/blocks", headers=headers).status_code == 200

    def test_bad_password(self, client):
        client.post(f"{API}/auth/register", json=register_payload())
        response = client.post(
            f"{API}/auth/login", json={"email": "owner@example.com", "password": "Wrong1234"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid email or password"

    def test_unknown_email(self, client):
        response = client.post(
            f"{API}/auth/login", json={"email": "ghost@example.com", "password": "Password123"}
        )
        assert response.status_code == 401


class TestTokens:
    def test_missing_token(self, client, db_session):
        assert client.get(f"{API}/rooms/rooms-grid").status_code == 401

    def test_garbage_token(self, client, db_session):
        response = client.get(
            f"{API}/rooms/rooms-grid", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    def test_health(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["database"] == "ok"


class TestAdminExists:
    def test_flips_after_admin_registers(self, client):
        before = client.get(f"{API}/auth/admin-exists")
        client.post(f"{API}/auth/register", json=register_payload())
        after = client.get(f"{API}/auth/admin-exists")

        assert before.status_code == 200
        assert before.json() == {"exists": False}
        assert after.json() == {"exists": True}
