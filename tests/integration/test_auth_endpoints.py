"""
Integration tests for registration, login and the health check.
"""

from meditime.models import User


class TestRegister:
    def test_register_success(self, client, db):
        """A new account is created and returned without the password."""
        response = client.post("/api/v1/auth/register", json={
            "name": "Kim",
            "email": "Kim@Example.com",
            "password": "longenough",
        })

        assert response.status_code == 201
        body = response.get_json()
        assert body["success"] is True
        assert body["data"]["email"] == "kim@example.com"
        assert "password_hash" not in body["data"]
        assert User.query.filter_by(email="kim@example.com").count() == 1

    def test_register_existing_email(self, client, test_user, test_user_data):
        """Registering an email twice is a conflict."""
        response = client.post("/api/v1/auth/register", json=test_user_data)

        assert response.status_code == 409
        assert response.get_json()["error"]["code"] == "EMAIL_EXISTS"

    def test_register_short_password(self, client, db):
        response = client.post("/api/v1/auth/register", json={
            "name": "Kim", "email": "kim@example.com", "password": "short",
        })

        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"

    def test_register_invalid_email(self, client, db):
        response = client.post("/api/v1/auth/register", json={
            "name": "Kim", "email": "not-an-email", "password": "longenough",
        })

        assert response.status_code == 400

    def test_register_short_name(self, client, db):
        response = client.post("/api/v1/auth/register", json={
            "name": "K", "email": "kim@example.com", "password": "longenough",
        })

        assert response.status_code == 400


class TestLogin:
    def test_login_success(self, client, test_user, test_user_data):
        """Valid credentials return an access token usable on protected routes."""
        response = client.post("/api/v1/auth/login", json={
            "email": test_user_data["email"],
            "password": test_user_data["password"],
        })

        assert response.status_code == 200
        body = response.get_json()
        assert body["user"]["id"] == test_user.id
        token = body["access_token"]

        protected = client.get(
            "/api/v1/user-medicines",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert protected.status_code == 200

    def test_login_wrong_password(self, client, test_user, test_user_data):
        response = client.post("/api/v1/auth/login", json={
            "email": test_user_data["email"],
            "password": "wrong-password",
        })

        assert response.status_code == 401
        assert response.get_json()["success"] is False

    def test_login_unknown_email(self, client, db):
        response = client.post("/api/v1/auth/login", json={
            "email": "nobody@example.com",
            "password": "whatever1",
        })

        assert response.status_code == 401

    def test_login_missing_fields(self, client, db):
        response = client.post("/api/v1/auth/login", json={"email": "a@b.com"})

        assert response.status_code == 400


class TestAuthGuard:
    def test_protected_route_without_token(self, client, db):
        response = client.get("/api/v1/user-medicines")

        assert response.status_code == 401
        assert response.get_json()["success"] is False

    def test_protected_route_with_garbage_token(self, client, db):
        response = client.get(
            "/api/v1/user-medicines",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 422


class TestHealth:
    def test_health_reports_database(self, client, db):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["status"] == "ok"
        assert data["database"] == "connected"

    def test_unknown_route_is_json_404(self, client, db):
        response = client.get("/api/v1/nothing-here")

        assert response.status_code == 404
        assert response.get_json()["success"] is False
