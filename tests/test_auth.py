"""Registration, login, logout, token verification and the role gate."""

from datetime import timedelta

from app.shared.core.security import Role, get_security_manager
from tests.conftest import bearer


def register_user(client, **overrides):
    payload = {"name": "Alice", "email": "alice@example.com", "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/users/register", json=payload)


class TestUserRegistration:
    def test_register_returns_account_summary(self, client):
        response = register_user(client)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["user"]["email"] == "alice@example.com"
        assert set(body["user"]) == {"id", "name", "email", "createdAt", "updatedAt"}

    def test_missing_field_is_rejected(self, client):
        response = client.post("/api/users/register", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_duplicate_email_conflicts(self, client):
        register_user(client)
        response = register_user(client, email="ALICE@example.com")

        assert response.status_code == 409
        assert response.json()["message"] == "User with this email already exists"

    def test_caregiver_registration_uses_its_own_table(self, client):
        register_user(client)
        response = client.post(
            "/api/caregivers/register",
            json={"name": "Bob", "email": "alice@example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Caregiver registered successfully"
        assert response.json()["caregiver"]["name"] == "Bob"


class TestLogin:
    def test_user_login_sets_token_everywhere(self, client):
        register_user(client)
        response = client.post("/api/users/login", json={"email": "alice@example.com", "password": "secret123"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert response.headers["Authorization"] == f"Bearer {body['token']}"
        assert response.cookies.get("user-token") == body["token"]
        assert response.cookies.get("user-token-client") == body["token"]

        claims = get_security_manager().verify_token(body["token"])
        assert claims["role"] == "user"
        assert claims["sub"] == claims["id"] == body["user"]["id"]
        assert claims["email"] == "alice@example.com"

    def test_wrong_password_is_unauthorized(self, client):
        register_user(client)
        response = client.post("/api/users/login", json={"email": "alice@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_login_requires_both_fields(self, client):
        response = client.post("/api/users/login", json={"email": "alice@example.com"})

        assert response.status_code == 400

    def test_caregiver_login(self, client, make_caregiver):
        carer = make_caregiver(email="carer@example.com")
        response = client.post("/api/caregivers/login", json={"email": carer.email, "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["caregiver"]["id"] == carer.id
        assert response.cookies.get("caregiver-token")

    def test_bootstrapped_admin_can_log_in(self, client):
        response = client.post("/api/admin/login", json={"username": "admin", "password": "admin-password"})

        assert response.status_code == 200
        body = response.json()
        assert body["admin"]["username"] == "admin"
        assert response.cookies.get("admin-token") == body["token"]

    def test_admin_bad_credentials(self, client):
        response = client.post("/api/admin/login", json={"username": "admin", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"


class TestLogout:
    def test_user_logout_redirects_home(self, client):
        response = client.post("/api/users/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "user-token=" in response.headers.get("set-cookie", "")

    def test_caregiver_and_admin_logout(self, client):
        assert client.post("/api/caregivers/logout").json() == {"message": "Logged out successfully"}
        assert client.post("/api/admin/logout").json() == {"message": "Logged out successfully"}


class TestVerifyToken:
    def test_valid_token_echoes_claims(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/verify-token", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Token is valid"
        assert response.json()["user"]["id"] == owner.id

    def test_missing_token(self, client):
        response = client.get("/api/users/verify-token")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized - Missing or invalid token format"

    def test_garbage_token(self, client):
        response = client.get("/api/users/verify-token", headers=bearer("not-a-jwt"))

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized - Invalid token"


class TestRoleGate:
    def test_missing_token_is_rejected(self, client):
        response = client.get("/api/users/notifications")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized: Missing or invalid token"

    def test_role_mismatch_is_rejected(self, client, make_caregiver):
        carer = make_caregiver()
        response = client.get("/api/users/notifications", headers=carer.headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized: Invalid token"

    def test_expired_token_is_rejected(self, client, make_user):
        owner = make_user()
        expired = get_security_manager().create_access_token(
            {"id": owner.id, "name": owner.name, "email": owner.email},
            Role.USER,
            expires_delta=timedelta(seconds=-10),
        )
        response = client.get("/api/users/notifications", headers=bearer(expired))

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized: Invalid token"

    def test_cookie_is_accepted_when_no_header(self, client, make_user):
        owner = make_user()
        client.cookies.set("user-token", owner.token)

        response = client.get("/api/users/notifications/count")

        assert response.status_code == 200
        assert response.json() == {"count": 0}

    def test_admin_routes_need_admin_role(self, client, make_user, admin):
        owner = make_user()

        assert client.get("/api/admin/dashboard", headers=owner.headers).status_code == 401
        assert client.get("/api/admin/dashboard", headers=admin.headers).status_code == 200
