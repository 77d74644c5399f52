from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from restaurant_site.security import hash_password
from restaurant_site.storage import Storage


def test_register_returns_admin_without_password(client):
    """Registering alice logs her in as an admin"""
    response = client.post("/api/auth/register", json={"email": "alice@example.com", "password": "Passw0rd!"})

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "alice@example.com"
    assert body["role"] == "admin"
    assert "password" not in body

    me = client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["id"] == body["id"]


def test_register_disabled(admin_client):
    admin_client.post("/api/admin/settings", json={"key": "registration_enabled", "value": "false"})
    admin_client.post("/api/auth/logout")

    response = admin_client.post("/api/auth/register", json={"email": "bob@example.com", "password": "Passw0rd!"})

    assert response.status_code == 403
    assert response.json()["message"] == "Registration is currently disabled"
    assert response.json()["error"] == "New admin registrations are not allowed at this time"


def test_register_reenabled_by_any_other_value(admin_client):
    admin_client.post("/api/admin/settings", json={"key": "registration_enabled", "value": "no"})
    response = admin_client.post("/api/auth/register", json={"email": "bob@example.com", "password": "Passw0rd!"})
    assert response.status_code == 201


def test_register_duplicate_email(admin_client):
    response = admin_client.post("/api/auth/register", json={"email": ADMIN_EMAIL, "password": "other"})
    assert response.status_code == 400
    assert response.json()["message"] == "User already exists"


def test_register_requires_credentials(client):
    response = client.post("/api/auth/register", json={"email": "carol@example.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_register_rejects_bad_email(client):
    response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "Passw0rd!"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid registration data"
    assert body["errors"][0]["path"] == "email"


def test_login_and_logout(admin_client):
    admin_client.post("/api/auth/logout")
    assert admin_client.get("/api/auth/user").status_code == 401

    response = admin_client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    assert response.json()["email"] == ADMIN_EMAIL
    assert admin_client.get("/api/auth/user").status_code == 200

    # logout also answers GET
    response = admin_client.get("/api/auth/logout")
    assert response.json() == {"message": "Logged out successfully"}
    assert admin_client.get("/api/auth/user").status_code == 401


def test_login_errors_are_uniform(admin_client):
    admin_client.post("/api/auth/logout")

    wrong_password = admin_client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    unknown_email = admin_client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid credentials"}


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_admin_routes_require_login(client):
    response = client.get("/api/admin/bookings")
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_admin_routes_require_admin_role(app, client):
    with app.state.database.SessionLocal() as session:
        Storage(session).create_user({
            "email": "guest@example.com",
            "password": hash_password("Passw0rd!"),
            "role": "customer",
        })

    login = client.post("/api/auth/login", json={"email": "guest@example.com", "password": "Passw0rd!"})
    assert login.status_code == 200

    response = client.get("/api/admin/bookings")
    assert response.status_code == 403
    assert response.json() == {"message": "Admin access required"}


def test_login_with_mixed_case_email_used_at_registration(client):
    response = client.post("/api/auth/register", json={"email": "Bob@Example.COM", "password": "Passw0rd!"})
    assert response.status_code == 201
    client.post("/api/auth/logout")

    for email in ("Bob@Example.COM", "bob@example.com", response.json()["email"]):
        login = client.post("/api/auth/login", json={"email": email, "password": "Passw0rd!"})
        assert login.status_code == 200
        assert login.json()["id"] == response.json()["id"]


def test_register_duplicate_email_ignores_case(admin_client):
    response = admin_client.post("/api/auth/register", json={"email": ADMIN_EMAIL.upper(), "password": "other"})
    assert response.status_code == 400
    assert response.json()["message"] == "User already exists"
