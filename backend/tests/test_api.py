from unittest.mock import patch

from vinheria.core.config import settings
from vinheria.services.session_manager import session_manager

ACCESS_TOKEN = "test-access-token"


def register(client, email="a@x.com", password="pass1"):
    return client.post("/auth/register", json={"email": email, "password": password})


def login(client, email="a@x.com", password="pass1", access_token=ACCESS_TOKEN):
    return client.post(
        "/auth/login",
        data={"email": email, "password": password, "access_token": access_token},
    )


def quantities(client):
    return [product["quantity"] for product in client.get("/inventory").json()]


def test_register_returns_normalized_user(client):
    response = register(client, email="  A@X.com ")

    assert response.status_code == 201
    assert response.json()["email"] == "a@x.com"


def test_register_duplicate_is_rejected(client):
    register(client)
    response = register(client, email="A@X.COM")

    assert response.status_code == 400
    assert response.json() == {"detail": "Email already registered"}


def test_wrong_access_token_issues_no_session(client):
    register(client)
    sessions_before = len(session_manager)

    response = login(client, access_token="wrong")

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid access token"}
    assert settings.SESSION_COOKIE_NAME not in response.cookies
    assert len(session_manager) == sessions_before


def test_login_fails_closed_without_configured_token(client):
    register(client)

    with patch.object(settings, "ACCESS_TOKEN", None):
        response = login(client, access_token="")

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid access token"}


def test_bad_credentials_share_one_message(client):
    register(client)

    wrong_password = login(client, password="nope")
    unknown_email = login(client, email="ghost@x.com")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid credentials"}


def test_inventory_redirects_to_login_without_session(client):
    response = client.get("/inventory")

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_mutation_without_session_changes_nothing(client):
    register(client)
    for path in ("/inventory/1/decr", "/inventory/1/delete", "/inventory/1/incr"):
        response = client.post(path)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    response = client.post("/inventory/add", data={"name": "Intruso", "quantity": "9"})
    assert response.status_code == 303
    assert response.headers["location"] == "/login"

    login(client)
    assert quantities(client) == [12, 8, 5]


def test_tampered_cookie_redirects(client):
    client.cookies.set(settings.SESSION_COOKIE_NAME, "forged.cookie.value")

    response = client.get("/inventory")

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_full_scenario(client):
    assert register(client).status_code == 201

    assert login(client, access_token="wrong").status_code == 401
    assert client.get("/inventory").status_code == 303

    response = login(client)
    assert response.status_code == 303
    assert response.headers["location"] == "/inventory"

    products = client.get("/inventory").json()
    assert [p["quantity"] for p in products] == [12, 8, 5]
    first = products[0]["id"]

    for _ in range(7):
        assert client.post(f"/inventory/{first}/decr").status_code == 303
    assert quantities(client)[0] == 5

    for _ in range(6):
        client.post(f"/inventory/{first}/decr")
    assert quantities(client)[0] == 0


def test_me_returns_session_identity(client):
    register(client)
    login(client)

    response = client.get("/auth/me")

    assert response.status_code == 200
    assert response.json()["email"] == "a@x.com"


def test_add_increment_delete(client):
    register(client)
    login(client)

    response = client.post("/inventory/add", data={"name": "  Espumante ", "quantity": "-4"})
    assert response.status_code == 303
    added = client.get("/inventory").json()[-1]
    assert added["name"] == "Espumante"
    assert added["quantity"] == 0

    client.post(f"/inventory/{added['id']}/incr")
    assert client.get("/inventory").json()[-1]["quantity"] == 1

    client.post(f"/inventory/{added['id']}/delete")
    client.post(f"/inventory/{added['id']}/delete")
    assert [p["id"] for p in client.get("/inventory").json()] == [1, 2, 3]


def test_add_with_blank_name_is_rejected(client):
    register(client)
    login(client)

    response = client.post("/inventory/add", data={"name": "   "})

    assert response.status_code == 400
    assert len(client.get("/inventory").json()) == 3


def test_mutating_missing_product_returns_404(client):
    register(client)
    login(client)

    assert client.post("/inventory/999/incr").status_code == 404
    assert client.post("/inventory/999/decr").status_code == 404
    assert client.post("/inventory/999/delete").status_code == 303


def test_logout_ends_session(client):
    register(client)
    login(client)
    assert client.get("/inventory").status_code == 200

    response = client.post("/auth/logout")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert client.get("/inventory").status_code == 303

    # A second logout is harmless
    assert client.post("/auth/logout").status_code == 303


def test_root_redirects_by_session_state(client):
    assert client.get("/").headers["location"] == "/login"

    register(client)
    login(client)
    assert client.get("/").headers["location"] == "/inventory"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_login_with_nul_byte_password_is_rejected_as_bad_credentials(client):
    register(client)

    response = login(client, password="pa\x00ss")

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_register_with_nul_byte_password_is_rejected(client):
    response = register(client, password="pa\x00ss")

    assert response.status_code == 400


def test_add_with_oversized_quantity_is_rejected(client):
    register(client)
    login(client)

    response = client.post("/inventory/add", data={"name": "Big", "quantity": "99999999999999999999"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Quantity is too large"}
    assert len(client.get("/inventory").json()) == 3
