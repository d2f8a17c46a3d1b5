from chorechart.modules.auth.models import User

from conftest import API_KEY, PASSWORD, USERNAME


def test_create_user_returns_api_key_once(client, auth_headers):
    response = client.post("/users", json={"username": "grandma", "password": "knitting-needles"}, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "username", "created_at", "api_key"}
    assert response.headers["location"] == f"/users/{body['id']}"

    shown = client.get(f"/users/{body['id']}", headers=auth_headers).json()
    assert "api_key" not in shown
    assert shown["username"] == "grandma"


def test_new_key_passes_the_gate(client, auth_headers):
    created = client.post("/users", json={"username": "grandma"}, headers=auth_headers).json()

    response = client.get("/tasks", headers={"Authorization": f"Token token={created['api_key']}"})

    assert response.status_code == 200


def test_password_is_stored_hashed(client, auth_headers, db):
    created = client.post("/users", json={"username": "grandma", "password": "knitting-needles"}, headers=auth_headers).json()

    stored = db.get(User, created["id"])
    assert stored.PasswordHash
    assert stored.PasswordHash != "knitting-needles"


def test_duplicate_username_is_rejected(client, auth_headers, db):
    response = client.post("/users", json={"username": USERNAME}, headers=auth_headers)

    assert response.status_code == 422
    assert response.json() == {"username": ["has already been taken"]}
    assert db.query(User).count() == 1


def test_rename_to_taken_username_is_rejected(client, auth_headers):
    created = client.post("/users", json={"username": "grandma"}, headers=auth_headers).json()

    response = client.patch(f"/users/{created['id']}", json={"username": USERNAME}, headers=auth_headers)

    assert response.status_code == 422
    assert client.get(f"/users/{created['id']}", headers=auth_headers).json()["username"] == "grandma"


def test_list_and_delete_users(client, auth_headers):
    created = client.post("/users", json={"username": "grandma"}, headers=auth_headers).json()

    listed = client.get("/users", headers=auth_headers).json()
    assert [user["username"] for user in listed] == [USERNAME, "grandma"]

    assert client.delete(f"/users/{created['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/users/{created['id']}", headers=auth_headers).status_code == 404


def test_users_are_token_gated(client):
    assert client.get("/users").status_code == 401


def test_token_exchange_with_basic_credentials(client):
    response = client.get("/token", auth=(USERNAME, PASSWORD))

    assert response.status_code == 200
    assert response.json() == {"api_key": API_KEY}


def test_token_exchange_rejects_bad_password(client):
    response = client.get("/token", auth=(USERNAME, "wrong-password"))

    assert response.status_code == 401
    assert response.json() == {"error": "Bad Credentials"}
    assert response.headers["www-authenticate"] == 'Basic realm="Application"'


def test_token_exchange_requires_credentials(client):
    assert client.get("/token").status_code == 401


def test_rotate_key_invalidates_previous_key(client, auth_headers):
    seeded = client.get("/users", headers=auth_headers).json()[0]

    response = client.post(f"/users/{seeded['id']}/api_key", headers=auth_headers)

    assert response.status_code == 200
    new_key = response.json()["api_key"]
    assert new_key != API_KEY
    assert client.get("/tasks", headers=auth_headers).status_code == 401
    assert client.get("/tasks", headers={"Authorization": f"Token token={new_key}"}).status_code == 200


def test_update_with_null_password_is_rejected(client, auth_headers, db):
    seeded = client.get("/users", headers=auth_headers).json()[0]
    before = db.get(User, seeded["id"]).PasswordHash

    response = client.patch(f"/users/{seeded['id']}", json={"password": None}, headers=auth_headers)

    assert response.status_code == 422
    assert response.json() == {"password": ["can't be blank"]}
    db.expire_all()
    assert db.get(User, seeded["id"]).PasswordHash == before


def test_last_user_cannot_be_deleted(client, auth_headers, db):
    seeded = client.get("/users", headers=auth_headers).json()[0]

    response = client.delete(f"/users/{seeded['id']}", headers=auth_headers)

    assert response.status_code == 422
    assert response.json() == {"base": ["Cannot delete the last user"]}
    assert db.query(User).count() == 1
    assert client.get("/tasks", headers=auth_headers).status_code == 200


def test_create_user_from_form_fields(client, auth_headers):
    response = client.post("/users", data={"username": "grandma", "password": "knitting-needles"}, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["username"] == "grandma"
