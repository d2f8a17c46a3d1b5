import pytest

from chorechart.core.errors import BuildAuthenticateHeader
from chorechart.modules.auth.service import ParseTokenHeader
from chorechart.modules.tasks.models import Task


@pytest.mark.parametrize(
    "header",
    [
        "Token token=abc",
        'Token token="abc"',
        "Bearer token=abc, foo=bar",
        "Token token=abc; nonce=1",
        "Token token=abc\tfoo=bar",
    ],
)
def test_parse_token_header_extracts_first_value(header):
    assert ParseTokenHeader(header) == "abc"


@pytest.mark.parametrize("header", [None, "", "Token abc", "Token ", "Basic dXNlcjpwYXNz", "Token token="])
def test_parse_token_header_rejects_malformed(header):
    assert ParseTokenHeader(header) is None


def test_authenticate_header_strips_quotes_from_realm():
    assert BuildAuthenticateHeader("Token", 'App"lication') == 'Token realm="Application"'


def test_missing_header_is_rejected(client):
    response = client.get("/api/v1/tasks")

    assert response.status_code == 401
    assert response.json() == {"error": "Bad Credentials"}
    assert response.headers["www-authenticate"] == 'Token realm="Application"'


def test_unknown_token_is_rejected(client):
    response = client.get("/children", headers={"Authorization": "Token token=nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Bad Credentials"}


def test_bare_token_without_key_is_rejected(client):
    response = client.get("/chores", headers={"Authorization": "Token test-api-key"})

    assert response.status_code == 401


def test_quoted_token_is_accepted(client):
    response = client.get("/tasks", headers={"Authorization": 'Token token="test-api-key"'})

    assert response.status_code == 200
    assert response.json() == []


def test_rejected_create_has_no_side_effects(client, db):
    response = client.post(
        "/api/v1/tasks",
        json={"name": "Dishes", "points": 3},
        headers={"Authorization": "Token token=wrong"},
    )

    assert response.status_code == 401
    assert db.query(Task).count() == 0


def test_rejected_request_skips_body_validation(client):
    response = client.post("/api/v1/tasks", json={}, headers={"Authorization": "Token token=wrong"})

    assert response.status_code == 401
    assert response.json() == {"error": "Bad Credentials"}


def test_realm_comes_from_environment(client, monkeypatch):
    monkeypatch.setenv("AUTH_REALM", "Chores")

    response = client.get("/tasks")

    assert response.headers["www-authenticate"] == 'Token realm="Chores"'


def test_health_endpoints_are_not_gated(client):
    assert client.get("/api/health").json() == {"status": "ok"}
    assert client.get("/api/health/db").json() == {"status": "ok"}
