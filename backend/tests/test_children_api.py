def _create_child(client, auth_headers, first_name, last_name, **extra):
    response = client.post(
        "/api/v2/children",
        json={"first_name": first_name, "last_name": last_name, **extra},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


def test_create_child(client, auth_headers):
    response = client.post(
        "/api/v2/children",
        json={"first_name": "Alex", "last_name": "Heimann"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Alex Heimann"
    assert body["active"] is True
    assert body["points_earned"] == 0
    assert body["chores"] == []
    assert response.headers["location"] == f"/api/v2/children/{body['id']}"


def test_create_child_requires_names(client, auth_headers):
    response = client.post("/children", json={"first_name": "Alex"}, headers=auth_headers)

    assert response.status_code == 422
    assert set(response.json()) == {"last_name"}


def test_points_earned_counts_completed_chores(client, auth_headers):
    child = _create_child(client, auth_headers, "Alex", "Heimann")
    dishes = client.post("/tasks", json={"name": "Dishes", "points": 5}, headers=auth_headers).json()
    lawn = client.post("/tasks", json={"name": "Lawn", "points": 3}, headers=auth_headers).json()
    client.post(
        "/chores",
        json={"child_id": child["id"], "task_id": dishes["id"], "due_on": "2030-01-01", "completed": True},
        headers=auth_headers,
    )
    client.post(
        "/chores",
        json={"child_id": child["id"], "task_id": lawn["id"], "due_on": "2030-01-02"},
        headers=auth_headers,
    )

    body = client.get(f"/api/v2/children/{child['id']}", headers=auth_headers).json()

    assert body["points_earned"] == 5
    assert [chore["task"]["name"] for chore in body["chores"]] == ["Dishes", "Lawn"]
    assert body["chores"][0]["child_id"] == child["id"]


def test_alphabetical_orders_by_last_then_first_name(client, auth_headers):
    _create_child(client, auth_headers, "Zoe", "Adams")
    _create_child(client, auth_headers, "Amy", "Young")
    _create_child(client, auth_headers, "Ben", "Adams")

    body = client.get("/children", params={"alphabetical": "true"}, headers=auth_headers).json()

    assert [child["name"] for child in body] == ["Ben Adams", "Zoe Adams", "Amy Young"]


def test_active_filter(client, auth_headers):
    active = _create_child(client, auth_headers, "Alex", "Heimann")
    _create_child(client, auth_headers, "Mark", "Heimann", active=False)

    body = client.get("/children", params={"active": "true"}, headers=auth_headers).json()

    assert [child["id"] for child in body] == [active["id"]]


def test_update_child_name(client, auth_headers):
    child = _create_child(client, auth_headers, "Alex", "Heimann")

    response = client.patch(f"/children/{child['id']}", json={"first_name": "Alexis"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Alexis Heimann"


def test_missing_child_is_404(client, auth_headers):
    response = client.delete("/api/v2/children/77", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"detail": "Child not found"}


def test_delete_child_without_chores(client, auth_headers):
    child = _create_child(client, auth_headers, "Alex", "Heimann")

    assert client.delete(f"/children/{child['id']}", headers=auth_headers).status_code == 204
    assert client.get("/children", headers=auth_headers).json() == []
