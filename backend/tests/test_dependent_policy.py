import pytest

from chorechart.core.config import GetDependentChoresPolicy
from chorechart.modules.chores.models import Chore
from chorechart.modules.tasks.models import Task


@pytest.fixture
def chore(client, auth_headers):
    child = client.post(
        "/children", json={"first_name": "Alex", "last_name": "Heimann"}, headers=auth_headers
    ).json()
    task = client.post("/tasks", json={"name": "Dishes", "points": 2}, headers=auth_headers).json()
    chore = client.post(
        "/chores",
        json={"child_id": child["id"], "task_id": task["id"], "due_on": "2030-05-01"},
        headers=auth_headers,
    ).json()
    return {"child": child, "task": task, "chore": chore}


def test_policy_defaults_to_restrict(monkeypatch):
    monkeypatch.delenv("CHORES_DEPENDENT_POLICY", raising=False)
    assert GetDependentChoresPolicy() == "restrict"


def test_unknown_policy_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("CHORES_DEPENDENT_POLICY", "orphan")
    with pytest.raises(RuntimeError):
        GetDependentChoresPolicy()


def test_restrict_blocks_task_delete(client, auth_headers, chore, db):
    response = client.delete(f"/tasks/{chore['task']['id']}", headers=auth_headers)

    assert response.status_code == 422
    assert response.json() == {"base": ["Cannot delete record because dependent chores exist"]}
    assert db.query(Task).count() == 1
    assert db.query(Chore).count() == 1


def test_restrict_blocks_child_delete(client, auth_headers, chore):
    response = client.delete(f"/api/v2/children/{chore['child']['id']}", headers=auth_headers)

    assert response.status_code == 422
    assert "base" in response.json()


def test_cascade_removes_dependent_chores(client, auth_headers, chore, db, monkeypatch):
    monkeypatch.setenv("CHORES_DEPENDENT_POLICY", "Cascade")

    response = client.delete(f"/tasks/{chore['task']['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert db.query(Chore).count() == 0
    assert client.get(f"/children/{chore['child']['id']}", headers=auth_headers).json()["chores"] == []
