# tests/test_task_api.py

from __future__ import annotations

from fastapi.testclient import TestClient

from .conftest import API


def test_create_task_defaults(client: TestClient, register, create_task) -> None:
    user = register()
    task = create_task(user.headers, checkLists=[{"title": "one"}])

    assert task["title"] == "Write report"
    assert task["priority"] == "high"
    assert task["status"] == "todo"
    assert task["checkLists"] == [{"title": "one", "checked": False}]
    assert task["createdBy"] == user.id
    assert task["assignedBy"] == user.id
    assert task["assigned_to_email"] == ""
    assert task["shared_with"] == []
    assert task["dueDate"] is None
    assert task["isExpired"] is False


def test_create_task_requires_title_priority_and_checklist(client: TestClient, register) -> None:
    user = register()
    url = f"{API}/task/createTask"
    checklist = [{"title": "a"}]

    assert client.post(url, json={"priority": "low", "checkLists": checklist}, headers=user.headers).status_code == 400
    assert client.post(url, json={"title": "t", "checkLists": checklist}, headers=user.headers).status_code == 400
    assert client.post(url, json={"title": "t", "priority": "low"}, headers=user.headers).status_code == 400

    resp = client.post(url, json={"title": "t", "priority": "low", "checkLists": []}, headers=user.headers)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "PLease fill at least one check list"}


def test_create_task_rejects_unknown_enums(client: TestClient, register) -> None:
    user = register()
    url = f"{API}/task/createTask"
    base = {"title": "t", "checkLists": [{"title": "a"}]}

    assert client.post(url, json={**base, "priority": "urgent"}, headers=user.headers).status_code == 400
    assert client.post(url, json={**base, "priority": "low", "status": "blocked"}, headers=user.headers).status_code == 400


def test_create_task_requires_auth(client: TestClient) -> None:
    resp = client.post(
        f"{API}/task/createTask",
        json={"title": "t", "priority": "low", "checkLists": [{"title": "a"}]},
    )
    assert resp.status_code == 401


def test_get_task_is_public(client: TestClient, register, create_task) -> None:
    user = register()
    task = create_task(user.headers)

    resp = client.get(f"{API}/task/{task['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["task"]["id"] == task["id"]

    resp = client.get(f"{API}/task/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Task Not Found"}


def test_list_tasks_includes_created_and_assigned(client: TestClient, register, create_task) -> None:
    alice = register()
    bob = register(email="bob@example.com", name="Bob")
    carol = register(email="carol@example.com", name="Carol")

    own = create_task(alice.headers, title="mine")
    assigned = create_task(bob.headers, title="for alice", assigned_to_email=alice.email)
    create_task(carol.headers, title="not visible")

    resp = client.get(f"{API}/task/", headers=alice.headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "success"
    assert body["results"] == 2
    assert {t["id"] for t in body["data"]["tasks"]} == {own["id"], assigned["id"]}

    by_id = {t["id"]: t for t in body["data"]["tasks"]}
    assert by_id[assigned["id"]]["assignedBy"] == {"id": bob.id, "name": "Bob", "email": bob.email}
    assert by_id[own["id"]]["assignedBy"]["name"] == "Alice"


def test_list_tasks_respects_range(client: TestClient, register, create_task) -> None:
    user = register()
    create_task(user.headers, title="recent")
    create_task(user.headers, title="old", createdAt="2001-01-01T00:00:00Z")

    titles = [t["title"] for t in client.get(f"{API}/task/", headers=user.headers).json()["data"]["tasks"]]
    assert titles == ["recent"]

    resp = client.get(f"{API}/task/", params={"range": "100000"}, headers=user.headers)
    assert {t["title"] for t in resp.json()["data"]["tasks"]} == {"recent", "old"}

    resp = client.get(f"{API}/task/", params={"range": "abc"}, headers=user.headers)
    assert [t["title"] for t in resp.json()["data"]["tasks"]] == ["recent"]

    for huge in ("1000000", "12345678901234567890"):
        resp = client.get(f"{API}/task/", params={"range": huge}, headers=user.headers)
        assert resp.status_code == 200
        assert {t["title"] for t in resp.json()["data"]["tasks"]} == {"recent", "old"}

    resp = client.get(f"{API}/task/", params={"range": "-12345678901234567890"}, headers=user.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["tasks"] == []


def test_update_by_creator_and_assignee(client: TestClient, register, create_task) -> None:
    alice = register()
    bob = register(email="bob@example.com", name="Bob")
    task = create_task(alice.headers, assigned_to_email=bob.email)

    resp = client.patch(f"{API}/task/{task['id']}", json={"status": "inProgress"}, headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"
    assert resp.json()["data"]["task"]["status"] == "inProgress"

    resp = client.patch(
        f"{API}/task/{task['id']}",
        json={"status": "done", "checkLists": [{"title": "outline", "checked": True}]},
        headers=bob.headers,
    )
    assert resp.status_code == 200
    updated = resp.json()["data"]["task"]
    assert updated["status"] == "done"
    assert updated["checkLists"] == [{"title": "outline", "checked": True}]
    assert updated["title"] == task["title"]
    assert updated["priority"] == task["priority"]


def test_update_by_stranger_is_not_found(client: TestClient, register, create_task) -> None:
    alice = register()
    mallory = register(email="mallory@example.com", name="Mallory")
    task = create_task(alice.headers)

    resp = client.patch(f"{API}/task/{task['id']}", json={"title": "pwned"}, headers=mallory.headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Task Not Found"

    resp = client.patch(f"{API}/task/{task['id']}", json={}, headers=mallory.headers)
    assert resp.status_code == 404

    assert client.get(f"{API}/task/{task['id']}").json()["data"]["task"]["title"] == task["title"]


def test_update_rejects_bad_values(client: TestClient, register, create_task) -> None:
    alice = register()
    task = create_task(alice.headers)
    url = f"{API}/task/{task['id']}"

    assert client.patch(url, json={"priority": "urgent"}, headers=alice.headers).status_code == 400
    assert client.patch(url, json={"status": "blocked"}, headers=alice.headers).status_code == 400

    resp = client.patch(url, json={"checkLists": []}, headers=alice.headers)
    assert resp.status_code == 400


def test_update_can_clear_due_date_but_not_title(client: TestClient, register, create_task) -> None:
    alice = register()
    task = create_task(alice.headers, dueDate="2099-01-01T00:00:00Z")
    assert task["dueDate"].startswith("2099-01-01T00:00:00")

    resp = client.patch(f"{API}/task/{task['id']}", json={"dueDate": None, "title": None}, headers=alice.headers)
    assert resp.status_code == 200
    updated = resp.json()["data"]["task"]
    assert updated["dueDate"] is None
    assert updated["title"] == task["title"]


def test_delete_only_by_creator(client: TestClient, register, create_task) -> None:
    alice = register()
    bob = register(email="bob@example.com", name="Bob")
    task = create_task(alice.headers, assigned_to_email=bob.email)
    url = f"{API}/task/{task['id']}"

    resp = client.delete(url, headers=bob.headers)
    assert resp.status_code == 404
    assert client.get(url).status_code == 200

    resp = client.delete(url, headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Task deleted successfully"}
    assert client.get(url).status_code == 404

    assert client.delete(url, headers=alice.headers).status_code == 404


def test_version_and_health_routes(client: TestClient) -> None:
    assert client.get("/").text == "Hello world"
    assert client.get(f"{API}/").text == "This is v1 of server"
    assert client.get("/health").json() == {"status": "healthy"}
