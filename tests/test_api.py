# tests/test_api.py
def test_root_and_health(client):
    assert client.get("/").json() == {"message": "Task Manager API"}
    assert client.get("/health").json() == {"status": "ok", "backend": "sql"}


def test_end_to_end_alice(client):
    r = client.post("/v1/users", json={"username": "alice", "password": "pw"})
    assert r.status_code == 200
    assert r.json() == {"status": "success", "data": {"user_id": 1}}

    r = client.post("/v1/tasks", json={"user_id": 1, "title": "write report"})
    assert r.status_code == 200
    assert r.json()["data"] == {"task_id": 1}

    r = client.get("/v1/tasks/user", params={"username": "alice"})
    tasks = r.json()["data"]
    assert len(tasks) == 1
    assert tasks[0]["id"] == 1
    assert tasks[0]["user_id"] == 1
    assert tasks[0]["title"] == "write report"
    assert tasks[0]["status"] == "new"
    assert "created_at" in tasks[0]

    r = client.put("/v1/task/1", json={"title": "write report", "description": "", "status": "done"})
    assert r.status_code == 200
    assert client.get("/v1/task/1").json()["data"]["status"] == "done"

    assert client.delete("/v1/user/1").status_code == 200

    # No cascade: the task still points at the deleted user
    r = client.get("/v1/task/1")
    assert r.status_code == 200
    assert r.json()["data"]["user_id"] == 1


def test_create_task_for_unknown_user_is_404(client):
    r = client.post("/v1/tasks", json={"user_id": 5, "title": "orphan"})
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"
    assert client.get("/v1/tasks").json()["data"] == []


def test_unknown_task_is_404(client):
    assert client.get("/v1/task/3").status_code == 404
    assert client.put("/v1/task/3", json={"title": "t", "status": "done"}).status_code == 404
    assert client.delete("/v1/task/3").status_code == 404


def test_ids_that_cannot_exist_are_404(client):
    for task_id in (0, -3, 2**31, 2**63):
        assert client.get(f"/v1/task/{task_id}").status_code == 404
        assert client.put(f"/v1/task/{task_id}", json={"title": "t", "status": "done"}).status_code == 404
        assert client.delete(f"/v1/task/{task_id}").status_code == 404
        assert client.get(f"/v1/user/{task_id}").status_code == 404

    r = client.post("/v1/tasks", json={"user_id": 2**63, "title": "orphan"})
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_delete_task_twice(client):
    client.post("/v1/users", json={"username": "alice", "password": "pw"})
    client.post("/v1/tasks", json={"user_id": 1, "title": "t"})

    assert client.delete("/v1/task/1").json() == {"status": "success"}
    assert client.delete("/v1/task/1").status_code == 404


def test_bad_requests_are_400(client):
    assert client.post("/v1/tasks", json={"user_id": 1, "title": ""}).status_code == 400
    assert client.post("/v1/tasks", content=b"not json",
                       headers={"Content-Type": "application/json"}).status_code == 400
    assert client.get("/v1/task/abc").status_code == 400
    assert client.get("/v1/tasks/user").status_code == 400
    assert client.post("/v1/users", json={"username": "alice"}).status_code == 400


def test_user_routes(client):
    client.post("/v1/users", json={"username": "alice", "password": "pw"})

    r = client.put("/v1/user/1", json={"username": "alice", "password": "new"})
    assert r.json() == {"status": "success", "data": {"user_id": 1}}

    user = client.get("/v1/user/1").json()["data"]
    assert user["password"] == "new"
    assert [u["id"] for u in client.get("/v1/users").json()["data"]] == [1]
    assert client.get("/v1/user/2").status_code == 404


def test_memory_backend(memory_client):
    r = memory_client.post("/v1/tasks", json={"user_id": 42, "title": "in memory"})
    assert r.json()["data"] == {"task_id": 1}
    assert memory_client.get("/v1/task/1").json()["data"]["status"] == "new"
    assert len(memory_client.get("/v1/tasks").json()["data"]) == 1

    # No user store behind this backend
    assert memory_client.post("/v1/users", json={"username": "a", "password": "b"}).status_code == 404
    assert memory_client.get("/v1/tasks/user", params={"username": "a"}).status_code == 501
