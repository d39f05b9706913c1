import uuid

def auth_headers(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def register(client, org_name: str, email: str) -> str:
    r = client.post(
        "/auth/register",
        json={"organization_name": org_name, "admin_name": "admin", "email": email, "password": "password123"},
    )
    assert r.status_code == 201, r.text
    return r.json()["access_token"]

def test_tenant_isolation_tasks(client):
    a = register(client, "org-a", "a@example.com")
    b = register(client, "org-b", "b@example.com")

    r = client.post("/projects", json={"name": "p1", "code": "P1"}, headers=auth_headers(a))
    assert r.status_code == 201
    project_a = r.json()["id"]

    r = client.post("/tasks", json={"title": "secret", "project_id": project_a}, headers=auth_headers(a))
    assert r.status_code == 201
    task_a = r.json()["id"]

    # b guesses the ids: every path answers as if they do not exist
    assert client.get(f"/tasks/{task_a}", headers=auth_headers(b)).status_code == 404
    assert client.get(f"/tasks/kanban/{project_a}", headers=auth_headers(b)).status_code == 404
    r = client.patch(f"/tasks/{task_a}", json={"title": "hacked"}, headers=auth_headers(b))
    assert r.status_code == 404
    assert client.delete(f"/tasks/{task_a}", headers=auth_headers(b)).status_code == 404
    r = client.patch(
        "/tasks/order", json={"tasks": [{"id": task_a, "order_index": 99}]}, headers=auth_headers(b)
    )
    assert r.status_code == 404

    r = client.get("/tasks", params={"project_id": project_a}, headers=auth_headers(b))
    assert r.status_code == 200
    assert r.json()["items"] == []
    assert client.get("/tasks", headers=auth_headers(b)).json()["total"] == 0

    # b cannot attach its own task under a's project
    r = client.post("/tasks", json={"title": "x", "project_id": project_a}, headers=auth_headers(b))
    assert r.status_code == 404

    # a still sees the task untouched
    r = client.get(f"/tasks/{task_a}", headers=auth_headers(a))
    assert r.status_code == 200
    assert r.json()["title"] == "secret"
    assert r.json()["order_index"] == 0

def test_tenant_isolation_projects_and_clients(client):
    a = register(client, "org-a", "a@example.com")
    b = register(client, "org-b", "b@example.com")

    r = client.post("/clients", json={"name": "acme"}, headers=auth_headers(a))
    assert r.status_code == 201
    client_a = r.json()["id"]

    r = client.post("/projects", json={"name": "p1", "code": "P1", "client_id": client_a}, headers=auth_headers(a))
    assert r.status_code == 201
    project_a = r.json()["id"]

    assert client.get(f"/projects/{project_a}", headers=auth_headers(b)).status_code == 404
    assert client.get(f"/projects/{project_a}/summary", headers=auth_headers(b)).status_code == 404
    assert client.get(f"/clients/{client_a}", headers=auth_headers(b)).status_code == 404
    assert client.get("/projects", headers=auth_headers(b)).json()["total"] == 0

    # b may reuse a's project code in its own org
    r = client.post("/projects", json={"name": "p1", "code": "P1"}, headers=auth_headers(b))
    assert r.status_code == 201

    # nor can b point its project at a's client
    r = client.post("/projects", json={"name": "p2", "code": "P2", "client_id": client_a}, headers=auth_headers(b))
    assert r.status_code == 404

def test_tenant_isolation_timesheets_and_users(client):
    a = register(client, "org-a", "a@example.com")
    b = register(client, "org-b", "b@example.com")

    r = client.post("/projects", json={"name": "p1", "code": "P1"}, headers=auth_headers(a))
    project_a = r.json()["id"]
    r = client.post(
        "/timesheets", json={"project_id": project_a, "date": "2026-10-19", "minutes": 60}, headers=auth_headers(a)
    )
    assert r.status_code == 201
    entry_a = r.json()["id"]
    user_a = r.json()["user"]["id"]

    assert client.get(f"/timesheets/{entry_a}", headers=auth_headers(b)).status_code == 404
    assert client.get("/timesheets", headers=auth_headers(b)).json()["total"] == 0
    assert client.get(f"/users/{user_a}", headers=auth_headers(b)).status_code == 404

    # b cannot log time against a's project
    r = client.post(
        "/timesheets", json={"project_id": project_a, "date": "2026-10-19", "minutes": 60}, headers=auth_headers(b)
    )
    assert r.status_code == 404

    r = client.get("/org", headers=auth_headers(b))
    assert r.json()["name"] == "org-b"
    assert [u["email"] for u in r.json()["users"]] == ["b@example.com"]

def test_token_for_unknown_user_rejected(client):
    from timeboard.auth.tokens import issue_access_token

    jwt = issue_access_token(uuid.uuid4(), uuid.uuid4(), "OWNER")
    assert client.get("/tasks", headers=auth_headers(jwt)).status_code == 401
