import pytest

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def login(client, email: str, password: str = "password123") -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]

def add_user(client, jwt: str, email: str, role: str) -> str:
    r = client.post(
        "/users",
        json={"email": email, "name": role.lower(), "role": role, "password": "password123"},
        headers=auth(jwt),
    )
    assert r.status_code == 201, r.text
    return login(client, email)

@pytest.fixture()
def staff(client, owner_jwt) -> dict[str, str]:
    return {
        "OWNER": owner_jwt,
        "ADMIN": add_user(client, owner_jwt, "admin@example.com", "ADMIN"),
        "MANAGER": add_user(client, owner_jwt, "manager@example.com", "MANAGER"),
        "TEAM_MEMBER": add_user(client, owner_jwt, "member@example.com", "TEAM_MEMBER"),
        "CLIENT": add_user(client, owner_jwt, "client@example.com", "CLIENT"),
    }

def test_rbac_projects_and_tasks(client, staff, project_id):
    for role, code in (("MANAGER", "M1"), ("ADMIN", "A1")):
        r = client.post("/projects", json={"name": "p", "code": code}, headers=auth(staff[role]))
        assert r.status_code == 201, role

    for role in ("TEAM_MEMBER", "CLIENT"):
        r = client.post("/projects", json={"name": "p", "code": "X"}, headers=auth(staff[role]))
        assert r.status_code == 403, role

    # member can create and move tasks
    r = client.post("/tasks", json={"title": "t-member", "project_id": project_id}, headers=auth(staff["TEAM_MEMBER"]))
    assert r.status_code == 201
    task_id = r.json()["id"]
    r = client.patch(f"/tasks/{task_id}", json={"status": "IN_PROGRESS"}, headers=auth(staff["TEAM_MEMBER"]))
    assert r.status_code == 200

    # clients only read the board
    r = client.post("/tasks", json={"title": "t-client", "project_id": project_id}, headers=auth(staff["CLIENT"]))
    assert r.status_code == 403
    r = client.patch("/tasks/order", json={"tasks": [{"id": task_id, "order_index": 3}]}, headers=auth(staff["CLIENT"]))
    assert r.status_code == 403
    assert client.get(f"/tasks/kanban/{project_id}", headers=auth(staff["CLIENT"])).status_code == 200

    # delete is manager and up
    assert client.delete(f"/tasks/{task_id}", headers=auth(staff["TEAM_MEMBER"])).status_code == 403
    assert client.delete(f"/tasks/{task_id}", headers=auth(staff["MANAGER"])).status_code == 200

def test_rbac_project_delete_and_org_update(client, staff, project_id):
    assert client.delete(f"/projects/{project_id}", headers=auth(staff["MANAGER"])).status_code == 403

    r = client.patch("/org", json={"name": "renamed"}, headers=auth(staff["MANAGER"]))
    assert r.status_code == 403
    r = client.patch("/org", json={"name": "renamed"}, headers=auth(staff["ADMIN"]))
    assert r.status_code == 200
    assert r.json()["name"] == "renamed"

def test_rbac_timesheets_and_clients_hidden_from_client_role(client, staff):
    assert client.get("/timesheets", headers=auth(staff["CLIENT"])).status_code == 403
    assert client.get("/clients", headers=auth(staff["CLIENT"])).status_code == 403
    assert client.get("/clients", headers=auth(staff["TEAM_MEMBER"])).status_code == 200

@pytest.mark.parametrize(
    "creator,granted,expected",
    [
        ("OWNER", "ADMIN", 201),
        ("ADMIN", "MANAGER", 201),
        ("ADMIN", "ADMIN", 403),
        ("ADMIN", "OWNER", 403),
        ("MANAGER", "TEAM_MEMBER", 403),
        ("TEAM_MEMBER", "CLIENT", 403),
    ],
)
def test_rbac_user_grants(client, staff, creator, granted, expected):
    r = client.post(
        "/users",
        json={"email": "new@example.com", "name": "new", "role": granted, "password": "password123"},
        headers=auth(staff[creator]),
    )
    assert r.status_code == expected, r.text

def test_missing_or_bad_token(client):
    assert client.get("/tasks").status_code == 401
    assert client.get("/tasks", headers=auth("not-a-jwt")).status_code == 401
