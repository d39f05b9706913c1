import uuid

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def test_create_and_list_users(client, owner_jwt):
    r = client.post(
        "/users",
        json={"email": "Dev@Example.com", "name": "dev", "role": "MANAGER", "password": "password123"},
        headers=auth(owner_jwt),
    )
    assert r.status_code == 201, r.text
    dev = r.json()
    assert dev["email"] == "dev@example.com"
    assert dev["role"] == "MANAGER"
    assert "password_hash" not in dev

    r = client.get("/users", headers=auth(owner_jwt))
    assert sorted(u["role"] for u in r.json()) == ["MANAGER", "OWNER"]

    r = client.get(f"/users/{dev['id']}", headers=auth(owner_jwt))
    assert r.status_code == 200
    assert r.json()["name"] == "dev"

    assert client.get(f"/users/{uuid.uuid4()}", headers=auth(owner_jwt)).status_code == 404

def test_duplicate_user_email_conflicts(client, owner, owner_jwt):
    r = client.post(
        "/users",
        json={"email": owner["user"]["email"], "name": "x", "role": "CLIENT", "password": "password123"},
        headers=auth(owner_jwt),
    )
    assert r.status_code == 409

def test_org_view_and_update(client, owner, owner_jwt):
    r = client.get("/org", headers=auth(owner_jwt))
    assert r.status_code == 200
    assert r.json()["id"] == owner["organization"]["id"]
    assert r.json()["timezone"] == "UTC"

    r = client.patch("/org", json={"currency": "EUR", "timezone": "Europe/Berlin"}, headers=auth(owner_jwt))
    assert r.status_code == 200, r.text
    assert (r.json()["currency"], r.json()["timezone"]) == ("EUR", "Europe/Berlin")
    assert r.json()["name"] == owner["organization"]["name"]

    r = client.patch("/org", json={"currency": "EURO"}, headers=auth(owner_jwt))
    assert r.status_code == 422
