import datetime as dt

from timeboard.services.timesheets import week_start_of

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def log_time(client, jwt: str, project_id: str, day: str, minutes: int, **extra) -> dict:
    r = client.post(
        "/timesheets",
        json={"project_id": project_id, "date": day, "minutes": minutes, **extra},
        headers=auth(jwt),
    )
    assert r.status_code == 201, r.text
    return r.json()

def test_week_start_is_monday():
    assert week_start_of(dt.date(2026, 10, 19)) == dt.date(2026, 10, 19)
    assert week_start_of(dt.date(2026, 10, 22)) == dt.date(2026, 10, 19)
    assert week_start_of(dt.date(2026, 10, 25)) == dt.date(2026, 10, 19)

def test_create_entry(client, owner, owner_jwt, project_id):
    r = client.post("/tasks", json={"title": "t", "project_id": project_id}, headers=auth(owner_jwt))
    task = r.json()

    e = log_time(client, owner_jwt, project_id, "2026-10-19", 75, task_id=task["id"], notes="standup")
    assert e["user"]["id"] == owner["user"]["id"]
    assert e["project"]["code"] == "BRD"
    assert e["task"] == {"id": task["id"], "title": "t"}
    assert e["billable"] is True

    r = client.get(f"/timesheets/{e['id']}", headers=auth(owner_jwt))
    assert r.status_code == 200
    assert r.json()["notes"] == "standup"

def test_create_entry_validation(client, owner_jwt, project_id):
    for minutes in (0, 24 * 60 + 1):
        r = client.post(
            "/timesheets",
            json={"project_id": project_id, "date": "2026-10-19", "minutes": minutes},
            headers=auth(owner_jwt),
        )
        assert r.status_code == 422

def test_task_must_belong_to_project(client, owner_jwt, project_id):
    r = client.post("/projects", json={"name": "other", "code": "OTH"}, headers=auth(owner_jwt))
    other_project = r.json()["id"]
    r = client.post("/tasks", json={"title": "t", "project_id": other_project}, headers=auth(owner_jwt))
    other_task = r.json()["id"]

    r = client.post(
        "/timesheets",
        json={"project_id": project_id, "task_id": other_task, "date": "2026-10-19", "minutes": 10},
        headers=auth(owner_jwt),
    )
    assert r.status_code == 404

def test_list_entries_with_summary(client, owner_jwt, project_id):
    log_time(client, owner_jwt, project_id, "2026-10-18", 60)
    log_time(client, owner_jwt, project_id, "2026-10-19", 90)
    log_time(client, owner_jwt, project_id, "2026-10-20", 30, billable=False)

    r = client.get(
        "/timesheets",
        params={"date_from": "2026-10-19", "date_to": "2026-10-25"},
        headers=auth(owner_jwt),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["total"] == 2
    assert [e["date"] for e in body["items"]] == ["2026-10-20", "2026-10-19"]
    assert body["summary"] == {
        "total_minutes": 120,
        "billable_minutes": 90,
        "total_hours": 2.0,
        "billable_hours": 1.5,
    }

    # one-sided range is ignored
    r = client.get("/timesheets", params={"date_from": "2026-10-19"}, headers=auth(owner_jwt))
    assert r.json()["total"] == 3

def test_update_and_delete_entry(client, owner_jwt, project_id):
    e = log_time(client, owner_jwt, project_id, "2026-10-19", 60)

    r = client.patch(f"/timesheets/{e['id']}", json={"minutes": 45, "billable": False}, headers=auth(owner_jwt))
    assert r.status_code == 200, r.text
    assert (r.json()["minutes"], r.json()["billable"]) == (45, False)

    r = client.patch(f"/timesheets/{e['id']}", json={"minutes": 2000}, headers=auth(owner_jwt))
    assert r.status_code == 422

    r = client.delete(f"/timesheets/{e['id']}", headers=auth(owner_jwt))
    assert r.status_code == 200
    assert client.get(f"/timesheets/{e['id']}", headers=auth(owner_jwt)).status_code == 404

def test_weekly_summary(client, owner_jwt, project_id):
    log_time(client, owner_jwt, project_id, "2026-10-18", 600)
    log_time(client, owner_jwt, project_id, "2026-10-19", 60)
    log_time(client, owner_jwt, project_id, "2026-10-19", 30, billable=False)
    log_time(client, owner_jwt, project_id, "2026-10-25", 30)
    log_time(client, owner_jwt, project_id, "2026-10-26", 600)

    r = client.get("/timesheets/weekly", params={"week_start": "2026-10-19"}, headers=auth(owner_jwt))
    assert r.status_code == 200, r.text
    body = r.json()
    assert (body["week_start"], body["week_end"]) == ("2026-10-19", "2026-10-25")
    assert (body["total_hours"], body["billable_hours"]) == (2.0, 1.5)

    assert sorted(body["daily_summary"]) == ["2026-10-19", "2026-10-25"]
    monday = body["daily_summary"]["2026-10-19"]
    assert (monday["total_minutes"], monday["billable_minutes"]) == (90, 60)
    assert len(monday["entries"]) == 2

    assert len(body["project_summary"]) == 1
    assert body["project_summary"][0]["project"]["id"] == project_id
    assert body["project_summary"][0]["total_minutes"] == 120
    assert body["project_summary"][0]["billable_minutes"] == 90

def test_weekly_summary_for_one_user(client, owner_jwt, project_id):
    r = client.post(
        "/users",
        json={"email": "dev@example.com", "name": "dev", "role": "TEAM_MEMBER", "password": "password123"},
        headers=auth(owner_jwt),
    )
    dev_id = r.json()["id"]
    r = client.post("/auth/login", json={"email": "dev@example.com", "password": "password123"})
    dev_jwt = r.json()["access_token"]

    log_time(client, owner_jwt, project_id, "2026-10-19", 60)
    log_time(client, dev_jwt, project_id, "2026-10-20", 120)

    r = client.get(
        "/timesheets/weekly", params={"week_start": "2026-10-19", "user_id": dev_id}, headers=auth(owner_jwt)
    )
    body = r.json()
    assert body["total_hours"] == 2.0
    assert list(body["daily_summary"]) == ["2026-10-20"]
