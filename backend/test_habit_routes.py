from datetime import datetime, timedelta, timezone

from models.habit_entry import HabitEntry


def today():
    return datetime.now(timezone.utc).date()


def create_habit(client, headers, **fields):
    fields.setdefault("title", "Leave 10 minutes early")
    resp = client.post("/api/v1/habits", json=fields, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def seed_entries(db, habit_id, *offsets, completed=True):
    for o in offsets:
        db.add(HabitEntry(habit_id=habit_id, date=today() + timedelta(days=o), completed=completed))
    db.commit()


def test_habits_require_auth(client):
    assert client.get("/api/v1/habits").status_code == 401
    resp = client.get("/api/v1/habits", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_create_habit_defaults(client, auth_headers):
    habit = create_habit(client, auth_headers, description="  ")
    assert habit["title"] == "Leave 10 minutes early"
    assert habit["color"] == "#3B82F6"
    assert habit["is_active"] is True


def test_create_habit_requires_title(client, auth_headers):
    for body in ({}, {"title": ""}, {"title": "   "}):
        resp = client.post("/api/v1/habits", json=body, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Title is required"


def test_list_returns_only_own_active_habits_with_todays_entries(client, db, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    first = create_habit(client, alice, title="Pack bag the night before", color="#10B981")
    second = create_habit(client, alice, title="Set two alarms")
    create_habit(client, bob, title="Bob's habit")
    seed_entries(db, first["id"], -1)

    resp = client.get("/api/v1/habits", headers=alice)
    assert resp.status_code == 200
    habits = resp.json()
    assert [h["id"] for h in habits] == [first["id"], second["id"]]
    assert habits[0]["color"] == "#10B981"
    # yesterday's entry is not part of today's listing
    assert habits[0]["entries"] == []


def test_toggle_creates_then_flips_single_entry(client, db, auth_headers):
    habit = create_habit(client, auth_headers)
    url = f"/api/v1/habits/{habit['id']}/toggle"

    first = client.post(url, headers=auth_headers).json()
    assert first["completed"] is True
    assert first["date"] == today().isoformat()

    second = client.post(url, headers=auth_headers).json()
    assert second["id"] == first["id"]
    assert second["completed"] is False

    third = client.post(url, headers=auth_headers).json()
    assert third["completed"] is True
    assert db.query(HabitEntry).filter_by(habit_id=habit["id"]).count() == 1

    listed = client.get("/api/v1/habits", headers=auth_headers).json()
    assert listed[0]["entries"][0]["completed"] is True


def test_toggle_other_users_habit_is_not_found(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    habit = create_habit(client, alice)
    resp = client.post(f"/api/v1/habits/{habit['id']}/toggle", headers=bob)
    assert resp.status_code == 404
    assert client.post("/api/v1/habits/9999/toggle", headers=alice).status_code == 404


def test_retire_hides_habit(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    habit = create_habit(client, alice)

    assert client.delete(f"/api/v1/habits/{habit['id']}", headers=bob).status_code == 404

    resp = client.delete(f"/api/v1/habits/{habit['id']}", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["data"]["is_active"] is False
    assert client.get("/api/v1/habits", headers=alice).json() == []
    assert client.get("/api/v1/habits/progress", headers=alice).json()["total_habits"] == 0


def test_progress_summary(client, db, auth_headers):
    punctual = create_habit(client, auth_headers, title="Arrive on time")
    create_habit(client, auth_headers, title="Prepare clothes")
    seed_entries(db, punctual["id"], -1, -2, -5)
    client.post(f"/api/v1/habits/{punctual['id']}/toggle", headers=auth_headers)

    resp = client.get("/api/v1/habits/progress", headers=auth_headers)
    assert resp.status_code == 200
    progress = resp.json()
    assert progress["date"] == today().isoformat()
    assert progress["total_habits"] == 2
    assert progress["completed_habits"] == 1
    assert progress["completion_rate"] == 50
    assert progress["window_days"] == 7
    # 4 completed (habit, day) pairs out of 2 habits x 7 days
    assert progress["window_rate"] == 29

    first, second = progress["habits"]
    assert first["completed_today"] is True
    assert first["streak"] == 3
    assert first["best_streak"] == 3
    assert first["window_rate"] == 57
    assert second["streak"] == 0
    assert second["window_rate"] == 0


def test_progress_keeps_yesterdays_streak_while_today_is_open(client, db, auth_headers):
    habit = create_habit(client, auth_headers)
    seed_entries(db, habit["id"], -1, -2)
    progress = client.get("/api/v1/habits/progress", headers=auth_headers).json()
    assert progress["completed_habits"] == 0
    assert progress["habits"][0]["streak"] == 2


def test_progress_window_validation(client, auth_headers):
    assert client.get("/api/v1/habits/progress?window_days=0", headers=auth_headers).status_code == 422
    resp = client.get("/api/v1/habits/progress?window_days=30", headers=auth_headers)
    assert resp.json()["window_rate"] == 0


def test_history(client, db, auth_headers):
    habit = create_habit(client, auth_headers)
    seed_entries(db, habit["id"], -1, -40)
    seed_entries(db, habit["id"], -3, completed=False)

    resp = client.get(f"/api/v1/habits/{habit['id']}/history", headers=auth_headers)
    assert resp.status_code == 200
    history = resp.json()
    assert [h["date"] for h in history] == [
        (today() - timedelta(days=3)).isoformat(),
        (today() - timedelta(days=1)).isoformat(),
    ]
    assert [h["completed"] for h in history] == [False, True]
