import json

from models.personality_result import PersonalityTestResult


def test_health_check(client):
    assert client.get("/api/v1/health-check").json()["status"] == "ok"


def test_signup_validation(client):
    resp = client.post("/api/v1/auth/signup", json={"username": "alice"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Password is required"

    resp = client.post("/api/v1/auth/signup", json={"password": "pw"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Either email or username is required"


def test_signup_rejects_duplicates(client):
    body = {"email": "Alice@Example.com", "password": "pw"}
    resp = client.post("/api/v1/auth/signup", json=body)
    assert resp.status_code == 201
    assert resp.json()["message"] == "User created successfully"

    resp = client.post("/api/v1/auth/signup", json={"email": "alice@example.com", "password": "other"})
    assert resp.status_code == 400


def test_login_with_email_and_me(client):
    client.post("/api/v1/auth/signup", json={"email": "sam@example.com", "password": "pw", "name": "Sam"})

    resp = client.post("/api/v1/auth/login", json={"email": "sam@example.com", "password": "wrong"})
    assert resp.status_code == 401

    resp = client.post("/api/v1/auth/login", json={"email": "sam@example.com", "password": "pw"})
    assert resp.status_code == 200
    token = resp.json()["data"]["token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}).json()["data"]
    assert me["email"] == "sam@example.com"
    assert me["name"] == "Sam"
    assert me["personality_type"] is None


def test_login_unknown_user(client):
    resp = client.post("/api/v1/auth/login", json={"username": "ghost", "password": "pw"})
    assert resp.status_code == 401


def test_logout_revokes_token(client, auth_headers):
    assert client.get("/api/v1/auth/me", headers=auth_headers).status_code == 200
    assert client.post("/api/v1/auth/logout", headers=auth_headers).status_code == 200
    resp = client.get("/api/v1/auth/me", headers=auth_headers)
    assert resp.status_code == 401


def test_personality_test_result(client, db, auth_headers):
    answers = {"lateness_reaction": "accept", "time_estimation": "hope"}
    resp = client.post("/api/v1/auth/personality-test",
                       json={"personality": "procrastinator", "answers": answers}, headers=auth_headers)
    assert resp.status_code == 200

    me = client.get("/api/v1/auth/me", headers=auth_headers).json()["data"]
    assert me["personality_type"] == "procrastinator"
    result = db.query(PersonalityTestResult).one()
    assert json.loads(result.answers) == answers


def test_personality_test_rejects_unknown_type(client, auth_headers):
    resp = client.post("/api/v1/auth/personality-test", json={"personality": "punctual"}, headers=auth_headers)
    assert resp.status_code == 400
    assert client.post("/api/v1/auth/personality-test", json={"personality": "anxious"}).status_code == 401
