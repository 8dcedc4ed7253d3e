import pytest
from app import create_app
from extensions import db

@pytest.fixture()
def app():
    app = create_app("test")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()

def _login(client, passcode, name="Alice"):
    return client.post("/api/v1/auth/login", json={"name": name, "passcode": passcode})

def test_protected_routes_need_session(app):
    c = app.test_client()
    for url in ("/api/v1/bookings", "/api/v1/team", "/api/v1/stats", "/api/v1/auth/me"):
        r = c.get(url)
        assert r.status_code == 401
        assert r.get_json() == {"error": "unauthorized"}

def test_team_login(app):
    c = app.test_client()
    r = _login(c, app.config["DEFAULT_TEAM_PASSCODE"], name="  Alice ")
    assert r.status_code == 200
    assert r.get_json()["session"] == {"access_level": "team", "user_name": "Alice"}
    assert c.get("/api/v1/auth/me").get_json()["access_level"] == "team"

def test_admin_login(app):
    c = app.test_client()
    r = _login(c, app.config["ADMIN_PASSCODE"], name="Boss")
    assert r.get_json()["session"]["access_level"] == "admin"
    assert c.get("/api/v1/settings").status_code == 200

def test_wrong_passcode(app):
    c = app.test_client()
    r = _login(c, "nope")
    assert r.status_code == 401
    assert r.get_json()["error"] == "invalid_passcode"
    assert c.get("/api/v1/auth/me").status_code == 401

def test_missing_credentials(app):
    c = app.test_client()
    assert _login(c, "").status_code == 400
    assert _login(c, app.config["DEFAULT_TEAM_PASSCODE"], name=" ").status_code == 400

def test_non_object_body_is_missing_credentials(app):
    c = app.test_client()
    for body in ([1], "TEAM-TEST", 42, None, {"name": 7, "passcode": ""}):
        r = c.post("/api/v1/auth/login", json=body)
        assert r.status_code == 400
        assert r.get_json()["error"] == "missing_credentials"

def test_team_cannot_use_admin_routes(app):
    c = app.test_client()
    _login(c, app.config["DEFAULT_TEAM_PASSCODE"])
    assert c.get("/api/v1/settings").status_code == 403
    assert c.put("/api/v1/settings/team-passcode", json={"passcode": "X"}).status_code == 403

def test_stored_passcode_replaces_default(app):
    admin = app.test_client()
    _login(admin, app.config["ADMIN_PASSCODE"], name="Boss")
    assert admin.put("/api/v1/settings/team-passcode", json={"passcode": "NEW-CODE"}).status_code == 200

    c = app.test_client()
    assert _login(c, app.config["DEFAULT_TEAM_PASSCODE"]).status_code == 401
    assert _login(c, "NEW-CODE").status_code == 200

def test_passcode_change_ends_team_sessions(app):
    team = app.test_client()
    _login(team, app.config["DEFAULT_TEAM_PASSCODE"])
    assert team.get("/api/v1/auth/me").status_code == 200

    admin = app.test_client()
    _login(admin, app.config["ADMIN_PASSCODE"], name="Boss")
    admin.put("/api/v1/settings/team-passcode", json={"passcode": "ROTATED"})

    assert team.get("/api/v1/auth/me").status_code == 401
    # админская сессия от командного кода не зависит
    assert admin.get("/api/v1/auth/me").status_code == 200

def test_empty_passcode_rejected(app):
    admin = app.test_client()
    _login(admin, app.config["ADMIN_PASSCODE"], name="Boss")
    r = admin.put("/api/v1/settings/team-passcode", json={"passcode": "   "})
    assert r.status_code == 400
    assert r.get_json()["error"] == "Team passcode cannot be empty"

def test_logout(app):
    c = app.test_client()
    _login(c, app.config["DEFAULT_TEAM_PASSCODE"])
    assert c.post("/api/v1/auth/logout").status_code == 200
    assert c.get("/api/v1/auth/me").status_code == 401
