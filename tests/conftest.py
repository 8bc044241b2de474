"""
Pytest fixtures.

Every test gets a fresh app on an in-memory SQLite database, a test client,
and helpers that register + log in accounts and build program trees over
the HTTP API.
"""
import pytest

from config import TestingConfig
from fitcoach import create_app, db

PASSWORD = "secret1"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_account(client):
    """Register + log in; returns ``(user_dict, auth_headers)``."""

    def _make(email, role="user", password=PASSWORD):
        resp = client.post(
            "/auth/register", json={"email": email, "password": password, "role": role}
        )
        assert resp.status_code == 201, resp.get_json()
        user = resp.get_json()["user"]

        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        token = resp.get_json()["token"]
        return user, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def trainer(make_account):
    return make_account("t@x.com", "trainer")


@pytest.fixture
def trainer_headers(trainer):
    return trainer[1]


@pytest.fixture
def other_trainer_headers(make_account):
    return make_account("t2@x.com", "trainer")[1]


@pytest.fixture
def trainee(make_account):
    return make_account("u@x.com", "user")


@pytest.fixture
def api(client):
    """Small wrapper that builds URLs for the nested program tree."""

    class Api:
        def program_url(self, pid):
            return f"/programs/{pid}"

        def day_url(self, pid, did=None):
            base = f"/programs/{pid}/trainingDays"
            return base if did is None else f"{base}/{did}"

        def exercise_url(self, pid, did, eid=None):
            base = f"{self.day_url(pid, did)}/exercises"
            return base if eid is None else f"{base}/{eid}"

        def set_url(self, pid, did, eid, sid=None):
            base = f"{self.exercise_url(pid, did, eid)}/sets"
            return base if sid is None else f"{base}/{sid}"

        def create_program(self, headers, name="Strength"):
            resp = client.post("/programs", json={"programName": name}, headers=headers)
            assert resp.status_code == 201, resp.get_json()
            return resp.get_json()["program"]["id"]

        def create_day(self, headers, pid, day_number=1):
            resp = client.post(self.day_url(pid), json={"dayNumber": day_number}, headers=headers)
            assert resp.status_code == 201, resp.get_json()
            return resp.get_json()["trainingDay"]["id"]

        def create_exercise(self, headers, pid, did, name="Squat"):
            resp = client.post(self.exercise_url(pid, did), json={"name": name}, headers=headers)
            assert resp.status_code == 201, resp.get_json()
            return resp.get_json()["exercise"]["id"]

        def create_set(self, headers, pid, did, eid, reps=5, weight=100):
            resp = client.post(
                self.set_url(pid, did, eid), json={"reps": reps, "weight": weight}, headers=headers
            )
            assert resp.status_code == 201, resp.get_json()
            return resp.get_json()["set"]["id"]

        def build_tree(self, headers, name="Strength"):
            pid = self.create_program(headers, name)
            did = self.create_day(headers, pid, 1)
            eid = self.create_exercise(headers, pid, did, "Squat")
            sid = self.create_set(headers, pid, did, eid, 5, 100)
            return pid, did, eid, sid

    return Api()
