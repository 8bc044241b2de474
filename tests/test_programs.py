import pytest


def test_end_to_end_program_tree(client, api, trainer_headers):
    pid = api.create_program(trainer_headers, "Strength")
    did = api.create_day(trainer_headers, pid, 1)
    eid = api.create_exercise(trainer_headers, pid, did, "Squat")
    api.create_set(trainer_headers, pid, did, eid, reps=5, weight=100)

    resp = client.get(f"/programs/{pid}", headers=trainer_headers)
    assert resp.status_code == 200
    program = resp.get_json()["program"]

    assert program["programName"] == "Strength"
    assert len(program["trainingDays"]) == 1
    day = program["trainingDays"][0]
    assert day["dayNumber"] == 1
    assert len(day["exercises"]) == 1
    exercise = day["exercises"][0]
    assert exercise["name"] == "Squat"
    assert len(exercise["sets"]) == 1
    assert exercise["sets"][0]["reps"] == 5
    assert exercise["sets"][0]["weight"] == 100.0


def test_create_program_sets_owner(client, trainer):
    user, headers = trainer
    resp = client.post("/programs", json={"programName": "Hypertrophy"}, headers=headers)
    assert resp.status_code == 201
    program = resp.get_json()["program"]
    assert program["trainerId"] == user["id"]
    assert program["trainingDays"] == []
    assert program["assignedUsers"] == []


def test_program_name_length_limit(client, trainer_headers):
    resp = client.post("/programs", json={"programName": "p" * 256}, headers=trainer_headers)
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == [
        {"field": "programName", "message": "programName must be at most 255 characters"}
    ]


@pytest.mark.parametrize("payload", [{}, {"programName": ""}, {"programName": "   "}, {"programName": 3}])
def test_create_program_requires_name(client, trainer_headers, payload):
    resp = client.post("/programs", json=payload, headers=trainer_headers)
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "programName"


def test_list_programs_only_own_in_creation_order(client, api, trainer_headers, other_trainer_headers):
    first = api.create_program(trainer_headers, "B")
    api.create_program(other_trainer_headers, "Other")
    second = api.create_program(trainer_headers, "A")

    resp = client.get("/programs", headers=trainer_headers)
    assert resp.status_code == 200
    assert [p["id"] for p in resp.get_json()["programs"]] == [first, second]


def test_update_program_partial(client, api, trainer_headers):
    pid = api.create_program(trainer_headers, "Old")

    resp = client.put(f"/programs/{pid}", json={}, headers=trainer_headers)
    assert resp.status_code == 200
    assert resp.get_json()["program"]["programName"] == "Old"

    resp = client.put(f"/programs/{pid}", json={"programName": "New"}, headers=trainer_headers)
    assert resp.status_code == 200
    assert resp.get_json()["program"]["programName"] == "New"

    resp = client.put(f"/programs/{pid}", json={"programName": ""}, headers=trainer_headers)
    assert resp.status_code == 400


def test_get_missing_program(client, trainer_headers):
    resp = client.get("/programs/999", headers=trainer_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Program not found"}


class TestOwnershipIsolation:
    """A second trainer can neither read nor change another trainer's tree."""

    @pytest.fixture
    def tree(self, api, trainer_headers):
        return api.build_tree(trainer_headers)

    def test_other_trainer_forbidden_everywhere(self, client, api, tree, other_trainer_headers):
        pid, did, eid, sid = tree
        h = other_trainer_headers
        calls = [
            client.get(api.program_url(pid), headers=h),
            client.put(api.program_url(pid), json={"programName": "x"}, headers=h),
            client.delete(api.program_url(pid), headers=h),
            client.post(api.day_url(pid), json={"dayNumber": 2}, headers=h),
            client.get(api.day_url(pid), headers=h),
            client.put(api.day_url(pid, did), json={"dayNumber": 3}, headers=h),
            client.delete(api.day_url(pid, did), headers=h),
            client.post(api.exercise_url(pid, did), json={"name": "Bench"}, headers=h),
            client.put(api.exercise_url(pid, did, eid), json={"name": "Bench"}, headers=h),
            client.delete(api.exercise_url(pid, did, eid), headers=h),
            client.post(api.set_url(pid, did, eid), json={"reps": 1, "weight": 1}, headers=h),
            client.get(api.set_url(pid, did, eid, sid), headers=h),
            client.put(api.set_url(pid, did, eid, sid), json={"reps": 2}, headers=h),
            client.delete(api.set_url(pid, did, eid, sid), headers=h),
        ]
        for resp in calls:
            assert resp.status_code == 403
            assert resp.get_json() == {"error": "Access denied"}

    def test_tree_unchanged_after_forbidden_calls(self, client, api, tree, trainer_headers, other_trainer_headers):
        pid, did, eid, sid = tree
        client.delete(api.program_url(pid), headers=other_trainer_headers)
        client.delete(api.set_url(pid, did, eid, sid), headers=other_trainer_headers)

        resp = client.get(api.set_url(pid, did, eid, sid), headers=trainer_headers)
        assert resp.status_code == 200

    def test_user_role_forbidden_on_trainer_routes(self, client, api, tree, trainee):
        pid, did, eid, sid = tree
        _, h = trainee
        calls = [
            client.post("/programs", json={"programName": "Mine"}, headers=h),
            client.get("/programs", headers=h),
            client.get(api.program_url(pid), headers=h),
            client.post(f"/programs/{pid}/assign", json={"userId": 1}, headers=h),
            client.post(api.day_url(pid), json={"dayNumber": 2}, headers=h),
            client.get(api.exercise_url(pid, did, eid), headers=h),
            client.delete(api.set_url(pid, did, eid, sid), headers=h),
        ]
        for resp in calls:
            assert resp.status_code == 403
