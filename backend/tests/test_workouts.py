from fastapi.testclient import TestClient

from app.utils.caller import CALLER_ID_HEADER

ALICE = {CALLER_ID_HEADER: "caller-alice"}
BOB = {CALLER_ID_HEADER: "caller-bob"}


def _create_user(client: TestClient, headers: dict, name: str) -> dict:
    response = client.post("/api/users", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_start_workout(client: TestClient):
    """Starting a workout links it to the caller's user exactly once"""
    _create_user(client, ALICE, "Alice")

    response = client.post("/api/workouts", json={"group": "Legs"}, headers=ALICE)
    assert response.status_code == 201
    workout = response.json()
    assert workout["user_id"] == "caller-alice"
    assert workout["muscle_group"] == "legs"
    assert workout["finished_at"] is None
    assert workout["calories"] == 0

    user = client.get("/api/users/caller-alice").json()
    assert user["session_ids"].count(workout["id"]) == 1

    listed = client.get("/api/workouts").json()
    assert listed == [workout]


def test_start_workout_case_insensitive_group(client: TestClient):
    _create_user(client, ALICE, "Alice")

    response = client.post("/api/workouts", json={"group": "LEGS"}, headers=ALICE)
    assert response.status_code == 201
    assert response.json()["muscle_group"] == "legs"


def test_start_workout_unknown_group(client: TestClient):
    _create_user(client, ALICE, "Alice")

    response = client.post("/api/workouts", json={"group": "yoga"}, headers=ALICE)
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["kind"] == "MuscleGroupDoesNotExist"
    assert detail["value"] == "yoga"
    assert set(detail["recognized"]) == {"shoulders", "back", "chest", "legs", "cardio"}

    assert client.get("/api/workouts").json() == []


def test_start_workout_blank_group(client: TestClient):
    _create_user(client, ALICE, "Alice")

    response = client.post("/api/workouts", json={"group": "  "}, headers=ALICE)
    assert response.status_code == 422
    assert response.json()["detail"] == {
        "kind": "InvalidPayload",
        "field": "group",
        "message": "Invalid value for 'group'",
    }


def test_start_workout_without_user(client: TestClient):
    response = client.post("/api/workouts", json={"group": "legs"}, headers=BOB)
    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "UserDoesNotExist"


def test_start_workout_requires_caller_identity(client: TestClient):
    response = client.post("/api/workouts", json={"group": "legs"})
    assert response.status_code == 401


def test_end_workout_by_owner(client: TestClient):
    _create_user(client, ALICE, "Alice")
    workout = client.post("/api/workouts", json={"group": "chest"}, headers=ALICE).json()

    response = client.post(f"/api/workouts/{workout['id']}/end", json={"calories": 250}, headers=ALICE)
    assert response.status_code == 200
    ended = response.json()
    assert ended["calories"] == 250
    assert ended["finished_at"] is not None
    assert ended["started_at"] == workout["started_at"]

    assert client.get(f"/api/workouts/{workout['id']}").json() == ended


def test_end_workout_by_other_caller(client: TestClient):
    """Only the caller that started a workout may complete it"""
    _create_user(client, ALICE, "Alice")
    _create_user(client, BOB, "Bob")
    workout = client.post("/api/workouts", json={"group": "chest"}, headers=ALICE).json()

    response = client.post(f"/api/workouts/{workout['id']}/end", json={"calories": 250}, headers=BOB)
    assert response.status_code == 403
    detail = response.json()["detail"]
    assert detail["kind"] == "AuthenticationFail"
    assert detail["caller_id"] == "caller-bob"

    assert client.get(f"/api/workouts/{workout['id']}").json()["finished_at"] is None


def test_end_workout_twice(client: TestClient):
    """A completed workout stays completed with its first calorie count"""
    _create_user(client, ALICE, "Alice")
    workout = client.post("/api/workouts", json={"group": "cardio"}, headers=ALICE).json()
    url = f"/api/workouts/{workout['id']}/end"

    first = client.post(url, json={"calories": 400}, headers=ALICE)
    assert first.status_code == 200

    second = client.post(url, json={"calories": 10}, headers=ALICE)
    assert second.status_code == 409
    assert second.json()["detail"]["kind"] == "WorkoutAlreadyCompleted"

    assert client.get(f"/api/workouts/{workout['id']}").json() == first.json()


def test_end_workout_invalid_calories(client: TestClient):
    _create_user(client, ALICE, "Alice")
    workout = client.post("/api/workouts", json={"group": "back"}, headers=ALICE).json()

    response = client.post(f"/api/workouts/{workout['id']}/end", json={"calories": 0}, headers=ALICE)
    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "calories"


def test_end_missing_workout(client: TestClient):
    _create_user(client, ALICE, "Alice")

    response = client.post("/api/workouts/missing/end", json={"calories": 100}, headers=ALICE)
    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "WorkoutDoesNotExist"


def test_list_muscle_groups(client: TestClient):
    response = client.get("/api/muscle-groups")
    assert response.status_code == 200
    assert response.json() == ["back", "cardio", "chest", "legs", "shoulders"]


def test_health(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_full_lifecycle(client: TestClient):
    """Create Alice, start chest, end with 250 kcal, delete: ledger is empty"""
    _create_user(client, ALICE, "Alice")
    workout = client.post("/api/workouts", json={"group": "chest"}, headers=ALICE).json()
    ended = client.post(f"/api/workouts/{workout['id']}/end", json={"calories": 250}, headers=ALICE)
    assert ended.status_code == 200

    deleted = client.delete("/api/users/me", headers=ALICE)
    assert deleted.status_code == 200
    assert deleted.json()["session_ids"] == [workout["id"]]

    assert client.get("/api/workouts").json() == []
    assert client.get("/api/users").json() == []


def test_end_workout_calories_out_of_range(client: TestClient):
    """Calories too large for the store are an invalid payload, not a server error"""
    _create_user(client, ALICE, "Alice")
    workout = client.post("/api/workouts", json={"group": "legs"}, headers=ALICE).json()

    response = client.post(f"/api/workouts/{workout['id']}/end", json={"calories": 2**63}, headers=ALICE)
    assert response.status_code == 422
    assert response.json()["detail"] == {
        "kind": "InvalidPayload",
        "field": "calories",
        "message": "Invalid value for 'calories'",
    }

    assert client.get(f"/api/workouts/{workout['id']}").json()["finished_at"] is None


def test_workout_timestamps_serialize_with_utc_offset(client: TestClient):
    _create_user(client, ALICE, "Alice")
    workout = client.post("/api/workouts", json={"group": "chest"}, headers=ALICE).json()
    client.post(f"/api/workouts/{workout['id']}/end", json={"calories": 200}, headers=ALICE)

    stored = client.get(f"/api/workouts/{workout['id']}").json()
    for field in ("started_at", "finished_at"):
        value = stored[field]
        assert value.endswith("Z") or value.endswith("+00:00"), value
