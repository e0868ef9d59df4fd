"""/api/workouts and the workout -> challenge progress path."""
from app.models import PointsLog, Workout


def workout(**overrides):
    payload = {"name": "Morning run", "difficulty": "medium", "duration": 40, "caloriesBurned": 350}
    payload.update(overrides)
    return payload


class TestLogWorkout:
    def test_standalone(self, client, make_user, auth_headers):
        user = make_user()
        response = client.post("/api/workouts", json=workout(), headers=auth_headers(user))

        assert response.status_code == 201
        data = response.get_json()["data"]
        assert data["userId"] == user.id
        assert data["participationId"] is None
        assert "participation" not in data

    def test_feeds_participation_until_completed(
        self, db, client, make_user, make_challenge, make_participation, auth_headers,
    ):
        user = make_user()
        challenge = make_challenge(objectives={"targetWorkouts": 2}, points_reward=80)
        participation = make_participation(challenge, user)
        headers = auth_headers(user)

        first = client.post("/api/workouts", json=workout(participationId=participation.id), headers=headers)
        assert first.get_json()["data"]["participation"]["status"] == "in_progress"

        second = client.post("/api/workouts", json=workout(participationId=participation.id), headers=headers)
        progress = second.get_json()["data"]["participation"]
        assert progress["status"] == "completed"
        assert progress["pointsEarned"] == 80
        assert progress["progress"]["currentCalories"] == 700

        stats = client.get(f"/api/users/{user.id}/stats", headers=headers).get_json()["data"]
        assert stats["totalPoints"] == 80
        assert db.session.query(PointsLog).count() == 1

    def test_rejected_progress_does_not_store_workout(
        self, db, client, make_user, make_challenge, make_participation, auth_headers,
    ):
        participation = make_participation(make_challenge(), make_user())
        response = client.post(
            "/api/workouts", json=workout(participationId=participation.id), headers=auth_headers(make_user()),
        )
        assert response.status_code == 403
        assert db.session.query(Workout).count() == 0

    def test_invalid_payload(self, client, make_user, auth_headers):
        response = client.post("/api/workouts", json=workout(duration=-1), headers=auth_headers(make_user()))
        assert response.status_code == 400


def test_list_own_workouts(client, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user)
    client.post("/api/workouts", json=workout(), headers=headers)
    client.post("/api/workouts", json=workout(name="Evening swim"), headers=headers)
    client.post("/api/workouts", json=workout(), headers=auth_headers(make_user()))

    data = client.get("/api/workouts", headers=headers).get_json()["data"]
    assert data["count"] == 2
    assert {w["name"] for w in data["workouts"]} == {"Morning run", "Evening swim"}
