"""Tests for the challenge lifecycle: creation, join/leave and listing."""
from datetime import timedelta

import pytest

from app.errors import ConflictError, ErrorKind, NotFoundError, ValidationError
from app.models import Participation
from app.models.enums import ChallengeStatus, GymStatus, ParticipationStatus


class TestCreateChallenge:
    def test_valid_challenge_defaults_to_public(self, service, clock, make_user, challenge_payload):
        creator = make_user()
        challenge = service.create_challenge(challenge_payload(now=clock.now), creator.id)

        assert challenge.id is not None
        assert challenge.is_public is True
        assert challenge.status == ChallengeStatus.ACTIVE
        assert challenge.creator_id == creator.id
        assert challenge.objectives == {"targetCalories": 5000, "targetWorkouts": 10}

    def test_explicit_private_flag_is_kept(self, service, clock, make_user, challenge_payload):
        challenge = service.create_challenge(challenge_payload(now=clock.now, isPublic=False), make_user().id)
        assert challenge.is_public is False

    @pytest.mark.parametrize("delta", [timedelta(0), timedelta(hours=-1)])
    def test_end_not_after_start_is_rejected(self, service, clock, make_user, make_gym, challenge_payload, delta):
        start = clock.now + timedelta(days=2)
        # an unapproved gym does not change the outcome
        gym = make_gym(status=GymStatus.PENDING)
        payload = challenge_payload(
            now=clock.now,
            startDate=start.isoformat(),
            endDate=(start + delta).isoformat(),
            gymId=gym.id,
        )
        with pytest.raises(ValidationError):
            service.create_challenge(payload, make_user().id)

    def test_start_in_the_past_is_rejected(self, service, clock, make_user, challenge_payload):
        payload = challenge_payload(now=clock.now - timedelta(days=2))
        with pytest.raises(ValidationError, match="past"):
            service.create_challenge(payload, make_user().id)

    def test_timezone_aware_dates_are_normalised(self, service, clock, make_user, challenge_payload):
        start = clock.now + timedelta(days=1)
        payload = challenge_payload(
            now=clock.now,
            startDate=start.isoformat() + "+00:00",
            endDate=(start + timedelta(days=7)).isoformat() + "+02:00",
        )
        challenge = service.create_challenge(payload, make_user().id)
        assert challenge.start_date == start
        assert challenge.start_date.tzinfo is None

    @pytest.mark.parametrize("missing", [
        "title", "description", "type", "difficulty", "objectives", "startDate", "endDate", "pointsReward",
    ])
    def test_required_fields(self, service, clock, make_user, challenge_payload, missing):
        payload = challenge_payload(now=clock.now)
        del payload[missing]
        with pytest.raises(ValidationError, match="Missing required fields"):
            service.create_challenge(payload, make_user().id)

    @pytest.mark.parametrize("overrides", [
        {"type": "solo"},
        {"difficulty": "insane"},
        {"pointsReward": -1},
        {"maxParticipants": 0},
        {"objectives": ["targetWorkouts"]},
        {"objectives": 5},
        {"objectives": None},
        {"startDate": "not a date"},
    ])
    def test_invalid_fields(self, service, clock, make_user, challenge_payload, overrides):
        with pytest.raises(ValidationError) as excinfo:
            service.create_challenge(challenge_payload(now=clock.now, **overrides), make_user().id)
        assert excinfo.value.kind is ErrorKind.VALIDATION

    def test_zero_points_reward_is_allowed(self, service, clock, make_user, challenge_payload):
        challenge = service.create_challenge(challenge_payload(now=clock.now, pointsReward=0), make_user().id)
        assert challenge.points_reward == 0

    def test_unknown_creator(self, service, clock, challenge_payload):
        with pytest.raises(NotFoundError, match="Creator not found"):
            service.create_challenge(challenge_payload(now=clock.now), 999)

    def test_unknown_gym(self, service, clock, make_user, challenge_payload):
        with pytest.raises(NotFoundError, match="Gym not found"):
            service.create_challenge(challenge_payload(now=clock.now, gymId=999), make_user().id)

    @pytest.mark.parametrize("status", [GymStatus.PENDING, GymStatus.REJECTED])
    def test_gym_must_be_approved(self, service, clock, make_user, make_gym, challenge_payload, status):
        gym = make_gym(status=status)
        with pytest.raises(ConflictError) as excinfo:
            service.create_challenge(challenge_payload(now=clock.now, gymId=gym.id), make_user().id)
        assert excinfo.value.reason == "gym_not_approved"
        assert excinfo.value.message == "Gym must be approved to create challenges"

    def test_approved_gym_and_recommended_exercises(
        self, service, clock, make_user, make_gym, make_exercise, challenge_payload,
    ):
        gym = make_gym()
        squat = make_exercise("Squat")
        plank = make_exercise("Plank")
        challenge = service.create_challenge(
            challenge_payload(now=clock.now, gymId=gym.id, exerciseIds=[plank.id, squat.id]),
            make_user().id,
        )
        fetched = service.get_challenge_by_id(challenge.id)
        assert fetched.gym.id == gym.id
        assert sorted(e.name for e in fetched.recommended_exercises) == ["Plank", "Squat"]

    def test_unknown_exercise_is_rejected(self, service, clock, make_user, challenge_payload):
        with pytest.raises(NotFoundError, match="Exercise not found"):
            service.create_challenge(challenge_payload(now=clock.now, exerciseIds=[42]), make_user().id)


class TestListAndGet:
    def test_lists_only_active_newest_first(self, service, clock, make_challenge):
        older = make_challenge(title="older", created_at=clock.now - timedelta(days=2))
        newer = make_challenge(title="newer", created_at=clock.now - timedelta(days=1))
        make_challenge(title="done", status=ChallengeStatus.COMPLETED.value)

        assert [c.id for c in service.list_challenges()] == [newer.id, older.id]

    def test_filters(self, service, make_challenge, make_gym):
        gym = make_gym()
        team = make_challenge(type="team", gym_id=gym.id)
        make_challenge(type="individual", difficulty="easy", is_public=False)

        assert [c.id for c in service.list_challenges({"type": "team"})] == [team.id]
        assert [c.id for c in service.list_challenges({"gym_id": gym.id})] == [team.id]
        assert len(service.list_challenges({"difficulty": "easy"})) == 1
        assert len(service.list_challenges({"is_public": False})) == 1
        assert len(service.list_challenges({"is_public": True})) == 1

    def test_get_missing_challenge(self, service):
        with pytest.raises(NotFoundError, match="Challenge not found"):
            service.get_challenge_by_id(12345)


class TestJoinChallenge:
    def test_join_creates_zeroed_participation(self, service, clock, make_user, make_challenge):
        user = make_user()
        challenge = make_challenge()

        participation = service.join_challenge(challenge.id, user.id)

        assert participation.status == ParticipationStatus.JOINED
        assert participation.points_earned == 0
        assert participation.joined_at == clock.now
        assert participation.completed_at is None
        assert participation.progress == {
            "currentWorkouts": 0,
            "currentCalories": 0,
            "currentDuration": 0,
            "completionPercentage": 0,
        }

    def test_missing_challenge_or_user(self, service, make_user, make_challenge):
        with pytest.raises(NotFoundError, match="Challenge not found"):
            service.join_challenge(999, make_user().id)
        with pytest.raises(NotFoundError, match="User not found"):
            service.join_challenge(make_challenge().id, 999)

    @pytest.mark.parametrize("status", [
        ParticipationStatus.JOINED, ParticipationStatus.IN_PROGRESS, ParticipationStatus.COMPLETED,
    ])
    def test_already_participating(self, service, make_user, make_challenge, make_participation, status):
        user = make_user()
        challenge = make_challenge()
        make_participation(challenge, user, status=status)

        with pytest.raises(ConflictError, match="already participating") as excinfo:
            service.join_challenge(challenge.id, user.id)
        assert excinfo.value.reason == "already_participating"

    def test_joining_twice_fails(self, service, make_user, make_challenge):
        user = make_user()
        challenge = make_challenge()
        service.join_challenge(challenge.id, user.id)
        with pytest.raises(ConflictError, match="already participating"):
            service.join_challenge(challenge.id, user.id)

    def test_capacity_reached(self, db, service, make_user, make_challenge):
        challenge = make_challenge(max_participants=1)
        service.join_challenge(challenge.id, make_user().id)

        with pytest.raises(ConflictError, match="maximum participants") as excinfo:
            service.join_challenge(challenge.id, make_user().id)

        assert excinfo.value.reason == "max_participants"
        assert db.session.query(Participation).filter_by(challenge_id=challenge.id).count() == 1
        assert service.count_active(challenge.id) == 1

    def test_in_progress_participants_keep_their_seat(self, service, make_user, make_challenge):
        challenge = make_challenge(max_participants=1, objectives={"targetWorkouts": 4})
        first = service.join_challenge(challenge.id, make_user().id)
        service.record_progress(first.id, {"calories": 100, "duration": 20})
        assert first.status == ParticipationStatus.IN_PROGRESS

        with pytest.raises(ConflictError) as excinfo:
            service.join_challenge(challenge.id, make_user().id)

        assert excinfo.value.reason == "max_participants"
        assert service.count_active(challenge.id) == 1

    def test_abandoned_rows_do_not_count_towards_capacity(
        self, service, make_user, make_challenge, make_participation,
    ):
        challenge = make_challenge(max_participants=1)
        make_participation(challenge, make_user(), status=ParticipationStatus.ABANDONED)
        participation = service.join_challenge(challenge.id, make_user().id)
        assert participation.status == ParticipationStatus.JOINED

    def test_ended_challenge(self, service, clock, make_user, make_challenge):
        challenge = make_challenge(
            start_date=clock.now - timedelta(days=10),
            end_date=clock.now - timedelta(days=1),
        )
        with pytest.raises(ConflictError, match="already ended") as excinfo:
            service.join_challenge(challenge.id, make_user().id)
        assert excinfo.value.reason == "challenge_ended"

    def test_future_challenge_allows_preregistration(self, service, clock, make_user, make_challenge):
        challenge = make_challenge(
            start_date=clock.now + timedelta(days=5),
            end_date=clock.now + timedelta(days=10),
        )
        assert service.join_challenge(challenge.id, make_user().id).status == ParticipationStatus.JOINED

    def test_leave_then_rejoin_reuses_the_row(self, db, service, clock, make_user, make_challenge):
        user = make_user()
        challenge = make_challenge()
        first = service.join_challenge(challenge.id, user.id)
        first_id, first_joined_at = first.id, first.joined_at

        service.leave_challenge(challenge.id, user.id)
        assert first.status == ParticipationStatus.ABANDONED

        clock.advance(hours=3)
        again = service.join_challenge(challenge.id, user.id)

        assert again.id == first_id
        assert again.status == ParticipationStatus.JOINED
        assert again.joined_at > first_joined_at
        rows = db.session.query(Participation).filter_by(challenge_id=challenge.id, user_id=user.id).all()
        assert len(rows) == 1

    def test_concurrent_duplicate_insert_becomes_conflict(
        self, db, service, monkeypatch, make_user, make_challenge,
    ):
        user = make_user()
        challenge = make_challenge()
        service.join_challenge(challenge.id, user.id)

        # simulate a second request that passed the existence check before the first committed
        monkeypatch.setattr(service, "_find_participation", lambda *args: None)
        with pytest.raises(ConflictError) as excinfo:
            service.join_challenge(challenge.id, user.id)

        assert excinfo.value.reason == "already_participating"
        assert db.session.query(Participation).filter_by(challenge_id=challenge.id).count() == 1


class TestLeaveChallenge:
    def test_not_participating(self, service, make_user, make_challenge):
        with pytest.raises(NotFoundError, match="not participating"):
            service.leave_challenge(make_challenge().id, make_user().id)

    def test_completed_participation_cannot_be_left(
        self, db, service, clock, make_user, make_challenge, make_participation,
    ):
        user = make_user()
        challenge = make_challenge()
        participation = make_participation(
            challenge, user, status=ParticipationStatus.COMPLETED, completed_at=clock.now, points_earned=100,
        )

        with pytest.raises(ConflictError, match="completed challenge") as excinfo:
            service.leave_challenge(challenge.id, user.id)

        assert excinfo.value.reason == "challenge_completed"
        db.session.refresh(participation)
        assert participation.status == ParticipationStatus.COMPLETED
        assert participation.points_earned == 100

    @pytest.mark.parametrize("status", [ParticipationStatus.JOINED, ParticipationStatus.IN_PROGRESS])
    def test_active_participation_is_abandoned(
        self, db, service, make_user, make_challenge, make_participation, status,
    ):
        user = make_user()
        challenge = make_challenge()
        participation = make_participation(challenge, user, status=status)

        service.leave_challenge(challenge.id, user.id)

        db.session.refresh(participation)
        assert participation.status == ParticipationStatus.ABANDONED


class TestParticipationQueries:
    def test_user_participations_newest_first_including_history(
        self, service, clock, make_user, make_challenge, make_participation,
    ):
        user = make_user()
        first = make_participation(make_challenge(), user, joined_at=clock.now - timedelta(days=3))
        second = make_participation(
            make_challenge(), user, status=ParticipationStatus.ABANDONED, joined_at=clock.now - timedelta(days=1),
        )

        result = service.get_user_participations(user.id)

        assert [p.id for p in result] == [second.id, first.id]
        assert result[0].challenge is not None

    def test_challenge_participants_oldest_first(
        self, service, clock, make_user, make_challenge, make_participation,
    ):
        challenge = make_challenge()
        late = make_participation(challenge, make_user(), joined_at=clock.now)
        early = make_participation(
            challenge, make_user(), status=ParticipationStatus.COMPLETED, joined_at=clock.now - timedelta(days=2),
        )

        assert [p.id for p in service.get_challenge_participants(challenge.id)] == [early.id, late.id]

    def test_unknown_challenge_has_no_participants(self, service):
        assert service.get_challenge_participants(404) == []
