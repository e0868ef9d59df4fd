"""Shared pytest fixtures: app on in-memory SQLite, factories, auth headers."""
from datetime import datetime, timedelta

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from app.extensions import db as _db
from app.models import Challenge, Exercise, Gym, Participation, User
from app.models.enums import (
    ChallengeDifficulty,
    ChallengeType,
    GymStatus,
    ParticipationStatus,
    UserRole,
)
from app.models.participation import empty_progress
from app.services.challenge_service import ChallengeService
from app.services.notification_service import NotificationService
from app.services.stores import GymRegistry, UserStore
from app.utils.dates import utcnow

NOW = datetime(2030, 1, 15, 12, 0, 0)
PASSWORD = "Secret123!"


class FakeClock:
    """Deterministic clock; ``advance`` moves it forward."""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(db, clock):
    return ChallengeService(
        db.session,
        users=UserStore(db.session),
        gyms=GymRegistry(db.session),
        notifications=NotificationService(db.session),
        clock=clock,
    )


# ===========================================
# FACTORIES
# ===========================================


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def factory(role=UserRole.CLIENT, **overrides):
        counter["n"] += 1
        user = User(
            email=overrides.pop("email", f"user{counter['n']}@example.com"),
            first_name=overrides.pop("first_name", "Test"),
            last_name=overrides.pop("last_name", f"User{counter['n']}"),
            role=role.value,
            **overrides,
        )
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user

    return factory


@pytest.fixture
def make_gym(db, make_user):
    def factory(status=GymStatus.APPROVED, owner=None, **overrides):
        owner = owner or make_user(UserRole.GYM_OWNER)
        fields = dict(
            name="Iron Temple",
            description="Strength gym",
            address="1 Main St",
            city="Springfield",
            phone="555-0100",
            email="gym@example.com",
            capacity=80,
            equipment=["rack", "treadmill"],
        )
        fields.update(overrides)
        gym = Gym(owner_id=owner.id, status=status.value, **fields)
        db.session.add(gym)
        db.session.commit()
        return gym

    return factory


@pytest.fixture
def make_challenge(db, make_user):
    """Inserts challenges directly, bypassing creation rules (e.g. past windows)."""

    def factory(creator=None, **overrides):
        creator = creator or make_user()
        fields = dict(
            title="30 day push",
            description="Push harder",
            type=ChallengeType.INDIVIDUAL.value,
            difficulty=ChallengeDifficulty.MEDIUM.value,
            objectives={"targetWorkouts": 4},
            start_date=NOW - timedelta(days=1),
            end_date=NOW + timedelta(days=30),
            points_reward=100,
        )
        fields.update(overrides)
        challenge = Challenge(creator_id=creator.id, **fields)
        db.session.add(challenge)
        db.session.commit()
        return challenge

    return factory


@pytest.fixture
def make_participation(db):
    def factory(challenge, user, status=ParticipationStatus.JOINED, **overrides):
        participation = Participation(
            challenge_id=challenge.id,
            user_id=user.id,
            status=status.value,
            progress=overrides.pop("progress", empty_progress()),
            joined_at=overrides.pop("joined_at", NOW),
            **overrides,
        )
        db.session.add(participation)
        db.session.commit()
        return participation

    return factory


@pytest.fixture
def make_exercise(db, make_user):
    def factory(name="Push-up", **overrides):
        fields = dict(
            description="Classic push-up",
            muscle_groups=["chest", "triceps"],
            difficulty="beginner",
            calories_per_minute=7,
        )
        fields.update(overrides)
        exercise = Exercise(name=name, created_by_id=make_user(UserRole.SUPER_ADMIN).id, **fields)
        db.session.add(exercise)
        db.session.commit()
        return exercise

    return factory


@pytest.fixture
def auth_headers(app):
    def factory(user):
        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return factory


@pytest.fixture
def challenge_payload():
    """Valid creation payload; start is a day after ``now`` (real time by default)."""

    def factory(now=None, **overrides):
        start = (now or utcnow()) + timedelta(days=1)
        payload = {
            "title": "Summer shred",
            "description": "Burn it all",
            "type": "individual",
            "difficulty": "hard",
            "objectives": {"targetCalories": 5000, "targetWorkouts": 10},
            "startDate": start.isoformat(),
            "endDate": (start + timedelta(days=30)).isoformat(),
            "pointsReward": 250,
        }
        payload.update(overrides)
        return payload

    return factory
