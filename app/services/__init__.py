from flask import g

from app.extensions import db
from app.services.challenge_service import ChallengeService
from app.services.notification_service import NotificationService
from app.services.stores import GymRegistry, UserStore


def _per_request(name, factory):
    if name not in g:
        setattr(g, name, factory())
    return getattr(g, name)


def notification_service_for():
    return _per_request("notification_service", lambda: NotificationService(db.session))


def challenge_service_for():
    """Build the request's ChallengeService from the scoped session."""
    return _per_request("challenge_service", lambda: ChallengeService(
        db.session,
        users=UserStore(db.session),
        gyms=GymRegistry(db.session),
        notifications=notification_service_for(),
    ))
