"""Read-side collaborators the services are built with.

Each store wraps the SQLAlchemy session it is given; the session (and so the
store's lifetime) belongs to whoever constructs it, normally one request.
"""
from sqlalchemy import select

from app.models import Gym, User
from app.models.enums import GymStatus


class UserStore:
    def __init__(self, session):
        self.session = session

    def find_by_id(self, user_id):
        if user_id is None:
            return None
        return self.session.get(User, user_id)

    def find_by_email(self, email):
        return self.session.execute(
            select(User).filter_by(email=email.strip().lower())
        ).scalar_one_or_none()

    @staticmethod
    def has_role(user, *roles):
        return user is not None and user.role in roles


class GymRegistry:
    def __init__(self, session):
        self.session = session

    def find_by_id(self, gym_id):
        if gym_id is None:
            return None
        return self.session.get(Gym, gym_id)

    @staticmethod
    def is_approved(gym):
        return gym is not None and gym.status == GymStatus.APPROVED
