import logging

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.errors import AuthorizationError, NotFoundError
from app.models import Gym
from app.models.enums import GymStatus, NotificationType, UserRole
from app.schemas import load_or_raise
from app.schemas.gym import GymInputSchema

logger = logging.getLogger(__name__)


class GymService:
    def __init__(self, session, users, gyms, notifications):
        self.session = session
        self.users = users
        self.gyms = gyms
        self.notifications = notifications

    def _get(self, gym_id):
        gym = self.gyms.find_by_id(gym_id)
        if not gym:
            raise NotFoundError("Gym", gym_id)
        return gym

    def create_gym(self, data, owner_id):
        owner = self.users.find_by_id(owner_id)
        if not self.users.has_role(owner, UserRole.GYM_OWNER):
            raise AuthorizationError("Only gym owners can create gyms")
        payload = load_or_raise(GymInputSchema(), data)

        gym = Gym(owner_id=owner.id, status=GymStatus.PENDING.value, **payload)
        self.session.add(gym)
        self.session.commit()
        logger.info("Gym %s registered by owner %s (pending approval)", gym.id, owner.id)
        return gym

    def list_approved(self):
        return self.session.execute(
            select(Gym)
            .options(selectinload(Gym.owner))
            .filter_by(status=GymStatus.APPROVED.value)
            .order_by(Gym.name.asc())
        ).scalars().all()

    def list_all(self):
        return self.session.execute(
            select(Gym).options(selectinload(Gym.owner)).order_by(Gym.created_at.desc(), Gym.id.desc())
        ).scalars().all()

    def list_by_owner(self, owner_id):
        return self.session.execute(
            select(Gym).filter_by(owner_id=owner_id).order_by(Gym.created_at.desc(), Gym.id.desc())
        ).scalars().all()

    def get_gym(self, gym_id):
        return self._get(gym_id)

    def update_gym(self, gym_id, data, actor):
        gym = self._get(gym_id)
        if gym.owner_id != actor.id and not actor.is_super_admin:
            raise AuthorizationError("Only the gym owner or super administrators can update this gym")
        payload = load_or_raise(GymInputSchema(), data, partial=True)
        for field, value in payload.items():
            setattr(gym, field, value)
        self.session.commit()
        return gym

    def approve_gym(self, gym_id):
        return self._set_status(gym_id, GymStatus.APPROVED, NotificationType.GYM_APPROVED)

    def reject_gym(self, gym_id):
        return self._set_status(gym_id, GymStatus.REJECTED, NotificationType.GYM_REJECTED)

    def _set_status(self, gym_id, status, notification_type):
        gym = self._get(gym_id)
        gym.status = status.value
        self.notifications.notify(
            gym.owner_id,
            notification_type,
            f"Gym {status.value}",
            f"Your gym '{gym.name}' has been {status.value}.",
            gym_id=gym.id,
        )
        self.session.commit()
        logger.info("Gym %s marked %s", gym.id, status.value)
        return gym
