import logging

from sqlalchemy import func, select

from app.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.models import Participation, User
from app.models.enums import ParticipationStatus, UserStatus
from app.schemas import load_or_raise
from app.schemas.user import PasswordChangeSchema, ProfileUpdateSchema
from app.utils.dates import isoformat

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session, users):
        self.session = session
        self.users = users

    def _get(self, user_id):
        user = self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    @staticmethod
    def ensure_self_or_admin(actor, user_id):
        if actor.id != user_id and not actor.is_super_admin:
            raise AuthorizationError("Access denied")

    def list_users(self):
        return self.session.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc())
        ).scalars().all()

    def get_user(self, actor, user_id):
        self.ensure_self_or_admin(actor, user_id)
        return self._get(user_id)

    def update_profile(self, actor, user_id, data):
        self.ensure_self_or_admin(actor, user_id)
        payload = load_or_raise(ProfileUpdateSchema(), data)
        if not payload:
            raise ValidationError("At least one field (firstName, lastName, email) is required")

        user = self._get(user_id)
        email = payload.get("email")
        if email:
            email = email.strip().lower()
            if email != user.email:
                if self.users.find_by_email(email):
                    raise ConflictError("Email already in use", reason="email_taken")
                user.email = email
                user.email_verified = False
        if payload.get("first_name"):
            user.first_name = payload["first_name"].strip()
        if payload.get("last_name"):
            user.last_name = payload["last_name"].strip()

        self.session.commit()
        return user

    def change_password(self, actor, user_id, data):
        if actor.id != user_id:
            raise AuthorizationError("Access denied")
        payload = load_or_raise(PasswordChangeSchema(), data)
        user = self._get(user_id)
        if not user.check_password(payload["current_password"]):
            raise ValidationError("Current password is incorrect")
        user.set_password(payload["new_password"])
        self.session.commit()
        logger.info("Password changed for user %s", user_id)

    def deactivate(self, user_id):
        user = self._get(user_id)
        user.status = UserStatus.SUSPENDED.value
        self.session.commit()
        logger.info("User %s deactivated", user_id)
        return user

    def stats(self, actor, user_id):
        self.ensure_self_or_admin(actor, user_id)
        user = self._get(user_id)
        rows = self.session.execute(
            select(Participation.status, func.count(Participation.id))
            .filter_by(user_id=user_id)
            .group_by(Participation.status)
        ).all()
        by_status = {status.value: 0 for status in ParticipationStatus}
        by_status.update({status: count for status, count in rows})
        return {
            "userId": user.id,
            "totalPoints": user.total_points,
            "memberSince": isoformat(user.created_at),
            "participations": by_status,
        }
