import logging

from sqlalchemy import select

from app.errors import AuthorizationError, NotFoundError
from app.models import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, session):
        self.session = session

    def notify(self, user_id, type, title, message, **extra):
        """Queue a notification on the session; the caller's commit persists it."""
        notification = Notification(
            user_id=user_id,
            type=type.value,
            title=title,
            message=message,
            extra_data=extra,
        )
        self.session.add(notification)
        logger.debug("Notification %s queued for user %s", type.value, user_id)
        return notification

    def list_for_user(self, user_id, unread_only=False):
        query = select(Notification).filter_by(user_id=user_id)
        if unread_only:
            query = query.filter_by(is_read=False)
        query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
        return self.session.execute(query).scalars().all()

    def mark_read(self, notification_id, user_id):
        notification = self.session.get(Notification, notification_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        if notification.user_id != user_id:
            raise AuthorizationError("Access denied")
        notification.mark_as_read()
        self.session.commit()
        return notification
