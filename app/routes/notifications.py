from flask import Blueprint, request

from app.schemas.notification import NotificationSchema
from app.services import notification_service_for
from app.utils.decorators import inject_current_user
from app.utils.response import success

notification_bp = Blueprint("notifications", __name__)
notification_schema = NotificationSchema()
notifications_schema = NotificationSchema(many=True)


@notification_bp.route("", methods=["GET"])
@inject_current_user
def get_notifications(current_user):
    unread_only = request.args.get("unread", "").lower() == "true"
    notifications = notification_service_for().list_for_user(current_user.id, unread_only=unread_only)
    return success("Notifications retrieved successfully", {
        "count": len(notifications),
        "notifications": notifications_schema.dump(notifications),
    })


@notification_bp.route("/<int:notification_id>/read", methods=["PATCH"])
@inject_current_user
def mark_notification_read(notification_id, current_user):
    notification = notification_service_for().mark_read(notification_id, current_user.id)
    return success("Notification marked as read", notification_schema.dump(notification))
