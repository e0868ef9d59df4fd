from flask import Blueprint, request

from app.extensions import db
from app.models.enums import UserRole
from app.schemas.user import UserSchema
from app.services.stores import UserStore
from app.services.user_service import UserService
from app.utils.decorators import inject_current_user, role_required
from app.utils.response import success

user_bp = Blueprint("users", __name__)
user_schema = UserSchema()
users_schema = UserSchema(many=True)


def user_service():
    return UserService(db.session, UserStore(db.session))


@user_bp.route("", methods=["GET"])
@role_required(UserRole.SUPER_ADMIN)
def list_users(current_user):
    users = user_service().list_users()
    return success("Users retrieved successfully", {"count": len(users), "users": users_schema.dump(users)})


@user_bp.route("/<int:user_id>", methods=["GET"])
@inject_current_user
def get_user(user_id, current_user):
    user = user_service().get_user(current_user, user_id)
    return success("User retrieved successfully", user_schema.dump(user))


@user_bp.route("/<int:user_id>", methods=["PATCH"])
@inject_current_user
def update_profile(user_id, current_user):
    user = user_service().update_profile(current_user, user_id, request.get_json(silent=True))
    return success("Profile updated successfully", user_schema.dump(user))


@user_bp.route("/<int:user_id>/password", methods=["PATCH"])
@inject_current_user
def change_password(user_id, current_user):
    user_service().change_password(current_user, user_id, request.get_json(silent=True))
    return success("Password updated successfully")


@user_bp.route("/<int:user_id>", methods=["DELETE"])
@role_required(UserRole.SUPER_ADMIN)
def remove_user(user_id, current_user):
    user_service().deactivate(user_id)
    return success("User account deactivated successfully")


@user_bp.route("/<int:user_id>/stats", methods=["GET"])
@inject_current_user
def get_stats(user_id, current_user):
    stats = user_service().stats(current_user, user_id)
    return success("User statistics retrieved successfully", stats)
