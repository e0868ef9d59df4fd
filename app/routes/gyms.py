from flask import Blueprint, request

from app.extensions import db
from app.models.enums import UserRole
from app.schemas.gym import GymSchema
from app.services import notification_service_for
from app.services.gym_service import GymService
from app.services.stores import GymRegistry, UserStore
from app.utils.decorators import inject_current_user, role_required
from app.utils.response import created, success

gym_bp = Blueprint("gyms", __name__)
gym_schema = GymSchema()
gyms_schema = GymSchema(many=True)


def gym_service():
    return GymService(db.session, UserStore(db.session), GymRegistry(db.session), notification_service_for())


def gym_list(message, gyms):
    return success(message, {"count": len(gyms), "gyms": gyms_schema.dump(gyms)})


@gym_bp.route("", methods=["GET"])
@inject_current_user
def get_approved_gyms(current_user):
    return gym_list("Gyms retrieved successfully", gym_service().list_approved())


@gym_bp.route("/all", methods=["GET"])
@role_required(UserRole.SUPER_ADMIN)
def get_all_gyms(current_user):
    return gym_list("Gyms retrieved successfully", gym_service().list_all())


@gym_bp.route("/owner/<int:owner_id>", methods=["GET"])
@inject_current_user
def get_gyms_by_owner(owner_id, current_user):
    return gym_list("Gyms retrieved successfully", gym_service().list_by_owner(owner_id))


@gym_bp.route("/<int:gym_id>", methods=["GET"])
@inject_current_user
def get_gym(gym_id, current_user):
    return success("Gym retrieved successfully", gym_schema.dump(gym_service().get_gym(gym_id)))


@gym_bp.route("", methods=["POST"])
@role_required(UserRole.GYM_OWNER)
def create_gym(current_user):
    gym = gym_service().create_gym(request.get_json(silent=True), current_user.id)
    return created("Gym created successfully and is pending approval", gym_schema.dump(gym))


@gym_bp.route("/<int:gym_id>", methods=["PATCH"])
@inject_current_user
def update_gym(gym_id, current_user):
    gym = gym_service().update_gym(gym_id, request.get_json(silent=True), current_user)
    return success("Gym updated successfully", gym_schema.dump(gym))


@gym_bp.route("/<int:gym_id>/approve", methods=["PATCH"])
@role_required(UserRole.SUPER_ADMIN)
def approve_gym(gym_id, current_user):
    return success("Gym approved successfully", gym_schema.dump(gym_service().approve_gym(gym_id)))


@gym_bp.route("/<int:gym_id>/reject", methods=["PATCH"])
@role_required(UserRole.SUPER_ADMIN)
def reject_gym(gym_id, current_user):
    return success("Gym rejected", gym_schema.dump(gym_service().reject_gym(gym_id)))
