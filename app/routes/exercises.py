from flask import Blueprint, request

from app.errors import ValidationError
from app.extensions import db
from app.models.enums import UserRole
from app.schemas.exercise import ExerciseSchema
from app.services.exercise_service import ExerciseService
from app.utils.decorators import inject_current_user, role_required
from app.utils.response import created, success

exercise_bp = Blueprint("exercises", __name__)
exercise_schema = ExerciseSchema()
exercises_schema = ExerciseSchema(many=True)


def exercise_service():
    return ExerciseService(db.session)


def exercise_list(exercises):
    return success("Exercises retrieved successfully", {
        "count": len(exercises),
        "exercises": exercises_schema.dump(exercises),
    })


@exercise_bp.route("", methods=["GET"])
@inject_current_user
def get_all_exercises(current_user):
    return exercise_list(exercise_service().list_exercises(
        difficulty=request.args.get("difficulty"),
        muscle_group=request.args.get("muscleGroup"),
        search=request.args.get("search"),
    ))


@exercise_bp.route("/search", methods=["GET"])
@inject_current_user
def search_exercises(current_user):
    term = request.args.get("q", "").strip()
    if not term:
        raise ValidationError("Search query is required")
    return exercise_list(exercise_service().search(term))


@exercise_bp.route("/<int:exercise_id>", methods=["GET"])
@inject_current_user
def get_exercise(exercise_id, current_user):
    exercise = exercise_service().get_exercise(exercise_id)
    return success("Exercise retrieved successfully", exercise_schema.dump(exercise))


@exercise_bp.route("", methods=["POST"])
@role_required(UserRole.SUPER_ADMIN)
def create_exercise(current_user):
    exercise = exercise_service().create_exercise(request.get_json(silent=True), current_user.id)
    return created("Exercise created successfully", exercise_schema.dump(exercise))


@exercise_bp.route("/<int:exercise_id>", methods=["PATCH"])
@role_required(UserRole.SUPER_ADMIN)
def update_exercise(exercise_id, current_user):
    exercise = exercise_service().update_exercise(exercise_id, request.get_json(silent=True))
    return success("Exercise updated successfully", exercise_schema.dump(exercise))


@exercise_bp.route("/<int:exercise_id>", methods=["DELETE"])
@role_required(UserRole.SUPER_ADMIN)
def delete_exercise(exercise_id, current_user):
    exercise_service().delete_exercise(exercise_id)
    return success("Exercise deleted successfully")
