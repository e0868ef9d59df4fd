from flask import Blueprint, request

from app.extensions import db
from app.schemas.challenge import participation_schema
from app.schemas.workout import WorkoutSchema
from app.services import challenge_service_for
from app.services.workout_service import WorkoutService
from app.utils.decorators import inject_current_user
from app.utils.response import created, success

workout_bp = Blueprint("workouts", __name__)
workout_schema = WorkoutSchema()
workouts_schema = WorkoutSchema(many=True)


def workout_service():
    return WorkoutService(db.session, challenge_service_for())


@workout_bp.route("", methods=["POST"])
@inject_current_user
def log_workout(current_user):
    workout, participation = workout_service().log_workout(request.get_json(silent=True), current_user.id)
    data = workout_schema.dump(workout)
    if participation is not None:
        data["participation"] = participation_schema.dump(participation)
    return created("Workout logged successfully", data)


@workout_bp.route("", methods=["GET"])
@inject_current_user
def get_workouts(current_user):
    workouts = workout_service().list_for_user(current_user.id)
    return success("Workouts retrieved successfully", {
        "count": len(workouts),
        "workouts": workouts_schema.dump(workouts),
    })
