from flask import Blueprint, request

from app.schemas import load_or_raise
from app.schemas.challenge import (
    ChallengeFilterSchema,
    challenge_schema,
    challenge_list_schema,
    participation_schema,
    participants_schema,
    user_participations_schema,
)
from app.services import challenge_service_for
from app.utils.decorators import inject_current_user
from app.utils.response import created, success

challenge_bp = Blueprint("challenges", __name__)


# ---------------- Challenges ----------------
@challenge_bp.route("", methods=["POST"])
@inject_current_user
def create_challenge(current_user):
    challenge = challenge_service_for().create_challenge(request.get_json(silent=True), current_user.id)
    return created("Challenge created successfully", challenge_schema.dump(challenge))


@challenge_bp.route("", methods=["GET"])
@inject_current_user
def get_all_challenges(current_user):
    filters = load_or_raise(ChallengeFilterSchema(), request.args.to_dict())
    challenges = challenge_service_for().list_challenges(filters)
    return success("Challenges retrieved successfully", {
        "count": len(challenges),
        "challenges": challenge_list_schema.dump(challenges),
    })


@challenge_bp.route("/my-participations", methods=["GET"])
@inject_current_user
def get_user_participations(current_user):
    participations = challenge_service_for().get_user_participations(current_user.id)
    return success("Participations retrieved successfully", {
        "count": len(participations),
        "participations": user_participations_schema.dump(participations),
    })


@challenge_bp.route("/<int:challenge_id>", methods=["GET"])
@inject_current_user
def get_challenge(challenge_id, current_user):
    challenge = challenge_service_for().get_challenge_by_id(challenge_id)
    return success("Challenge retrieved successfully", challenge_schema.dump(challenge))


@challenge_bp.route("/<int:challenge_id>/participants", methods=["GET"])
@inject_current_user
def get_challenge_participants(challenge_id, current_user):
    participants = challenge_service_for().get_challenge_participants(challenge_id)
    return success("Participants retrieved successfully", {
        "count": len(participants),
        "participants": participants_schema.dump(participants),
    })


# ---------------- Join / leave ----------------
@challenge_bp.route("/<int:challenge_id>/join", methods=["POST"])
@inject_current_user
def join_challenge(challenge_id, current_user):
    participation = challenge_service_for().join_challenge(challenge_id, current_user.id)
    return created("Successfully joined challenge", participation_schema.dump(participation))


@challenge_bp.route("/<int:challenge_id>/leave", methods=["POST"])
@inject_current_user
def leave_challenge(challenge_id, current_user):
    challenge_service_for().leave_challenge(challenge_id, current_user.id)
    return success("Successfully left challenge")


# ---------------- Progress ----------------
@challenge_bp.route("/<int:challenge_id>/progress", methods=["POST"])
@inject_current_user
def record_progress(challenge_id, current_user):
    service = challenge_service_for()
    participation = service.participation_for(challenge_id, current_user.id)
    participation = service.record_progress(
        participation.id, request.get_json(silent=True), user_id=current_user.id,
    )
    return success("Progress recorded", participation_schema.dump(participation))
