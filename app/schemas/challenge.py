from marshmallow import fields, validate, EXCLUDE, post_load

from app.extensions import ma
from app.models.columns import values
from app.models.enums import ChallengeDifficulty, ChallengeType
from app.schemas.exercise import ExerciseSchema, EXERCISE_SUMMARY_FIELDS
from app.schemas.gym import GymSchema, GYM_SUMMARY_FIELDS
from app.schemas.user import UserSchema, USER_SUMMARY_FIELDS

positive = validate.Range(min=1)


class ObjectivesSchema(ma.Schema):
    """Stored as-is in the challenge's ``objectives`` JSON document."""

    class Meta:
        unknown = EXCLUDE

    targetDuration = fields.Integer(allow_none=True, validate=positive)  # minutes
    targetCalories = fields.Integer(allow_none=True, validate=positive)
    targetWorkouts = fields.Integer(allow_none=True, validate=positive)

    @post_load
    def drop_unset(self, data, **kwargs):
        return {key: value for key, value in data.items() if value is not None}


class ChallengeCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=1, max=150))
    description = fields.String(required=True, validate=validate.Length(min=1))
    type = fields.String(
        required=True,
        validate=validate.OneOf(values(ChallengeType), error="Invalid challenge type"),
    )
    difficulty = fields.String(
        required=True,
        validate=validate.OneOf(values(ChallengeDifficulty), error="Invalid difficulty level"),
    )
    objectives = fields.Nested(ObjectivesSchema, required=True)
    start_date = fields.DateTime(required=True, data_key="startDate")
    end_date = fields.DateTime(required=True, data_key="endDate")
    points_reward = fields.Integer(
        required=True, strict=True, data_key="pointsReward",
        validate=validate.Range(min=0, error="pointsReward must be non-negative"),
    )
    max_participants = fields.Integer(
        strict=True, allow_none=True, data_key="maxParticipants",
        validate=validate.Range(min=1, error="maxParticipants must be greater than 0"),
    )
    is_public = fields.Boolean(load_default=True, data_key="isPublic")
    gym_id = fields.Integer(allow_none=True, data_key="gymId")
    exercise_ids = fields.List(fields.Integer(), load_default=list, data_key="exerciseIds")


class ChallengeFilterSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    type = fields.String(validate=validate.OneOf(values(ChallengeType)))
    difficulty = fields.String(validate=validate.OneOf(values(ChallengeDifficulty)))
    gym_id = fields.Integer(data_key="gymId")
    is_public = fields.Boolean(data_key="isPublic")


class ChallengeSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    title = fields.String()
    description = fields.String()
    type = fields.String()
    difficulty = fields.String()
    status = fields.String()
    objectives = fields.Dict()
    start_date = fields.DateTime(data_key="startDate")
    end_date = fields.DateTime(data_key="endDate")
    max_participants = fields.Integer(data_key="maxParticipants", allow_none=True)
    points_reward = fields.Integer(data_key="pointsReward")
    is_public = fields.Boolean(data_key="isPublic")
    creator_id = fields.Integer(data_key="creatorId")
    gym_id = fields.Integer(data_key="gymId", allow_none=True)
    creator = fields.Nested(UserSchema, only=USER_SUMMARY_FIELDS)
    gym = fields.Nested(GymSchema, only=GYM_SUMMARY_FIELDS, allow_none=True)
    recommended_exercises = fields.List(
        fields.Nested(ExerciseSchema, only=EXERCISE_SUMMARY_FIELDS), data_key="recommendedExercises",
    )
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class ParticipationSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    status = fields.String()
    progress = fields.Dict()
    joined_at = fields.DateTime(data_key="joinedAt")
    completed_at = fields.DateTime(data_key="completedAt", allow_none=True)
    points_earned = fields.Integer(data_key="pointsEarned")
    user_id = fields.Integer(data_key="userId")
    challenge_id = fields.Integer(data_key="challengeId")
    user = fields.Nested(UserSchema, only=USER_SUMMARY_FIELDS)
    challenge = fields.Nested(ChallengeSchema, exclude=("creator", "recommended_exercises"))


class ProgressSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    calories = fields.Integer(required=True, validate=validate.Range(min=0))
    duration = fields.Integer(required=True, validate=validate.Range(min=0))


challenge_schema = ChallengeSchema()
challenge_list_schema = ChallengeSchema(many=True, exclude=("recommended_exercises",))
participation_schema = ParticipationSchema(exclude=("user", "challenge"))
user_participations_schema = ParticipationSchema(many=True, exclude=("user",))
participants_schema = ParticipationSchema(many=True, exclude=("challenge",))
