from marshmallow import fields, validate, EXCLUDE

from app.extensions import ma
from app.models.columns import values
from app.models.enums import ExerciseDifficulty


class ExerciseSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    name = fields.String()
    description = fields.String()
    muscle_groups = fields.List(fields.String(), data_key="muscleGroups")
    difficulty = fields.String()
    calories_per_minute = fields.Float(data_key="caloriesPerMinute")
    instructions = fields.String(allow_none=True)
    video_url = fields.String(data_key="videoUrl", allow_none=True)
    image_url = fields.String(data_key="imageUrl", allow_none=True)
    created_by_id = fields.Integer(data_key="createdById")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


EXERCISE_SUMMARY_FIELDS = ("id", "name", "difficulty", "muscle_groups")


class ExerciseInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(required=True, validate=validate.Length(min=1))
    muscle_groups = fields.List(fields.String(), required=True, data_key="muscleGroups")
    difficulty = fields.String(
        load_default=ExerciseDifficulty.BEGINNER.value,
        validate=validate.OneOf(values(ExerciseDifficulty)),
    )
    calories_per_minute = fields.Float(
        data_key="caloriesPerMinute", load_default=5.0, validate=validate.Range(min=0),
    )
    instructions = fields.String(allow_none=True)
    video_url = fields.URL(data_key="videoUrl", allow_none=True)
    image_url = fields.URL(data_key="imageUrl", allow_none=True)
