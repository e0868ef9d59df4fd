from marshmallow import fields, validate, EXCLUDE

from app.extensions import ma


class WorkoutSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    name = fields.String()
    difficulty = fields.String()
    duration = fields.Integer()
    calories_burned = fields.Integer(data_key="caloriesBurned")
    completion_date = fields.DateTime(data_key="completionDate", allow_none=True)
    user_id = fields.Integer(data_key="userId")
    participation_id = fields.Integer(data_key="participationId", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")


class WorkoutCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    difficulty = fields.String(required=True, validate=validate.Length(min=1, max=20))
    duration = fields.Integer(required=True, validate=validate.Range(min=0))
    calories_burned = fields.Integer(required=True, data_key="caloriesBurned", validate=validate.Range(min=0))
    completion_date = fields.DateTime(data_key="completionDate", allow_none=True)
    participation_id = fields.Integer(data_key="participationId", allow_none=True)
