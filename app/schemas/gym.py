from marshmallow import fields, validate, EXCLUDE

from app.extensions import ma
from app.schemas.user import UserSchema, USER_SUMMARY_FIELDS


class GymSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    name = fields.String()
    description = fields.String()
    address = fields.String()
    city = fields.String()
    phone = fields.String()
    email = fields.String()
    capacity = fields.Integer()
    equipment = fields.List(fields.String())
    specialized_exercise_types = fields.List(fields.String(), data_key="specializedExerciseTypes")
    status = fields.String()
    owner_id = fields.Integer(data_key="ownerId")
    owner = fields.Nested(UserSchema, only=USER_SUMMARY_FIELDS)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


GYM_SUMMARY_FIELDS = ("id", "name", "city", "status")


class GymInputSchema(ma.Schema):
    """Create payload; load with ``partial=True`` for updates."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    description = fields.String(required=True, validate=validate.Length(min=1))
    address = fields.String(required=True, validate=validate.Length(min=1))
    city = fields.String(required=True, validate=validate.Length(min=1))
    phone = fields.String(required=True, validate=validate.Length(min=1, max=30))
    email = fields.Email(required=True)
    capacity = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    equipment = fields.List(fields.String(), required=True)
    specialized_exercise_types = fields.List(
        fields.String(), data_key="specializedExerciseTypes", load_default=list,
    )
