from marshmallow import fields, validate, EXCLUDE

from app.extensions import ma
from app.models.columns import values
from app.models.enums import UserRole

PASSWORD_MIN_LENGTH = 8


class UserSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    email = fields.Email()
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    role = fields.String()
    status = fields.String()
    email_verified = fields.Boolean(data_key="emailVerified")
    total_points = fields.Integer(data_key="totalPoints")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


USER_SUMMARY_FIELDS = ("id", "first_name", "last_name", "email", "role")


class RegisterSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(
        required=True, load_only=True,
        validate=validate.Length(min=PASSWORD_MIN_LENGTH, error="Password must be at least 8 characters long"),
    )
    first_name = fields.String(required=True, data_key="firstName", validate=validate.Length(min=1))
    last_name = fields.String(required=True, data_key="lastName", validate=validate.Length(min=1))
    role = fields.String(load_default=UserRole.CLIENT.value, validate=validate.OneOf(values(UserRole)))


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True)


class ProfileUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email()
    first_name = fields.String(data_key="firstName", validate=validate.Length(min=1))
    last_name = fields.String(data_key="lastName", validate=validate.Length(min=1))


class PasswordChangeSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    current_password = fields.String(required=True, data_key="currentPassword")
    new_password = fields.String(
        required=True, data_key="newPassword",
        validate=validate.Length(min=PASSWORD_MIN_LENGTH, error="New password must be at least 8 characters long"),
    )
