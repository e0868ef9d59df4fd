from marshmallow import fields

from app.extensions import ma


class NotificationSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    type = fields.String()
    title = fields.String()
    message = fields.String()
    extra_data = fields.Dict(data_key="extraData")
    is_read = fields.Boolean(data_key="isRead")
    read_at = fields.DateTime(data_key="readAt", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
