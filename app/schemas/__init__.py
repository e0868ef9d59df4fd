from marshmallow import ValidationError as SchemaValidationError

from app.errors import ValidationError

MISSING_FIELD = "Missing data for required field."


def _flatten(messages, prefix=""):
    for field, value in messages.items():
        path = f"{prefix}{field}"
        if isinstance(value, dict):
            yield from _flatten(value, prefix=f"{path}.")
        else:
            for message in value if isinstance(value, list) else [value]:
                yield path, message


def load_or_raise(schema, data, **kwargs):
    """Run ``schema.load`` and re-raise marshmallow errors as our ValidationError."""
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return schema.load(data, **kwargs)
    except SchemaValidationError as exc:
        flat = list(_flatten(exc.normalized_messages()))
        if any(message == MISSING_FIELD for _, message in flat):
            message = "Missing required fields"
        else:
            field, detail = flat[0]
            message = f"Invalid {field}: {detail}"
        raise ValidationError(message, errors=exc.normalized_messages()) from exc
