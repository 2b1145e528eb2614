from marshmallow import Schema, EXCLUDE, fields, validate

TITLE_ERROR = "title must be a non-empty string"
TEXT_ERROR = "text must be a string"
DATETIME_ERROR = "Datetime must be a ISO 8601 date"


class NoteIn(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=1, max=255, error=TITLE_ERROR))
    text = fields.String(required=True)
    datetime = fields.DateTime(required=True, format="iso")


# Un message fixe par champ, quel que soit le validateur marshmallow en échec
FIELD_ERRORS = {
    "title": TITLE_ERROR,
    "text": TEXT_ERROR,
    "datetime": DATETIME_ERROR,
}


def field_errors(messages: dict) -> list:
    """Convertit ValidationError.messages en [{field, error}] (ordre: title, text, datetime)."""
    return [
        {"field": field, "error": error}
        for field, error in FIELD_ERRORS.items()
        if field in messages
    ]


class NoteOut(Schema):
    id = fields.Integer(required=True)
    title = fields.String(required=True)
    text = fields.String(required=True)
    datetime = fields.DateTime(required=True, format="iso")


class FieldError(Schema):
    field = fields.String(required=True)
    error = fields.String(required=True)


class NotFound(Schema):
    error = fields.String(required=True)
