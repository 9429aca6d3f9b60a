from marshmallow import Schema, fields, EXCLUDE
from notes_api.common.validators import not_blank

_NAME_REQUIRED = "Author name is required"

class AuthorIn(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(
        required=True,
        validate=not_blank(_NAME_REQUIRED),
        error_messages={"required": _NAME_REQUIRED, "null": _NAME_REQUIRED, "invalid": _NAME_REQUIRED},
    )

class AuthorOut(Schema):
    id = fields.UUID(required=True)
    name = fields.String(required=True)
