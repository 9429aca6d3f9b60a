from marshmallow import Schema, fields, EXCLUDE
from notes_api.authors.schemas import AuthorOut
from notes_api.common.validators import not_blank, uuid_format
from notes_api.tags.schemas import TagOut

TAGS_NOT_ARRAY = "Tags must be an array"
_TITLE_REQUIRED = "Note title is required"
_TITLE_EMPTY = "Title cannot be empty"
_AUTHOR_REQUIRED = "authorId is required"
_AUTHOR_BAD_UUID = "The provided authorId is not in valid UUID format"


def _tags_field():
    return fields.List(
        fields.String(error_messages={"invalid": "Tags must be an array of strings"}),
        error_messages={"invalid": TAGS_NOT_ARRAY, "null": TAGS_NOT_ARRAY},
    )


class NoteIn(Schema):
    # ordre de validation rapporté au client
    ERROR_ORDER = ("title", "tags", "authorId")

    class Meta:
        unknown = EXCLUDE

    title = fields.String(
        required=True,
        validate=not_blank(_TITLE_REQUIRED),
        error_messages={"required": _TITLE_REQUIRED, "null": _TITLE_REQUIRED, "invalid": _TITLE_REQUIRED},
    )
    content = fields.String(allow_none=True, load_default=None)
    tags = _tags_field()
    author_id = fields.String(
        required=True,
        data_key="authorId",
        validate=[not_blank(_AUTHOR_REQUIRED), uuid_format(_AUTHOR_BAD_UUID)],
        error_messages={"required": _AUTHOR_REQUIRED, "null": _AUTHOR_REQUIRED, "invalid": _AUTHOR_BAD_UUID},
    )


class NotePatch(Schema):
    ERROR_ORDER = ("title", "tags")

    class Meta:
        unknown = EXCLUDE

    title = fields.String(
        validate=not_blank(_TITLE_EMPTY),
        error_messages={"null": _TITLE_EMPTY, "invalid": _TITLE_EMPTY},
    )
    content = fields.String(allow_none=True)
    tags = _tags_field()


class NoteOut(Schema):
    id = fields.UUID(required=True)
    title = fields.String(required=True)
    content = fields.String(allow_none=True)
    author_id = fields.UUID(required=True, data_key="authorId")
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")
    author = fields.Nested(AuthorOut, required=True)
    tags = fields.List(fields.Nested(TagOut), required=True)
