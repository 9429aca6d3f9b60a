# notes_api/docs/spec.py
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from marshmallow import Schema, fields

from notes_api.authors.schemas import AuthorIn, AuthorOut
from notes_api.notes.schemas import NoteIn, NotePatch, NoteOut
from notes_api.tags.schemas import TagOut

class ErrorSchema(Schema):
    error = fields.String(required=True)
    message = fields.String(required=True)

def _ref(name: str):
    return {"$ref": f"#/components/schemas/{name}"}

def _json(name: str, many: bool = False):
    schema = {"type": "array", "items": _ref(name)} if many else _ref(name)
    return {"content": {"application/json": {"schema": schema}}}

def _id_param():
    return {"in": "path", "name": "id", "required": True, "schema": {"type": "string", "format": "uuid"}}

def build_spec():
    spec = APISpec(
        title="Notes API",
        version="1.0.0",
        openapi_version="3.0.3",
        info={"description": "Notes, authors and tag filtering API"},
        plugins=[MarshmallowPlugin()],
    )

    # Composants
    spec.components.schema("AuthorIn", schema=AuthorIn)
    spec.components.schema("Author", schema=AuthorOut)
    spec.components.schema("Tag", schema=TagOut)
    spec.components.schema("NoteIn", schema=NoteIn)
    spec.components.schema("NotePatch", schema=NotePatch)
    spec.components.schema("Note", schema=NoteOut)
    spec.components.schema("Error", schema=ErrorSchema)

    bad_request = {"description": "Bad Request", **_json("Error")}
    not_found = {"description": "Not Found", **_json("Error")}

    # ---- AUTHORS ----
    spec.path(
        path="/api/v1/authors",
        operations={
            "post": {
                "summary": "Create author",
                "requestBody": {"required": True, **_json("AuthorIn")},
                "responses": {
                    "201": {"description": "Created", **_json("Author")},
                    "400": bad_request,
                },
            },
            "get": {
                "summary": "List authors (by name)",
                "responses": {"200": {"description": "OK", **_json("Author", many=True)}},
            },
        },
    )

    spec.path(
        path="/api/v1/authors/{id}",
        operations={
            "get": {
                "summary": "Get author by id",
                "parameters": [_id_param()],
                "responses": {
                    "200": {"description": "OK", **_json("Author")},
                    "400": bad_request,
                    "404": not_found,
                },
            }
        },
    )

    # ---- NOTES ----
    spec.path(
        path="/api/v1/notes",
        operations={
            "post": {
                "summary": "Create note",
                "requestBody": {"required": True, **_json("NoteIn")},
                "responses": {
                    "201": {"description": "Created", **_json("Note")},
                    "400": bad_request,
                    "404": {"description": "Author not found", **_json("Error")},
                },
            },
            "get": {
                "summary": "List notes (newest first)",
                "parameters": [
                    {"in": "query", "name": "tags", "description": "Comma separated tag names (any match)",
                     "schema": {"type": "string"}},
                ],
                "responses": {"200": {"description": "OK", **_json("Note", many=True)}},
            },
        },
    )

    spec.path(
        path="/api/v1/notes/{id}",
        operations={
            "get": {
                "summary": "Get note by id",
                "parameters": [_id_param()],
                "responses": {
                    "200": {"description": "OK", **_json("Note")},
                    "400": bad_request,
                    "404": not_found,
                },
            },
            "patch": {
                "summary": "Update note (tags are replaced, not merged)",
                "parameters": [_id_param()],
                "requestBody": {"required": True, **_json("NotePatch")},
                "responses": {
                    "200": {"description": "OK", **_json("Note")},
                    "400": bad_request,
                    "404": not_found,
                },
            },
        },
    )

    return spec.to_dict()
