from flask import Blueprint, request, jsonify
from notes_api.extensions import db
from notes_api.authors.service import get_author
from notes_api.notes import service
from notes_api.notes.schemas import NoteIn, NotePatch, NoteOut
from notes_api.common.errors import ApiError, json_body, load_or_400, store_errors
from notes_api.common.validators import is_valid_uuid
from notes_api.tags.service import normalize_tags, parse_tag_filter
import uuid

bp = Blueprint("notes", __name__)

note_in = NoteIn()
note_patch = NotePatch()
note_out = NoteOut()
note_out_many = NoteOut(many=True)

def _note_uuid(note_id: str) -> uuid.UUID:
    if not is_valid_uuid(note_id):
        raise ApiError("Invalid UUID format", 400)
    return uuid.UUID(note_id)

def _clean_content(content):
    # "" (après trim) -> None
    if content is None:
        return None
    return content.strip() or None

@bp.post("", strict_slashes=False)
@store_errors("Failed to create note")
def create_note():
    payload = json_body()
    data = load_or_400(note_in, payload, NoteIn.ERROR_ORDER)

    author_id = uuid.UUID(data["author_id"])
    if not get_author(db.session, author_id):
        raise ApiError("Author not found", 404)

    note = service.create_note(
        db.session,
        title=data["title"].strip(),
        content=_clean_content(data["content"]),
        author_id=author_id,
        tag_names=normalize_tags(data.get("tags", [])),
    )
    return jsonify(note_out.dump(note)), 201

@bp.get("", strict_slashes=False)
@store_errors("Failed to fetch notes")
def list_notes():
    tag_names = parse_tag_filter(request.args.get("tags"))
    notes = service.list_notes(db.session, tag_names)
    return jsonify(note_out_many.dump(notes)), 200

@bp.get("/<note_id>")
@store_errors("Failed to fetch note")
def get_note(note_id):
    note = service.get_note(db.session, _note_uuid(note_id))
    if not note:
        raise ApiError("Note not found", 404)
    return jsonify(note_out.dump(note)), 200

@bp.patch("/<note_id>")
@store_errors("Failed to update note")
def update_note(note_id):
    nid = _note_uuid(note_id)

    payload = json_body()
    # S'il n'y a aucun champ modifiable (title, content, tags)
    if not payload.keys() & {"title", "content", "tags"}:
        raise ApiError("No fields to update provided", 400)
    data = load_or_400(note_patch, payload, NotePatch.ERROR_ORDER)

    changes = {}
    if "title" in data:
        changes["title"] = data["title"].strip()
    if "content" in data:
        changes["content"] = _clean_content(data["content"])
    if "tags" in data:
        changes["tags"] = normalize_tags(data["tags"])

    try:
        note = service.update_note(db.session, nid, changes)
    except service.NoteNotFound:
        raise ApiError("Note not found", 404)
    return jsonify(note_out.dump(note)), 200
