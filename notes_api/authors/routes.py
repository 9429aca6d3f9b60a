import uuid
from flask import Blueprint, jsonify
from notes_api.extensions import db
from notes_api.authors import service
from notes_api.authors.schemas import AuthorIn, AuthorOut
from notes_api.common.errors import ApiError, json_body, load_or_400, store_errors
from notes_api.common.validators import is_valid_uuid

bp = Blueprint("authors", __name__)

author_in = AuthorIn()
author_out = AuthorOut()
author_out_many = AuthorOut(many=True)

@bp.post("", strict_slashes=False)
@store_errors("Failed to create author")
def create_author():
    payload = json_body()
    data = load_or_400(author_in, payload)
    author = service.create_author(db.session, data["name"].strip())
    return jsonify(author_out.dump(author)), 201

@bp.get("", strict_slashes=False)
@store_errors("Failed to fetch authors")
def list_authors():
    authors = service.list_authors(db.session)
    return jsonify(author_out_many.dump(authors)), 200

@bp.get("/<author_id>")
@store_errors("Failed to fetch author")
def get_author(author_id):
    if not is_valid_uuid(author_id):
        raise ApiError("Invalid UUID format", 400)
    author = service.get_author(db.session, uuid.UUID(author_id))
    if not author:
        raise ApiError("Author not found", 404)
    return jsonify(author_out.dump(author)), 200
