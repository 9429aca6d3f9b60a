import logging
from functools import wraps

from flask import jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.http import HTTP_STATUS_CODES

from notes_api.extensions import db

logger = logging.getLogger("notes_api.errors")


class ApiError(Exception):
    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _json_error(message, status):
    # "error" = libellé HTTP du statut (ex: "Bad Request", "Not Found")
    return jsonify({
        "error": HTTP_STATUS_CODES.get(status, "Unknown Error"),
        "message": message,
    }), status


def first_error_message(messages, field_order=()):
    """Réduit les messages marshmallow à un seul message lisible.

    Les champs sont examinés dans l'ordre `field_order`, puis les autres.
    """
    if isinstance(messages, str):
        return messages
    if isinstance(messages, (list, tuple)):
        for item in messages:
            found = first_error_message(item)
            if found:
                return found
        return None
    if isinstance(messages, dict):
        keys = [k for k in field_order if k in messages]
        keys += [k for k in messages if k not in keys]
        for key in keys:
            found = first_error_message(messages[key])
            if found:
                return found
    return None


def json_body():
    """Corps JSON de la requête; tout ce qui n'est pas un objet vaut {}."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def load_or_400(schema, payload, field_order=()):
    """schema.load() qui transforme une ValidationError en ApiError 400."""
    try:
        return schema.load(payload)
    except ValidationError as e:
        message = first_error_message(e.messages, field_order) or "Invalid request body."
        raise ApiError(message, 400) from e


def store_errors(message):
    """Ex: @store_errors("Failed to create note")

    Toute erreur SQLAlchemy est journalisée, la session annulée,
    et le client reçoit un 500 sans détail interne.
    """
    def wrapper(fn):
        @wraps(fn)
        def inner(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError:
                db.session.rollback()
                logger.exception("store_error", extra={"action": message})
                raise ApiError(message, 500)
        return inner
    return wrapper


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return _json_error(e.message, e.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return _json_error(first_error_message(e.messages) or "Invalid request body.", 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Ex: 404 route inconnue, 405, 413…
        return _json_error(e.description or "HTTP error", e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        db.session.rollback()
        logger.exception("unexpected_error")
        return _json_error("Internal server error.", 500)
