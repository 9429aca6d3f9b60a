# tests/test_app.py
from sqlalchemy.exc import OperationalError

def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    data = r.get_json()
    assert data["status"] == "ok"
    assert data["db"] == "up"

def test_openapi_document(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    doc = r.get_json()
    assert doc["openapi"] == "3.0.3"
    assert {"/api/v1/authors", "/api/v1/authors/{id}", "/api/v1/notes", "/api/v1/notes/{id}"} <= set(doc["paths"])
    assert "patch" in doc["paths"]["/api/v1/notes/{id}"]
    assert {"Author", "Note", "Tag", "Error"} <= set(doc["components"]["schemas"])

def test_request_id_is_echoed(client):
    r = client.get("/api/v1/authors", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"
    assert client.get("/api/v1/authors").headers.get("X-Request-Id")

def test_security_headers(client):
    r = client.get("/api/v1/notes")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" not in r.headers

def test_unknown_route_is_json_404(client):
    r = client.get("/api/v1/nope")
    assert r.status_code == 404
    assert r.get_json()["error"] == "Not Found"

def test_method_not_allowed_is_json(client, make_author):
    author = make_author()
    r = client.delete(f"/api/v1/authors/{author['id']}")
    assert r.status_code == 405
    assert r.get_json()["error"] == "Method Not Allowed"

def test_store_failure_is_generic_500(client, monkeypatch):
    from notes_api.authors import service

    def _down(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(service, "list_authors", _down)
    r = client.get("/api/v1/authors")
    assert r.status_code == 500
    assert r.get_json() == {"error": "Internal Server Error", "message": "Failed to fetch authors"}

def test_store_failure_on_note_create(client, make_author, monkeypatch):
    from notes_api.notes import service

    author_id = make_author()["id"]

    def _down(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(service, "create_note", _down)
    r = client.post("/api/v1/notes", json={"title": "T", "authorId": author_id})
    assert r.status_code == 500
    assert r.get_json() == {"error": "Internal Server Error", "message": "Failed to create note"}

def test_unexpected_error_hides_details(client, monkeypatch):
    from notes_api.notes import service

    def _bug(*args, **kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(service, "list_notes", _bug)
    r = client.get("/api/v1/notes")
    assert r.status_code == 500
    body = r.get_json()
    assert body == {"error": "Internal Server Error", "message": "Internal server error."}

def test_store_failure_log_carries_action(client, monkeypatch, caplog):
    from notes_api.notes import service

    def _down(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(service, "get_note", _down)
    note_id = "a0eebc99-9c0b-4ef8-bb6d-6bb9bd380a11"
    with caplog.at_level("ERROR", logger="notes_api.errors"):
        r = client.get(f"/api/v1/notes/{note_id}")
    assert r.status_code == 500
    records = [rec for rec in caplog.records if rec.getMessage() == "store_error"]
    assert records and records[0].action == "Failed to fetch note"

def test_request_context_filter_adds_request_fields(app):
    import logging
    from notes_api.common.logging import RequestContextFilter

    record = logging.LogRecord("notes_api.test", logging.INFO, __file__, 1, "hello", None, None)
    with app.test_request_context("/api/v1/notes", method="POST"):
        assert RequestContextFilter().filter(record)
    assert record.method == "POST"
    assert record.path == "/api/v1/notes"
    assert record.request_id == "-"
    assert record.view_args == {}
