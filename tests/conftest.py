# tests/conftest.py
import os, sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("APP_ENV", "test")

from notes_api import create_app
from notes_api.extensions import db

@pytest.fixture(scope="session")
def app():
    # TEST_DATABASE_URL (sinon SQLite en mémoire) est lu par TestConfig
    app = create_app()
    with app.app_context():
        # tables propres pour la session de tests
        db.drop_all()
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()

@pytest.fixture(autouse=True)
def _clean_tables(app):
    yield
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def make_author(client):
    def _make(name="Ada"):
        r = client.post("/api/v1/authors", json={"name": name})
        assert r.status_code == 201
        return r.get_json()
    return _make

@pytest.fixture()
def make_note(client, make_author):
    def _make(title="T", tags=None, author_id=None, content=None):
        if author_id is None:
            author_id = make_author()["id"]
        body = {"title": title, "authorId": author_id}
        if tags is not None:
            body["tags"] = tags
        if content is not None:
            body["content"] = content
        r = client.post("/api/v1/notes", json=body)
        assert r.status_code == 201, r.get_json()
        return r.get_json()
    return _make
