import uuid
from datetime import datetime, timezone
from sqlalchemy import Uuid, ForeignKey
from notes_api.extensions import db


def utcnow():
    return datetime.now(timezone.utc)


# Table d'association note <-> tag (pas de payload, paire unique)
note_tags = db.Table(
    "note_tags",
    db.Column("note_id", Uuid, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    db.Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class Note(db.Model):
    __tablename__ = "notes"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=True)

    # author_id immuable après création
    author_id = db.Column(Uuid, ForeignKey("authors.id", ondelete="RESTRICT"), nullable=False, index=True)
    author = db.relationship("Author", back_populates="notes", lazy="joined")

    tags = db.relationship("Tag", secondary=note_tags, back_populates="notes", lazy="selectin", order_by="Tag.name")

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
