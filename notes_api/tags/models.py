import uuid
from sqlalchemy import Uuid
from notes_api.extensions import db

class Tag(db.Model):
    """Étiquette globale, identifiée par son nom normalisé (jamais renommée ni supprimée)."""
    __tablename__ = "tags"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.Text, unique=True, nullable=False, index=True)

    notes = db.relationship("Note", secondary="note_tags", back_populates="tags", lazy="select")

    def __repr__(self):
        return f"<Tag {self.name!r}>"
