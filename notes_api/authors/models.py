import uuid
from sqlalchemy import Uuid
from notes_api.extensions import db

class Author(db.Model):
    __tablename__ = "authors"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.Text, nullable=False, index=True)

    # relation vers Note
    notes = db.relationship("Note", back_populates="author", lazy="select")

    def __repr__(self):
        return f"<Author {self.id} {self.name!r}>"
