"""Accès aux notes: chaque fonction reçoit la session SQLAlchemy explicitement.

Les notes renvoyées ont toujours `author` et `tags` chargés.
"""
from notes_api.notes.models import Note, utcnow
from notes_api.tags.models import Tag
from notes_api.tags.service import get_or_create_tags


class NoteNotFound(LookupError):
    pass


def create_note(session, title: str, content: str | None, author_id, tag_names) -> Note:
    note = Note(
        title=title,
        content=content,
        author_id=author_id,
        tags=get_or_create_tags(session, tag_names),
    )
    session.add(note)
    session.commit()
    return get_note(session, note.id)


def list_notes(session, tag_names=None) -> list[Note]:
    q = session.query(Note)
    if tag_names:
        # OU logique: au moins un tag du filtre
        q = q.filter(Note.tags.any(Tag.name.in_(tag_names)))
    return q.order_by(Note.created_at.desc()).all()


def get_note(session, note_id) -> Note | None:
    return session.get(Note, note_id)


def update_note(session, note_id, changes: dict) -> Note:
    """Applique seulement les clés présentes (title, content, tags).

    `tags` remplace entièrement les associations existantes, jamais de fusion.
    """
    note = session.get(Note, note_id)
    if note is None:
        raise NoteNotFound(note_id)

    if "title" in changes:
        note.title = changes["title"]
    if "content" in changes:
        note.content = changes["content"]
    if "tags" in changes:
        note.tags = get_or_create_tags(session, changes["tags"])

    # onupdate ne se déclenche pas si seuls les tags changent
    note.updated_at = utcnow()
    session.commit()
    return get_note(session, note.id)
