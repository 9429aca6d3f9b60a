from notes_api.authors.models import Author


def create_author(session, name: str) -> Author:
    author = Author(name=name)
    session.add(author)
    session.commit()
    return author


def list_authors(session) -> list[Author]:
    return session.query(Author).order_by(Author.name.asc()).all()


def get_author(session, author_id) -> Author | None:
    return session.get(Author, author_id)
