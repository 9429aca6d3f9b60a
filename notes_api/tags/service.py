import logging
import uuid

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from notes_api.tags.models import Tag

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def normalize_tags(tags) -> list[str]:
    """Minuscules, trim, sans doublons (première occurrence gardée), sans vides."""
    cleaned = dict.fromkeys(t.strip().lower() for t in tags)
    return [t for t in cleaned if t]


def parse_tag_filter(raw: str | None) -> list[str] | None:
    """`?tags=a,B, c` -> ["a", "b", "c"]; absent ou vide -> None (pas de filtre)."""
    if raw is None:
        return None
    names = normalize_tags(raw.split(","))
    return names or None


def _tags_by_name(session, names):
    rows = session.query(Tag).filter(Tag.name.in_(names)).all()
    return {t.name: t for t in rows}


def _insert_ignoring_conflicts(session, names):
    dialect = session.get_bind().dialect.name
    insert = _UPSERT_INSERTS.get(dialect)
    if insert is not None:
        stmt = insert(Tag.__table__).values(
            [{"id": uuid.uuid4(), "name": name} for name in names]
        ).on_conflict_do_nothing(index_elements=["name"])
        session.execute(stmt)
        return

    # Pas d'upsert natif: insertion sous savepoint, violation d'unicité = course bénigne
    for name in names:
        try:
            with session.begin_nested():
                session.add(Tag(name=name))
        except IntegrityError:
            logger.info("tag_insert_race", extra={"tag": name})


def get_or_create_tags(session, names) -> list[Tag]:
    """Connect-or-create: renvoie les Tag de `names` dans le même ordre.

    Ne commit pas; l'appelant inclut l'opération dans sa propre transaction.
    """
    if not names:
        return []
    found = _tags_by_name(session, names)
    missing = [n for n in names if n not in found]
    if missing:
        _insert_ignoring_conflicts(session, missing)
        found.update(_tags_by_name(session, missing))
    return [found[n] for n in names]
