import re
from marshmallow import ValidationError

# Forme canonique 8-4-4-4-12, toutes versions confondues
_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_uuid(value) -> bool:
    return isinstance(value, str) and _UUID_RE.fullmatch(value) is not None


def not_blank(message):
    """Validateur marshmallow: refuse les chaînes vides après trim."""
    def validate(value):
        if not value.strip():
            raise ValidationError(message)
    return validate


def uuid_format(message):
    def validate(value):
        if not is_valid_uuid(value):
            raise ValidationError(message)
    return validate
