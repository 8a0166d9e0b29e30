"""
Identifier helpers.

Every entity is keyed by an opaque UUID string. Identifiers arriving from
the outside are checked here before any database round-trip, and every
ownership or membership comparison goes through ``same_id`` so a raw id,
a UUID and a loaded model compare the same way.
"""

import uuid
from typing import Any

from vidshare.exceptions import InvalidIdentifierError


def new_id() -> str:
    """Generate a fresh entity identifier."""
    return str(uuid.uuid4())


def is_valid_id(value: Any) -> bool:
    if value is None:
        return False
    try:
        uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return False
    return True


def parse_id(value: Any, resource_type: str = "Resource") -> str:
    """
    Validate an identifier and return its canonical string form.

    Raises:
        InvalidIdentifierError: if ``value`` is not a well-formed identifier
    """
    if not is_valid_id(value):
        raise InvalidIdentifierError(resource_type, value)
    return str(uuid.UUID(str(value)))


def identity_of(value: Any) -> str | None:
    """Reduce an id, UUID, or object with an ``id`` attribute to its id string."""
    if value is None:
        return None
    if hasattr(value, "id"):
        value = value.id
    if value is None:
        return None
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        return str(value)


def same_id(a: Any, b: Any) -> bool:
    """Canonical identity comparison used by every ownership check."""
    left = identity_of(a)
    return left is not None and left == identity_of(b)
