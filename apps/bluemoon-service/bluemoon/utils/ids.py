"""Helpers for resource identifiers taken from request paths."""
import uuid
from typing import Optional


def parse_id(value: str) -> Optional[uuid.UUID]:
    """Return the UUID for ``value`` or None when it is malformed."""
    if not value:
        return None
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None
