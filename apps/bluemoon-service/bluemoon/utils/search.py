"""Helpers for substring search with SQL ``LIKE``."""

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """Build a ``%term%`` pattern where ``%`` and ``_`` in ``term`` match literally.

    Use with ``column.ilike(contains_pattern(term), escape=LIKE_ESCAPE)``.
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
