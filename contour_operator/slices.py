"""Small helpers for membership tests and filtering of plain sequences."""

from collections.abc import Iterable


def remove_string(items: Iterable[str] | None, s: str) -> list[str]:
    """Return a new list holding every item of ``items`` that is not equal to ``s``."""
    if items is None:
        return []
    return [item for item in items if item != s]


def contains_string(items: Iterable[str] | None, s: str) -> bool:
    """Return True if ``items`` contains the string ``s``."""
    if items is None:
        return False
    return s in items


def contains_int32(items: Iterable[int] | None, i: int) -> bool:
    """Return True if ``items`` contains the integer ``i``."""
    if items is None:
        return False
    return i in items