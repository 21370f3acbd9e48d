from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def normalize_tag_name(raw: str) -> str:
    """Trim and lower-case a single tag name. May return an empty string."""
    return raw.strip().lower()


def normalize_tag_names(raw_tags: Iterable[str] | None) -> list[str]:
    """Normalize caller-supplied tags into the set that reaches storage.

    Each tag is trimmed and lower-cased; tags that are empty afterwards are
    dropped and repeats collapse to their first occurrence, so
    ``["Work", " work ", "WORK", " "]`` becomes ``["work"]``.
    """
    normalized: list[str] = []
    for tag in raw_tags or []:
        name = normalize_tag_name(tag)
        if name and name not in normalized:
            normalized.append(name)
    return normalized
