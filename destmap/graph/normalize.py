"""Helpers for snapping user-supplied place names onto graph keys."""

from __future__ import annotations


def normalize_key(value: object) -> str:
    """Return the canonical graph key for `value`.

    Falsy input (``None``, ``""``, ``0``) maps to the empty string, which never
    matches a graph key and therefore marks the input as invalid.
    """
    if not value:
        return ""
    return str(value).strip().lower()
