"""Identifier normalization utilities.

User references reach this package in several shapes: a plain string,
an ObjectId-like scalar, a populated user document (mapping), or a
populated model object carrying the identifier as an attribute.
Centralizes the comparison so callers never compare raw fields directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# Checked in order on populated documents and model objects
ID_KEYS: tuple[str, ...] = ("_id", "id", "user_id", "userId")


def normalize_id(ref: Any) -> str | None:
    """Return the canonical string form of a user/resource reference.

    Returns None for a missing or empty reference.
    """
    if ref is None:
        return None

    if isinstance(ref, str):
        value = ref.strip()
        return value or None

    if isinstance(ref, bool):
        # bool is an int subclass; never a valid identifier
        return None

    if isinstance(ref, int):
        return str(ref)

    if isinstance(ref, Mapping):
        for key in ID_KEYS:
            value = normalize_id(ref.get(key))
            if value is not None:
                return value
        return None

    has_id_attr = False
    for key in ID_KEYS:
        inner = getattr(ref, key, None)
        if inner is not None and inner is not ref:
            has_id_attr = True
            value = normalize_id(inner)
            if value is not None:
                return value
    if has_id_attr:
        return None

    # ObjectId and similar scalars stringify to their canonical form
    value = str(ref).strip()
    return value or None


def same_id(a: Any, b: Any) -> bool:
    """Check whether two references point to the same identifier."""
    left = normalize_id(a)
    if left is None:
        return False
    return left == normalize_id(b)
