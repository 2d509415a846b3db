"""Identity extraction for entities of any shape."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any, Union

# An entity identity: a plain id, or a (key, value) pair for maps without one
Identity = Union[int, str, tuple[Any, Any]]


def is_primitive_id(value: Any) -> bool:
    """True for bare integer or string ids."""
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def is_record(value: Any) -> bool:
    """True for map-like entities and objects carrying an id attribute."""
    if isinstance(value, Mapping):
        return True
    if value is None or isinstance(value, (str, bytes, int, float)):
        return False
    return hasattr(value, "id")


def _identity_from_mapping(data: Mapping[Any, Any]) -> Any:
    if "id" in data:
        return data["id"]
    for key, value in data.items():
        return (key, value)
    return None


def extract_id(data: Any) -> Identity | None:
    """
    Find the identity of an entity.

    Mappings use their "id" key, falling back to their first (key, value)
    pair. Other objects use their id attribute. Bare ints and strings are
    their own identity. Returns None when no usable identity exists.
    """
    if isinstance(data, Mapping):
        identity = _identity_from_mapping(data)
    elif is_primitive_id(data):
        identity = data
    elif is_record(data):
        identity = getattr(data, "id")
    else:
        return None

    if identity is None or not isinstance(identity, Hashable):
        return None
    try:
        hash(identity)
    except TypeError:
        # Tuples holding unhashable values
        return None
    return identity
