"""Parsing of the `include` request parameter."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from entitylinks.core.errors import InvalidArgumentError, UnknownTypeError

INCLUDE_PARAM = "include"


def include_param_specified(params: Mapping[str, Any]) -> bool:
    """True if the include parameter was given at all, even empty."""
    return INCLUDE_PARAM in params


def parse_include(value: str, valid: Iterable[str]) -> list[str]:
    """
    Split a comma-separated include string into type names.

    Whitespace is trimmed, empty segments dropped and duplicates removed
    keeping the first occurrence.

    Raises:
        UnknownTypeError: a token is not one of the valid names
    """
    valid_names = set(valid)
    tokens: list[str] = []
    for segment in value.split(","):
        token = segment.strip()
        if not token or token in tokens:
            continue
        if token not in valid_names:
            raise UnknownTypeError(token, f"Unknown include type: {token!r}")
        tokens.append(token)
    return tokens


def fetch_include(params: Mapping[str, Any], valid: Iterable[str]) -> list[str] | None:
    """
    Read the include list from request parameters.

    Returns None when the parameter is absent (include everything) and an
    empty list when it is present but empty (include nothing).
    """
    if not include_param_specified(params):
        return None
    value = params[INCLUDE_PARAM]
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgumentError(f"include parameter must be a string, got {type(value).__name__}")
    return parse_include(value, valid)
