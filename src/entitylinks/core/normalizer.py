"""Flattening, deduplication and include filtering of link results."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from entitylinks.core.errors import InvalidArgumentError
from entitylinks.core.registry import TypeDescriptor
from entitylinks.core.render import LinkRecord

# None: include every type. Empty: include nothing.
Whitelist = frozenset[str] | None


def normalize_whitelist(include: Iterable[TypeDescriptor | str] | None) -> Whitelist:
    """
    Turn a caller's include list into a set of type names.

    None stays None (include everything); an empty iterable becomes an
    empty set (include nothing).
    """
    if include is None:
        return None
    if isinstance(include, str):
        include = [include]
    return frozenset(t.name if isinstance(t, TypeDescriptor) else t for t in include)


def _flatten(results: Any) -> Iterator[LinkRecord]:
    if results is None:
        return
    if isinstance(results, LinkRecord):
        yield results
        return
    if not isinstance(results, (list, tuple)):
        raise InvalidArgumentError(f"Expected link records, got {type(results).__name__}")
    for item in results:
        yield from _flatten(item)


def normalize(results: Any, whitelist: Iterable[TypeDescriptor | str] | None = None) -> list[LinkRecord]:
    """
    Prepare a final list of link records.

    Flattens nested lists, drops None, keeps the first record per
    (type, id), then applies the include filter.
    """
    allowed = normalize_whitelist(whitelist)
    if allowed is not None and not allowed:
        return []

    seen: set[tuple[str, str]] = set()
    output: list[LinkRecord] = []
    for record in _flatten(results):
        if record.key in seen:
            continue
        seen.add(record.key)
        if allowed is not None and record.type not in allowed:
            continue
        output.append(record)
    return output
