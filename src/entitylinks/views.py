"""Show and index payload builders."""

from __future__ import annotations

from typing import Any, Iterable

from entitylinks.core.registry import TypeDescriptor
from entitylinks.core.resolver import LinkResolver


def show(
    resolver: LinkResolver,
    type_ref: TypeDescriptor | str,
    entity: Any,
    include: Iterable[TypeDescriptor | str] | None = None,
) -> dict[str, Any]:
    """Render one entity with its links as {"result": ..., "links": [...]}."""
    descriptor = resolver.registry.lookup(type_ref)
    result = resolver.renderer.render_for_output(descriptor, entity)
    links = resolver.resolve_by_data(descriptor, entity, whitelist=include) if descriptor.has_links else []
    return {
        "result": result.to_dict(),
        "links": [link.to_dict() for link in links],
    }


def index(
    resolver: LinkResolver,
    type_ref: TypeDescriptor | str,
    entities: list[Any],
    include: Iterable[TypeDescriptor | str] | None = None,
) -> dict[str, Any]:
    """Render a list of entities with the union of their links."""
    descriptor = resolver.registry.lookup(type_ref)
    results = [resolver.renderer.render_for_output(descriptor, e).to_dict() for e in entities]
    links = resolver.resolve_by_data(descriptor, list(entities), whitelist=include) if descriptor.has_links else []
    return {
        "result": results,
        "links": [link.to_dict() for link in links],
    }
