"""Link resolution: discover, fetch and render every linked entity."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, Mapping

from entitylinks.core.codec import IdCodec
from entitylinks.core.identity import Identity, extract_id, is_primitive_id, is_record
from entitylinks.core.normalizer import Whitelist, normalize, normalize_whitelist
from entitylinks.core.registry import TypeDescriptor, TypeRegistry
from entitylinks.core.render import LinkRecord, RenderPipeline

logger = logging.getLogger(__name__)

TypeRef = TypeDescriptor | str
Visited = set[tuple[str, Identity]]
Include = Iterable[TypeRef] | None


class Lazy:
    """
    A deferred link target.

    Wraps a zero-argument function whose result is any regular link
    target. Any callable target is treated as deferred; Lazy just makes
    the intent explicit at the declaration site.
    """

    def __init__(self, fn: Callable[[], Any]) -> None:
        self._fn = fn

    def __call__(self) -> Any:
        return self._fn()

    def __repr__(self) -> str:
        return f"Lazy({getattr(self._fn, '__name__', self._fn)!r})"


def is_deferred(target: Any) -> bool:
    return callable(target)


def _as_list(target: Any) -> list[Any]:
    if target is None:
        return []
    if isinstance(target, (list, tuple, set, frozenset)):
        return list(target)
    return [target]


def _is_visited(visited: Visited, key: tuple[str, Any]) -> bool:
    try:
        return key in visited
    except TypeError:
        # Unhashable ids can never be expanded
        return True


class LinkResolver:
    """
    Resolves the linked entities of a root entity.

    Starting from a root given by id or by data, walks the declared links
    depth-first, fetching and rendering each reachable entity once. A
    visited set of (type, id) pairs bounds the walk on cyclic graphs.

    Include lists control which linked types are followed:
    None follows every eager link and never evaluates lazy ones, an empty
    list follows nothing, and a populated list follows only the named
    types, evaluating their lazy links.

    Each top-level call builds its own visited set, so one resolver can
    serve concurrent callers.
    """

    def __init__(self, registry: TypeRegistry, codec: IdCodec) -> None:
        self._registry = registry
        self._renderer = RenderPipeline(codec)

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def renderer(self) -> RenderPipeline:
        return self._renderer

    def resolve(self, type_ref: TypeRef, data_or_ids: Any, whitelist: Include = None) -> list[LinkRecord]:
        """
        Resolve links for ids or data, picking the entry point by shape.

        Accepts a single id, a list of ids, a single entity or a list of
        entities. Anything else resolves to no links.
        """
        if is_primitive_id(data_or_ids) or isinstance(data_or_ids, tuple):
            return self.resolve_by_id(type_ref, data_or_ids, whitelist=whitelist)
        if isinstance(data_or_ids, list):
            if all(is_primitive_id(item) for item in data_or_ids):
                return self.resolve_by_id(type_ref, data_or_ids, whitelist=whitelist)
            if all(is_record(item) for item in data_or_ids):
                return self.resolve_by_data(type_ref, data_or_ids, whitelist=whitelist)
            return []
        if is_record(data_or_ids):
            return self.resolve_by_data(type_ref, data_or_ids, whitelist=whitelist)
        return []

    def resolve_by_id(
        self,
        type_ref: TypeRef,
        id: Any,
        visited: Visited | None = None,
        whitelist: Include = None,
    ) -> list[LinkRecord]:
        """
        Fetch a root entity by id and resolve its links.

        A list resolves each id from its own copy of the visited set. A
        (key, value) tuple is a single composite id.
        """
        descriptor = self._registry.lookup(type_ref)
        allowed = normalize_whitelist(whitelist)
        visited = set() if visited is None else visited

        if id is None:
            return []

        if isinstance(id, list):
            return normalize(
                [self.resolve_by_id(descriptor, item, set(visited), allowed) for item in id],
                allowed,
            )

        if _is_visited(visited, (descriptor.name, id)):
            return []

        entity = descriptor.fetch(id)
        if entity is None:
            logger.debug("No %s found for id %r", descriptor.name, id)
            return []

        return normalize(self.resolve_by_data(descriptor, entity, visited, allowed), allowed)

    def resolve_by_data(
        self,
        type_ref: TypeRef,
        data: Any,
        visited: Visited | None = None,
        whitelist: Include = None,
    ) -> list[LinkRecord]:
        """Resolve the links of an already-fetched entity (or list of entities)."""
        descriptor = self._registry.lookup(type_ref)
        allowed = normalize_whitelist(whitelist)
        visited = set() if visited is None else visited

        if data is None:
            return []

        if isinstance(data, list):
            return normalize(
                [self.resolve_by_data(descriptor, item, set(visited), allowed) for item in data],
                allowed,
            )

        pending = self._expand(descriptor, data, visited, allowed)
        if pending is None:
            return []

        # One pending-link iterator per expanded entity, deepest last
        results: list[LinkRecord] = []
        stack = [pending]
        while stack:
            step = next(stack[-1], None)
            if step is None:
                stack.pop()
                continue
            linked, value = step
            entity = self._materialize(linked, value, visited)
            if entity is None:
                continue
            results.append(self._renderer.render_for_output(linked, entity))
            children = self._expand(linked, entity, visited, allowed)
            if children is not None:
                stack.append(children)

        return normalize(results, allowed)

    def _expand(
        self,
        descriptor: TypeDescriptor,
        data: Any,
        visited: Visited,
        allowed: Whitelist,
    ) -> Iterator[tuple[TypeDescriptor, Any]] | None:
        """Mark an entity visited and return its links to follow; None if it cannot be expanded."""
        if not is_record(data):
            return None

        id = extract_id(data)
        if id is None:
            return None

        key = (descriptor.name, id)
        if key in visited:
            return None
        visited.add(key)

        pairs = self.filter_and_evaluate_links(descriptor.links(data), allowed)
        return iter([(linked, value) for linked, target in pairs for value in _as_list(target)])

    def filter_and_evaluate_links(
        self,
        link_map: Mapping[TypeRef, Any],
        whitelist: Include = None,
    ) -> list[tuple[TypeDescriptor, Any]]:
        """
        Apply the include policy to a raw link map.

        Returns (descriptor, target) pairs to follow. Lazy targets are
        evaluated here, and only for explicitly included types.
        """
        allowed = normalize_whitelist(whitelist)
        if allowed is not None and not allowed:
            return []

        pairs: list[tuple[TypeDescriptor, Any]] = []
        for type_ref, target in link_map.items():
            linked = self._registry.lookup(type_ref)
            if allowed is None:
                if is_deferred(target):
                    logger.debug("Skipping lazy %s link (not included)", linked.name)
                    continue
                pairs.append((linked, target))
            elif linked.name in allowed:
                if is_deferred(target):
                    logger.debug("Evaluating lazy %s link", linked.name)
                    target = target()
                pairs.append((linked, target))
        return pairs

    def resolve_single_link(
        self,
        type_ref: TypeRef,
        id_or_entity: Any,
        visited: Visited,
    ) -> LinkRecord | None:
        """Render one linked entity, given by id or data, unless already visited."""
        descriptor = self._registry.lookup(type_ref)
        entity = self._materialize(descriptor, id_or_entity, visited)
        if entity is None:
            return None
        return self._renderer.render_for_output(descriptor, entity)

    def _materialize(self, descriptor: TypeDescriptor, id_or_entity: Any, visited: Visited) -> Any:
        """Return the linked entity, fetching it if given by id; None if visited or missing."""
        if is_primitive_id(id_or_entity):
            if _is_visited(visited, (descriptor.name, id_or_entity)):
                return None
            entity = descriptor.fetch(id_or_entity)
            if entity is None:
                logger.debug("Linked %s %r not found", descriptor.name, id_or_entity)
            return entity

        id = extract_id(id_or_entity)
        if id is None or _is_visited(visited, (descriptor.name, id)):
            return None
        return id_or_entity
