"""Registry of entity types and their fetch/render/link behavior."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Union

from entitylinks.core.errors import DuplicateTypeError, InvalidArgumentError, UnknownTypeError

FetchFn = Callable[[Any], Any]
RenderFn = Callable[[Any], dict[str, Any]]
LinkSpecFn = Callable[[Any], Mapping[Union["TypeDescriptor", str], Any]]


@dataclass(frozen=True, eq=False)
class TypeDescriptor:
    """
    Fetch, render and link behavior for one entity type.

    The name is the identifier used for include lists, id hashing and
    output records. Descriptors compare by identity; the registry
    guarantees one descriptor per name.
    """

    name: str
    fetch_by_id: FetchFn | None
    render: RenderFn
    link_spec: LinkSpecFn | None = None

    @property
    def has_links(self) -> bool:
        return self.link_spec is not None

    def fetch(self, id: Any) -> Any:
        """Fetch an entity by id, or None if this type cannot be fetched."""
        if self.fetch_by_id is None:
            return None
        return self.fetch_by_id(id)

    def links(self, entity: Any) -> Mapping[TypeDescriptor | str, Any]:
        """Return the raw link map for an entity (empty when no link spec)."""
        if self.link_spec is None:
            return {}
        return self.link_spec(entity) or {}

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.name!r}, links={self.has_links})"


class TypeRegistry:
    """
    Registry of entity types, keyed by name.

    Populated once at start-up; lookups afterwards are read-only and
    safe to share between threads.
    """

    def __init__(self, descriptors: list[TypeDescriptor] | None = None) -> None:
        self._types: dict[str, TypeDescriptor] = {}
        for descriptor in descriptors or []:
            self.add(descriptor)

    def register(
        self,
        name: str,
        fetch_by_id: FetchFn | None,
        render: RenderFn,
        link_spec: LinkSpecFn | None = None,
    ) -> TypeDescriptor:
        """Create and register a descriptor for a type."""
        return self.add(TypeDescriptor(name, fetch_by_id, render, link_spec))

    def add(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Register a pre-built descriptor."""
        if not isinstance(descriptor.name, str) or not descriptor.name:
            raise InvalidArgumentError(f"Type name must be a non-empty string: {descriptor.name!r}")
        if descriptor.name in self._types:
            raise DuplicateTypeError(descriptor.name)
        self._types[descriptor.name] = descriptor
        return descriptor

    def lookup(self, type_ref: TypeDescriptor | str) -> TypeDescriptor:
        """Get a descriptor by name or handle, raising if not registered."""
        name = type_ref.name if isinstance(type_ref, TypeDescriptor) else type_ref
        descriptor = self.get(name) if isinstance(name, str) else None
        if descriptor is None:
            raise UnknownTypeError(name)
        if isinstance(type_ref, TypeDescriptor) and type_ref is not descriptor:
            raise UnknownTypeError(name, f"Descriptor for {name!r} is not the registered one")
        return descriptor

    def get(self, name: str) -> TypeDescriptor | None:
        return self._types.get(name)

    def names(self) -> list[str]:
        """Registered type names, in registration order."""
        return list(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._types.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, TypeDescriptor):
            return self._types.get(item.name) is item
        return isinstance(item, str) and item in self._types
