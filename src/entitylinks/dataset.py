"""In-memory entity stores described in YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

import yaml

from entitylinks.core.errors import InvalidArgumentError
from entitylinks.core.registry import TypeRegistry
from entitylinks.core.resolver import Lazy
from entitylinks.core.schema import DatasetSchema, TypeSchema


class EntityType:
    """One entity type of a dataset: its records, rendered fields and links."""

    def __init__(self, name: str, schema: TypeSchema) -> None:
        self._name = name
        self._schema = schema
        self._records: dict[int, dict[str, Any]] = {r["id"]: r for r in schema.records}

    @property
    def name(self) -> str:
        return self._name

    @property
    def link_targets(self) -> list[str]:
        return list(self._schema.links)

    @property
    def lazy_targets(self) -> list[str]:
        return [target for target, link in self._schema.links.items() if link.lazy]

    def get(self, id: Any) -> dict[str, Any] | None:
        return self._records.get(id)

    def render(self, record: dict[str, Any]) -> dict[str, Any]:
        """Selected fields of a record; the id is carried by the link record."""
        if self._schema.fields is None:
            return {k: v for k, v in record.items() if k != "id"}
        return {k: record.get(k) for k in self._schema.fields}

    def links(self, record: dict[str, Any]) -> dict[str, Any]:
        """Link map for a record; lazy links read their field on evaluation."""
        result: dict[str, Any] = {}
        for target, link in self._schema.links.items():
            if link.lazy:
                result[target] = Lazy(lambda field=link.field: record.get(field))
            else:
                result[target] = record.get(link.field)
        return result

    def dangling_references(self, dataset: Dataset) -> list[str]:
        """Describe link field values that point at missing records."""
        problems = []
        for record in self._records.values():
            for target, link in self._schema.links.items():
                value = record.get(link.field)
                ids = value if isinstance(value, list) else [value]
                for id in ids:
                    if id is not None and dataset.get(target, id) is None:
                        problems.append(
                            f"{self._name} {record['id']}: {link.field} -> missing {target} {id}"
                        )
        return problems

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._records.values())

    def __repr__(self) -> str:
        return f"EntityType({self._name}, {len(self)} records, links={self.link_targets})"


class Dataset:
    """
    Collection of entity types loaded from a fixture file.

    Provides fetch/render/link callbacks so the resolver can run
    without a database.
    """

    def __init__(self, types: list[EntityType], schema_version: str = "1.0") -> None:
        self._types: dict[str, EntityType] = {t.name: t for t in types}
        self._schema_version = schema_version

    @classmethod
    def load(cls, path: str | Path) -> Dataset:
        """Load dataset from YAML file."""
        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Dataset:
        """Create dataset from dictionary."""
        if not isinstance(data, dict):
            raise InvalidArgumentError(f"Dataset must be a mapping, got {type(data).__name__}")
        schema = DatasetSchema(**data)
        types = [EntityType(name, t) for name, t in schema.types.items()]
        return cls(types, schema.schema_version)

    def get(self, type_name: str, id: Any) -> dict[str, Any] | None:
        entity_type = self._types.get(type_name)
        return entity_type.get(id) if entity_type else None

    def types(self) -> list[EntityType]:
        return list(self._types.values())

    def build_registry(self) -> TypeRegistry:
        """Register every dataset type, with links only where declared."""
        registry = TypeRegistry()
        for t in self._types.values():
            registry.register(t.name, t.get, t.render, t.links if t.link_targets else None)
        return registry

    def validate(self) -> list[str]:
        """Return messages for every dangling link (empty if consistent)."""
        errors: list[str] = []
        for t in self._types.values():
            errors.extend(t.dangling_references(self))
        return errors

    @property
    def schema_version(self) -> str:
        return self._schema_version

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[EntityType]:
        return iter(self._types.values())

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._types
