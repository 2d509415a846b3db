"""Rendering of single entities into output records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from entitylinks.core.codec import IdCodec
from entitylinks.core.errors import InvalidArgumentError
from entitylinks.core.identity import extract_id
from entitylinks.core.registry import TypeDescriptor


@dataclass(frozen=True, eq=False)
class LinkRecord:
    """A rendered entity: its type, obfuscated id and rendered fields."""

    type: str
    id: str
    data: dict[str, Any]

    @property
    def key(self) -> tuple[str, str]:
        """Deduplication key."""
        return (self.type, self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "data": self.data,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkRecord):
            return NotImplemented
        return self.key == other.key and self.data == other.data

    def __hash__(self) -> int:
        return hash(self.key)


class RenderPipeline:
    """Wraps entities into {id, type, data} records using a shared codec."""

    def __init__(self, codec: IdCodec) -> None:
        self._codec = codec

    @property
    def codec(self) -> IdCodec:
        return self._codec

    def encode_id(self, descriptor: TypeDescriptor, id_or_entity: Any) -> str:
        """Hash an integer id, or the id of an entity, for a type."""
        id = id_or_entity if isinstance(id_or_entity, int) else extract_id(id_or_entity)
        return self._codec.encode(descriptor.name, id)

    def decode_id(self, descriptor: TypeDescriptor, hashid: str) -> int:
        return self._codec.decode(descriptor.name, hashid)

    def render_for_output(self, descriptor: TypeDescriptor, entity: Any) -> LinkRecord:
        """Render an entity of the given type as an output record."""
        id = extract_id(entity)
        if id is None:
            raise InvalidArgumentError(f"Cannot render {descriptor.name!r} entity without an id")
        return LinkRecord(
            type=descriptor.name,
            id=self._codec.encode(descriptor.name, id),
            data=descriptor.render(entity),
        )
