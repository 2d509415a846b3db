"""Core link-resolution engine: registry, codec, resolver and rendering."""

from entitylinks.core.codec import IdCodec
from entitylinks.core.errors import (
    DecodeError,
    DuplicateTypeError,
    EntityLinksError,
    InvalidArgumentError,
    MalformedError,
    TypeMismatchError,
    UnknownTypeError,
)
from entitylinks.core.identity import Identity, extract_id
from entitylinks.core.normalizer import normalize
from entitylinks.core.registry import TypeDescriptor, TypeRegistry
from entitylinks.core.render import LinkRecord, RenderPipeline
from entitylinks.core.resolver import Lazy, LinkResolver
from entitylinks.core.schema import CodecConfig

__all__ = [
    "CodecConfig",
    "DecodeError",
    "DuplicateTypeError",
    "EntityLinksError",
    "IdCodec",
    "Identity",
    "InvalidArgumentError",
    "Lazy",
    "LinkRecord",
    "LinkResolver",
    "MalformedError",
    "RenderPipeline",
    "TypeDescriptor",
    "TypeMismatchError",
    "TypeRegistry",
    "UnknownTypeError",
    "extract_id",
    "normalize",
]
