"""
Entitylinks - Linked-entity resolution for JSON APIs.

This package provides tools for:
- Registering entity types with fetch, render and link behavior
- Resolving every entity transitively linked from a root, once each
- Deferring expensive relationships until a caller includes them
- Obfuscating integer ids with type-bound reversible hashes
- Parsing include-list parameters
- Building show/index response payloads
"""

__version__ = "0.1.0"

from entitylinks.core.codec import IdCodec
from entitylinks.core.registry import TypeDescriptor, TypeRegistry
from entitylinks.core.render import LinkRecord
from entitylinks.core.resolver import Lazy, LinkResolver

__all__ = [
    "__version__",
    "IdCodec",
    "Lazy",
    "LinkRecord",
    "LinkResolver",
    "TypeDescriptor",
    "TypeRegistry",
]
