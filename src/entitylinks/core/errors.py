"""Exception hierarchy for entity link resolution."""

from __future__ import annotations


class EntityLinksError(Exception):
    """Base class for all entitylinks errors."""

    pass


class UnknownTypeError(EntityLinksError):
    """Raised when a type name is not registered or not recognized."""

    def __init__(self, name: object, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Unknown entity type: {name!r}")


class DuplicateTypeError(EntityLinksError):
    """Raised when a type name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Entity type already registered: {name!r}")


class InvalidArgumentError(EntityLinksError, ValueError):
    """Raised when a caller passes a value of the wrong shape (negative id, bad type name...)."""

    pass


class DecodeError(EntityLinksError):
    """Base class for hash decoding failures."""

    pass


class MalformedError(DecodeError):
    """Raised when a string does not decode at all."""

    def __init__(self, hashid: str) -> None:
        self.hashid = hashid
        super().__init__(f"Malformed id: {hashid!r}")


class TypeMismatchError(DecodeError):
    """Raised when a hash decodes but was encoded for a different type."""

    def __init__(self, hashid: str, expected_type: str) -> None:
        self.hashid = hashid
        self.expected_type = expected_type
        super().__init__(f"Id {hashid!r} does not belong to type {expected_type!r}")
