"""Reversible, type-bound obfuscation of integer ids."""

from __future__ import annotations

import logging
import zlib
from typing import Any

from hashids import Hashids

from entitylinks.core.errors import InvalidArgumentError, MalformedError, TypeMismatchError
from entitylinks.core.schema import CodecConfig

logger = logging.getLogger(__name__)

# Per-type salts are folded into 27 bits to keep hashes short
_TYPE_SALT_MASK = (1 << 27) - 1


def type_salt(type_name: str) -> int:
    """Derive the numeric salt mixed into every hash for a type."""
    return zlib.crc32(type_name.encode("utf-8")) & _TYPE_SALT_MASK


def _check_type_name(type_name: Any) -> str:
    if not isinstance(type_name, str) or not type_name:
        raise InvalidArgumentError(f"Type name must be a non-empty string: {type_name!r}")
    return type_name


def _check_id(id: Any) -> int:
    if isinstance(id, bool) or not isinstance(id, int):
        raise InvalidArgumentError(f"Id must be an integer: {id!r}")
    if id < 0:
        raise InvalidArgumentError(f"Id must be non-negative: {id}")
    return id


def _check_hashid(hashid: Any) -> str:
    if not isinstance(hashid, str):
        raise InvalidArgumentError(f"Encoded id must be a string: {hashid!r}")
    return hashid


class IdCodec:
    """
    Encodes (type, id) pairs into opaque strings and back.

    Each hash carries the id together with a salt derived from the type
    name, so a string encoded for one type fails to decode as another.

    One codec instance is shared by the resolver and render pipeline.
    configure() swaps the underlying encoder in place: the last call wins,
    and it is not safe to race against concurrent encode/decode traffic.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()
        self._hashids = self._build(self._config)

    @staticmethod
    def _build(config: CodecConfig) -> Hashids:
        return Hashids(salt=config.salt, min_length=config.min_length, alphabet=config.alphabet)

    @property
    def config(self) -> CodecConfig:
        return self._config

    def configure(
        self,
        salt: str | None = None,
        min_length: int | None = None,
        alphabet: str | None = None,
    ) -> None:
        """Rebuild the encoder with new settings; unspecified settings keep their value."""
        updates: dict[str, Any] = {}
        if salt is not None:
            updates["salt"] = salt
        if min_length is not None:
            updates["min_length"] = min_length
        if alphabet is not None:
            updates["alphabet"] = alphabet
        try:
            config = CodecConfig(**{**self._config.model_dump(), **updates})
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid codec settings: {e}") from e
        logger.info("Configuring id codec (min_length=%d)", config.min_length)
        self._hashids = self._build(config)
        self._config = config

    def type_salt(self, type_name: str) -> int:
        return type_salt(_check_type_name(type_name))

    def encode(self, type_name: str, id: int) -> str:
        """Encode a non-negative integer id for a type."""
        salt = self.type_salt(type_name)
        return self._hashids.encode(_check_id(id), salt)

    def decode(self, type_name: str, hashid: str) -> int:
        """
        Decode a string produced by encode() for the same type.

        Raises:
            MalformedError: the string is not a valid hash
            TypeMismatchError: the hash was encoded for another type
        """
        salt = self.type_salt(type_name)
        numbers = self._hashids.decode(_check_hashid(hashid))
        if not numbers:
            raise MalformedError(hashid)
        if len(numbers) != 2 or numbers[1] != salt:
            raise TypeMismatchError(hashid, type_name)
        return numbers[0]

    def decode_untyped(self, hashid: str) -> int:
        """Decode a hash without checking which type it was encoded for."""
        numbers = self._hashids.decode(_check_hashid(hashid))
        if not numbers:
            raise MalformedError(hashid)
        return numbers[0]

    def __repr__(self) -> str:
        return f"IdCodec(min_length={self._config.min_length})"
