"""Pydantic schemas for codec settings and dataset validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_SALT = "1207:Rumi"
DEFAULT_MIN_LENGTH = 4
DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"


class CodecConfig(BaseModel):
    """Settings for the id obfuscation codec."""

    model_config = {"frozen": True}

    salt: str = DEFAULT_SALT
    min_length: int = Field(default=DEFAULT_MIN_LENGTH, ge=0)
    alphabet: str = DEFAULT_ALPHABET

    @field_validator("alphabet")
    @classmethod
    def check_alphabet(cls, v: str) -> str:
        """Hashids needs at least 16 distinct characters and no spaces."""
        if any(ch.isspace() for ch in v):
            raise ValueError("alphabet must not contain whitespace")
        if len(set(v)) < 16:
            raise ValueError("alphabet must contain at least 16 unique characters")
        return v


class LinkFieldSchema(BaseModel):
    """
    A link declared on a dataset type.

    The field holds a single id or a list of ids of the target type.
    Lazy links are only followed when the target type is explicitly included.
    """

    field: str
    lazy: bool = False


class TypeSchema(BaseModel):
    """Schema for one entity type in a dataset file."""

    records: list[dict[str, Any]] = Field(default_factory=list)
    # Rendered fields; None means every key except id
    fields: list[str] | None = None
    links: dict[str, LinkFieldSchema] = Field(default_factory=dict)

    @field_validator("links", mode="before")
    @classmethod
    def normalize_links(cls, v: Any) -> Any:
        """Accept the shorthand `{user: user_id}` for `{user: {field: user_id}}`."""
        if isinstance(v, dict):
            return {
                target: {"field": spec} if isinstance(spec, str) else spec
                for target, spec in v.items()
            }
        return v

    @field_validator("records")
    @classmethod
    def check_record_ids(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        seen: set[Any] = set()
        for record in v:
            record_id = record.get("id")
            if not isinstance(record_id, int) or isinstance(record_id, bool) or record_id < 0:
                raise ValueError(f"record id must be a non-negative integer: {record_id!r}")
            if record_id in seen:
                raise ValueError(f"duplicate record id: {record_id}")
            seen.add(record_id)
        return v


class DatasetSchema(BaseModel):
    """Top-level dataset file schema."""

    schema_version: str = "1.0"
    types: dict[str, TypeSchema] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_link_targets(self) -> DatasetSchema:
        """Every link must point at a declared type."""
        for name, type_schema in self.types.items():
            for target in type_schema.links:
                if target not in self.types:
                    raise ValueError(f"type {name!r} links to undeclared type {target!r}")
        return self
