"""Codec configuration loading.

Reads the `codec:` section of a YAML file if present; environment
variables override file values.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from entitylinks.core.errors import InvalidArgumentError
from entitylinks.core.schema import CodecConfig

DEFAULT_CONFIG = "entitylinks.yml"

_ENV_MAP = {
    "ENTITYLINKS_SALT": "salt",
    "ENTITYLINKS_MIN_LENGTH": "min_length",
    "ENTITYLINKS_ALPHABET": "alphabet",
}


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> CodecConfig:
    """Load codec settings from YAML, then apply environment overrides."""
    path = Path(path or DEFAULT_CONFIG)
    environ = os.environ if environ is None else environ
    kwargs: dict[str, Any] = {}

    if path.exists():
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        section = data.get("codec") if isinstance(data, dict) else None
        if section is not None and not isinstance(section, dict):
            raise InvalidArgumentError(f"{path}: 'codec' must be a mapping")
        kwargs.update(section or {})

    for env_key, config_key in _ENV_MAP.items():
        val = environ.get(env_key)
        if val is not None:
            kwargs[config_key] = val

    try:
        return CodecConfig(**kwargs)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid codec configuration: {e}") from e
