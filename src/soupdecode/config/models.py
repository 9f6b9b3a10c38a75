"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, soupdecode.toml only contains
overrides.  An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from soupdecode.infrastructure.document import DEFAULT_PARSER
from soupdecode.services.walker import DEFAULT_MAX_DEPTH

# --- soupdecode.toml sections ---


class ParserConfig(BaseModel):
    """[parser] section."""

    model_config = {"frozen": True}

    backend: str = DEFAULT_PARSER


class DecodeConfig(BaseModel):
    """[decode] section."""

    model_config = {"frozen": True}

    max_depth: int = DEFAULT_MAX_DEPTH

    @field_validator("max_depth")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            msg = "max_depth must be at least 1"
            raise ValueError(msg)
        return value


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    indent: int = 2
