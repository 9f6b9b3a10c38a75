"""DecodeSettings — one frozen object for CLI flags, env vars and TOML.

Sources, highest priority first:

1. keyword arguments (CLI flags; ``None`` means "not given")
2. ``SOUPDECODE_*`` environment variables (``__`` separates sections,
   e.g. ``SOUPDECODE_DECODE__MAX_DEPTH=16``)
3. the discovered ``soupdecode.toml``
4. defaults from :mod:`soupdecode.config.models`

Sections are deep-merged, so an env var can override one key of a
section the TOML file also sets.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)

from soupdecode.config.discovery import find_config
from soupdecode.config.models import DecodeConfig, OutputConfig, ParserConfig

# settings_customise_sources is a classmethod invoked from __init__, so the
# discovered file reaches it out of band.
_toml_file: ContextVar[Path | None] = ContextVar("_toml_file", default=None)


class DecodeSettings(BaseSettings):
    """Resolved settings for the soupdecode CLI and DecodeService.

    Attributes:
        config_path: The TOML file that was loaded, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SOUPDECODE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    parser: ParserConfig = Field(default_factory=ParserConfig)
    decode: DecodeConfig = Field(default_factory=DecodeConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_file = _toml_file.get()
        if toml_file is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_file))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> DecodeSettings:
        """Build settings for one CLI invocation.

        Args:
            config_path: ``--config`` value; must exist when given.
            start: Directory the ``soupdecode.toml`` walk-up starts from
                (defaults to the working directory).
            **overrides: Flag values and section dicts; ``None`` entries
                are dropped so lower-priority sources still apply.

        Raises:
            click.ClickException: Missing ``--config`` file or invalid TOML.
        """
        toml_file = find_config(start, explicit=config_path)
        given = {key: value for key, value in overrides.items() if value is not None}

        token = _toml_file.set(toml_file)
        try:
            return cls(config_path=toml_file, **given)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_file}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _toml_file.reset(token)
