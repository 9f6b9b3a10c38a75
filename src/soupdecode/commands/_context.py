"""AppContext — per-invocation state shared by all subcommands.

The root group builds one from the resolved settings; commands receive it
with ``@click.pass_obj``, run a service call, and hand the result to
:meth:`AppContext.emit`.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

import click

from soupdecode.config.logging import configure_logging
from soupdecode.output.formatters import OutputSettings, format_result
from soupdecode.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from soupdecode.config.settings import DecodeSettings
    from soupdecode.services.decode import DecodeService
    from soupdecode.services.result import ServiceResult


class AppContext:
    """Settings, services and output routing for one CLI run."""

    def __init__(self, settings: DecodeSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @functools.cached_property
    def decoder(self) -> DecodeService:
        """DecodeService bound to these settings (built on first use)."""
        from soupdecode.services.decode import DecodeService

        return DecodeService(self.settings)

    @functools.cached_property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            indent=self.settings.output.indent,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Successful results go to stdout, with any warnings on stderr
        (JSON output already carries them).  Failed results go to stderr
        and end the process with exit code 1.
        """
        text = format_result(result, settings=self.output_settings)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if self.output_settings.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
