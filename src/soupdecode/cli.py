"""The ``soupdecode`` command group.

Global options are resolved into :class:`DecodeSettings` before any
subcommand runs.  An option left at its default is forwarded as ``None``
so ``SOUPDECODE_*`` variables and ``soupdecode.toml`` keep their say.
"""

from __future__ import annotations

import click

from soupdecode import __version__
from soupdecode.commands import register_commands
from soupdecode.commands._context import AppContext
from soupdecode.config.settings import DecodeSettings


def _flag(value: bool) -> bool | None:
    return True if value else None


def _positive(_ctx: click.Context, _param: click.Parameter, value: int | None) -> int | None:
    if value is not None and value < 1:
        raise click.BadParameter(f"{value} is not a positive depth")
    return value


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="soupdecode")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print bare values only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing spans.")
@click.option("--log-json", is_flag=True, help="Write log lines to stderr as JSON.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    metavar="PATH",
    help="Read settings from PATH instead of the discovered soupdecode.toml.",
)
@click.option(
    "--parser",
    "parser_backend",
    default=None,
    metavar="NAME",
    help="BeautifulSoup tree builder, e.g. html.parser, lxml, html5lib.",
)
@click.option(
    "--max-depth",
    type=int,
    default=None,
    callback=_positive,
    help="Nesting limit for recursive schemas.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    parser_backend: str | None,
    max_depth: int | None,
) -> None:
    """soupdecode: fill typed dataclasses from HTML with CSS selectors."""
    settings = DecodeSettings.from_cli(
        config_path=config_path,
        json_output=_flag(json_output),
        quiet=_flag(quiet),
        verbose=_flag(verbose),
        log_json=_flag(log_json),
        parser={"backend": parser_backend} if parser_backend else None,
        decode={"max_depth": max_depth} if max_depth is not None else None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
