"""Command: decode an HTML document into a schema type."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from soupdecode.commands._base import SoupCommand

if TYPE_CHECKING:
    from soupdecode.commands._context import AppContext


@click.command(
    cls=SoupCommand,
    examples="""\
  soupdecode decode page.html --schema myapp.models:Page
  soupdecode --json decode page.html -s myapp.models:Page
  soupdecode -v decode page.html -s myapp.models:Catalog.Entry""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-s",
    "--schema",
    required=True,
    help="Destination type as 'module:Class' (must be importable).",
)
@click.pass_obj
def decode(app: AppContext, file: Path, schema: str) -> None:
    """Decode FILE into an instance of SCHEMA and print it."""
    app.emit(app.decoder.decode_file(file, schema))
