"""Command: list the nodes a CSS selector matches."""

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
  soupdecode select page.html "#resources .resource .name"
  soupdecode -q select page.html "a[href]"
  soupdecode --json select page.html "table tr" """,
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("selector")
@click.pass_obj
def select(app: AppContext, file: Path, selector: str) -> None:
    """Show the nodes in FILE matched by SELECTOR."""
    app.emit(app.decoder.select(file, selector))
