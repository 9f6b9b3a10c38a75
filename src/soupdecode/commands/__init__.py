"""The ``decode`` and ``select`` subcommands.

Command modules are imported inside :func:`register_commands`, which
:mod:`soupdecode.cli` calls once the root group is defined.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    from soupdecode.commands.decode import decode
    from soupdecode.commands.select import select

    for command in (decode, select):
        cli.add_command(command)
