"""SoupCommand: a click Command with an on-demand ``--examples`` flag.

Sample invocations live on the command, not in its help text, so
``soupdecode decode --help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class SoupCommand(click.Command):
    """Command that prints *examples* and exits when given ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if not examples:
            return
        # Eager: handled before FILE and --schema are validated.
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                is_eager=True,
                expose_value=False,
                callback=self._print_examples,
                help="Print sample invocations and exit.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)
