"""In-memory Rich consoles for rendering results to text.

Renderers print into a StringIO-backed Console and return the captured
text; the CLI decides whether it goes to stdout or stderr.  Rich emits no
ANSI codes when the buffer is not a terminal, so captured text is plain.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

SOUP_THEME = Theme(
    {
        "soup.ok": "bold green",
        "soup.error": "bold red",
        "soup.op": "bold cyan",
        "soup.key": "dim",
        "soup.reason": "bold yellow",
        "soup.selector": "magenta",
        "soup.tag": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """A themed Console writing to a fresh StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SOUP_THEME,
        width=width or DEFAULT_WIDTH,
        no_color=no_color,
        highlight=False,
    )


def get_output(console: Console) -> str:
    """Text captured by a Console from :func:`create_console`.

    Raises:
        TypeError: If the console does not write to a StringIO buffer.
    """
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console is not backed by a StringIO buffer"
        raise TypeError(msg)
    return buffer.getvalue()
