"""Pick the output mode for a ServiceResult: JSON, quiet, or rich text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from soupdecode.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from soupdecode.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """The output-related slice of DecodeSettings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    indent: int = 2


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Text to print for *result*.

    ``json_output`` beats ``quiet``, which beats the rich renderer.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=settings.indent)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, indent=settings.indent)
