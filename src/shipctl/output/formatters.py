"""Output mode selection.

The CLI renders ServiceResult for humans (Rich tables and fields) or
machines (``--json``). ``--json`` wins over ``--quiet``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shipctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """The output flags resolved from global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    list_limit: int = 0


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON output is the serialized result; decimals become strings.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from shipctl.output.renderers import render_quiet, render_result

    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, list_limit=settings.list_limit)
