"""Pick an output mode for a ServiceResult.

``--json`` wins over ``--quiet``, which wins over the default Rich view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vidctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from vidctl.config.settings import VidSettings
    from vidctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False

    @classmethod
    def from_settings(cls, settings: VidSettings) -> OutputSettings:
        return cls(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )


def format_json(result: ServiceResult) -> str:
    """The result as indented JSON; items and phases serialize as plain values."""
    return result.model_dump_json(indent=2)


def format_result(result: ServiceResult, settings: OutputSettings | None = None) -> str:
    settings = settings or OutputSettings()
    if settings.json_output:
        return format_json(result)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
