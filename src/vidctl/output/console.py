"""Rich console and theme.

Renderers print into an in-memory console and return the text, so the
caller decides where it goes. Rich drops color codes when the output is
not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from vidctl.domain.phases import Phase

# Phases grouped by how far along the pipeline they are.
PHASE_GROUPS: dict[str, tuple[Phase, ...]] = {
    "early": (Phase.IDEAS, Phase.STARTED),
    "active": (Phase.MATERIAL_DONE, Phase.EDIT_REQUESTED, Phase.PUBLISH_PENDING),
    "done": (Phase.PUBLISHED,),
    "held": (Phase.DELAYED, Phase.SPONSORED_BLOCKED),
}

_GROUP_COLORS = {"early": "blue", "active": "yellow", "done": "green", "held": "red"}

VID_THEME = Theme(
    {
        "vid.ok": "bold green",
        "vid.error": "bold red",
        "vid.warning": "bold yellow",
        "vid.op": "bold cyan",
        "vid.key": "dim",
        "vid.name": "bold",
        "vid.path": "dim",
        **{f"vid.phase.{group}": color for group, color in _GROUP_COLORS.items()},
    }
)

_PHASE_STYLES = {
    phase.value: f"vid.phase.{group}" for group, phases in PHASE_GROUPS.items() for phase in phases
}


def create_console(*, width: int = 120) -> Console:
    return Console(file=StringIO(), theme=VID_THEME, highlight=False, width=width)


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_phase(phase: str) -> str:
    """Theme style for a phase value; empty for anything unrecognised."""
    return _PHASE_STYLES.get(str(phase), "")
