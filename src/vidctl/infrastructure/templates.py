"""Starter script rendering.

The packaged ``script.md.j2`` lays out the usual video sections with
``FIXME:`` markers. A workspace can replace it by dropping its own
``script.md.j2`` into ``.vidctl/templates/script/`` or ``.vidctl/templates/``.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

SCRIPT_TEMPLATE = "script.md.j2"
OVERRIDE_DIR = Path(".vidctl") / "templates"


def _environment(workspace_root: Path | None) -> Environment:
    search: list[str] = []
    if workspace_root is not None:
        overrides = workspace_root / OVERRIDE_DIR
        search = [str(overrides / "script"), str(overrides)]
    loader = ChoiceLoader(
        [FileSystemLoader(search), PackageLoader("vidctl", "templates/script")]
    )
    return Environment(loader=loader, keep_trailing_newline=True, autoescape=False)


def render_starter_script(name: str, category: str, *, workspace_root: Path | None = None) -> str:
    template = _environment(workspace_root).get_template(SCRIPT_TEMPLATE)
    return template.render(name=name, category=category)
