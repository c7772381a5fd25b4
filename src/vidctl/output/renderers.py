"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic_core import to_jsonable_python
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vidctl.domain.item import Item
from vidctl.domain.phases import PHASE_LABELS, Phase
from vidctl.domain.stages import STAGE_ORDER
from vidctl.output.console import create_console, get_output, style_for_phase

if TYPE_CHECKING:
    from rich.console import Console

    from vidctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(f"{i.category}/{i.name}" for i in items if isinstance(i, Item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _phase_text(phase: Any) -> Text:
    try:
        label = PHASE_LABELS[Phase(phase)]
    except ValueError:
        label = str(phase)
    return Text(label, style=style_for_phase(str(phase)))


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="vid.ok")
    op = Text(f"  {result.op}", style="vid.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="vid.key")
    if key == "phase":
        v = _phase_text(value)
    elif key in ("path", "script"):
        v = Text(str(value), style="vid.path")
    elif key == "name":
        v = Text(str(value), style="vid.name")
    elif isinstance(value, (dict, list)):
        v = Text(str(to_jsonable_python(value)))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    outcome = span_data.get("outcome")
    if outcome in ("failed", "raised"):
        line += f"  [vid.error]{outcome}[/vid.error]"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="vid.error")
    op = Text(f"  {result.op}", style="vid.op")
    code = Text(f" [{err.code}]", style="dim") if err else Text("")
    console.print(label, op, code, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/update/delete/move/notify/upload results."""
    _status_line(console, result)
    keys = (
        "name",
        "category",
        "previous_category",
        "path",
        "script",
        "created",
        "phase",
        "removed",
        "channel",
        "video_id",
    )
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key])


# ── Item renderers ────────────────────────────────────────────────────


def _render_item(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single item as a panel with stage progress."""
    item: Item = result.data["item"]
    stages = Table(show_header=True, pad_edge=False, expand=False, box=None)
    stages.add_column("Stage")
    stages.add_column("Progress", justify="right")
    stages.add_column("Done")
    for stage in STAGE_ORDER:
        state = item.stage(stage)
        stages.add_row(
            stage.value.title(),
            f"{state.completed}/{state.total}",
            Text("yes", style="vid.ok") if state.is_done else Text("no", style="dim"),
        )

    console.print(
        Panel(
            stages,
            title=f"{item.category} / {item.name}",
            subtitle=_phase_text(result.data.get("phase", "")),
            expand=False,
        )
    )
    for key in ("title", "date", "video_id", "path"):
        value = result.data.get(key) if key == "path" else getattr(item, key)
        if value:
            _field(console, key, value)
    if item.delayed:
        _field(console, "delayed", True)
    if item.sponsorship_blocked:
        _field(console, "blocked", item.sponsorship.blocked)


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_by_phase results as a table."""
    items: list[Item] = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="vid.name")
    table.add_column("Category")
    table.add_column("Date")
    table.add_column("Title")
    if verbose:
        table.add_column("Path", style="vid.path")
    for item in items:
        row = [item.name, item.category, item.date or "-", item.title]
        if verbose:
            row.append(item.path or "")
        table.add_row(*row)
    console.print(table)
    phase = result.data.get("phase", "")
    console.print(Text(f"\n{len(items)} items in "), _phase_text(phase), end="")
    console.print()


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_counts(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render per-phase counts."""
    counts: dict[str, int] = result.data.get("counts", {})
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Phase")
    table.add_column("Items", justify="right")
    for phase in Phase:
        table.add_row(_phase_text(phase), str(counts.get(phase.value, 0)))
    console.print(table)
    console.print(f"\n{result.data.get('total', 0)} items")
    skipped = result.data.get("skipped", 0)
    if skipped:
        console.print(Text(f"{skipped} unreadable documents skipped", style="vid.warning"))


def _render_categories(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for category in result.data.get("categories", []):
        line = Text(f"  {category['name']}", style="vid.name")
        if verbose:
            line.append(f"  {category['path']}", style="vid.path")
        console.print(line)
    console.print(f"\n{result.data.get('count', 0)} categories")


def _render_reconcile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if d.get("consistent"):
        console.print(Text("Index and documents are consistent", style="vid.ok"))
        return
    for entry in d.get("missing_documents", []):
        console.print(
            Text("  missing document  ", style="vid.error"),
            Text(f"{entry['category']}/{entry['name']}  {entry['path']}"),
        )
    for path in d.get("unindexed_documents", []):
        console.print(Text("  not in index      ", style="vid.warning"), Text(path))
    for entry in d.get("duplicate_entries", []):
        console.print(
            Text("  duplicate entry   ", style="vid.warning"),
            Text(f"{entry['category']}/{entry['name']}"),
        )
    for entry in d.get("colliding_entries", []):
        console.print(
            Text("  collides          ", style="vid.error"),
            Text(f"{entry['category']}/{entry['name']} with {entry['collides_with']}"),
        )


def _render_refresh(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "phase", result.data.get("phase", ""))
    for stage, state in result.data.get("stages", {}).items():
        _field(console, stage, f"{state['completed']}/{state['total']}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "create": _render_mutation,
    "update": _render_mutation,
    "delete": _render_mutation,
    "move": _render_mutation,
    "notify": _render_mutation,
    "upload": _render_mutation,
    "get": _render_item,
    "refresh": _render_refresh,
    "list_by_phase": _render_item_table,
    "counts_by_phase": _render_counts,
    "list_categories": _render_categories,
    "reconcile": _render_reconcile,
}
