"""Field-level completion rules used to derive stage counters.

Each stage lists the item fields that contribute to it, together with
the criterion a field must meet to count as complete. The calculator
only produces counters; explicit ``done`` flags on a stage are kept.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from vidctl.domain.stages import STAGE_ORDER, Stage, StageState

if TYPE_CHECKING:
    from vidctl.domain.item import Item


class Criterion(StrEnum):
    """How a single field is judged complete."""

    FILLED = "filled"
    TRUE = "true"
    FALSE = "false"
    EMPTY = "empty"
    NO_FIXME = "no_fixme"
    SPONSOR = "sponsor"


STAGE_FIELDS: dict[Stage, tuple[tuple[str, Criterion], ...]] = {
    Stage.INITIATION: (
        ("project_name", Criterion.FILLED),
        ("project_url", Criterion.FILLED),
        ("sponsorship.amount", Criterion.FILLED),
        ("sponsorship.emails", Criterion.SPONSOR),
        ("sponsorship.blocked", Criterion.EMPTY),
        ("date", Criterion.FILLED),
        ("delayed", Criterion.FALSE),
        ("gist", Criterion.FILLED),
    ),
    Stage.MATERIAL: (
        ("code", Criterion.TRUE),
        ("head", Criterion.TRUE),
        ("screen", Criterion.TRUE),
        ("related_videos", Criterion.FILLED),
        ("thumbnails", Criterion.TRUE),
        ("diagrams", Criterion.TRUE),
        ("screenshots", Criterion.TRUE),
        ("location", Criterion.FILLED),
        ("tagline", Criterion.FILLED),
        ("tagline_ideas", Criterion.FILLED),
        ("other_logos", Criterion.FILLED),
    ),
    Stage.DEFINITION: (
        ("title", Criterion.FILLED),
        ("description", Criterion.FILLED),
        ("highlight", Criterion.FILLED),
        ("tags", Criterion.FILLED),
        ("description_tags", Criterion.FILLED),
        ("tweet", Criterion.FILLED),
        ("animations", Criterion.FILLED),
    ),
    Stage.EDIT: (
        ("thumbnail", Criterion.FILLED),
        ("members", Criterion.FILLED),
        ("request_edit", Criterion.TRUE),
        ("timecodes", Criterion.NO_FIXME),
        ("movie", Criterion.TRUE),
        ("slides", Criterion.TRUE),
    ),
    Stage.PUBLISH: (
        ("upload_video", Criterion.FILLED),
        ("video_id", Criterion.FILLED),
        ("hugo_path", Criterion.FILLED),
    ),
}

# Sponsorship amounts that mean "no sponsor".
_NO_SPONSOR = frozenset({"", "N/A", "-"})


def _resolve(item: Item, field_path: str) -> Any:
    value: Any = item
    for part in field_path.split("."):
        value = getattr(value, part)
    return value


def _is_filled(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        return bool(stripped) and stripped != "-"
    return False


def is_field_complete(item: Item, field_path: str, criterion: Criterion) -> bool:
    """Check one field of *item* against *criterion*."""
    value = _resolve(item, field_path)
    if criterion is Criterion.FILLED:
        return _is_filled(value)
    if criterion is Criterion.TRUE:
        return value is True
    if criterion is Criterion.FALSE:
        return value is False
    if criterion is Criterion.EMPTY:
        if isinstance(value, bool):
            return not value
        return not str(value).strip()
    if criterion is Criterion.NO_FIXME:
        return isinstance(value, str) and bool(value.strip()) and "FIXME:" not in value
    # SPONSOR: nothing to do unless the item is actually sponsored
    if item.sponsorship.amount.strip() in _NO_SPONSOR:
        return True
    return _is_filled(value)


def stage_completion(item: Item, stage: Stage) -> tuple[int, int]:
    """Return ``(completed, total)`` for *stage* of *item*."""
    fields = STAGE_FIELDS[stage]
    completed = sum(1 for path, criterion in fields if is_field_complete(item, path, criterion))
    return completed, len(fields)


def with_computed_stages(item: Item) -> Item:
    """Return a copy of *item* with every stage counter recomputed."""
    changes: dict[str, StageState] = {}
    for stage in STAGE_ORDER:
        completed, total = stage_completion(item, stage)
        current = item.stage(stage)
        changes[stage.value] = current.model_copy(update={"completed": completed, "total": total})
    return item.model_copy(update=changes)
