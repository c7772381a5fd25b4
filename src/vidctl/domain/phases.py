"""Phase classifier: maps stage state plus override flags to a lifecycle phase.

The normal path is derived from the longest prefix of finished stages
(see :data:`vidctl.domain.stages.STAGE_ORDER`). Two override phases can
preempt it:

1. ``SPONSORED_BLOCKED`` when the sponsorship carries a blocking reason.
2. ``DELAYED`` when the item is delayed and not yet fully published.

The classifier never mutates the item and has no error conditions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from vidctl.domain.stages import STAGE_ORDER

if TYPE_CHECKING:
    from vidctl.domain.item import Item


class Phase(StrEnum):
    """Externally reported lifecycle phases."""

    IDEAS = "ideas"
    STARTED = "started"
    MATERIAL_DONE = "material-done"
    EDIT_REQUESTED = "edit-requested"
    PUBLISH_PENDING = "publish-pending"
    PUBLISHED = "published"
    DELAYED = "delayed"
    SPONSORED_BLOCKED = "sponsored-blocked"


# Index == progress (number of leading finished stages).
NORMAL_PATH: tuple[Phase, ...] = (
    Phase.IDEAS,
    Phase.STARTED,
    Phase.MATERIAL_DONE,
    Phase.EDIT_REQUESTED,
    Phase.PUBLISH_PENDING,
    Phase.PUBLISHED,
)

OVERRIDE_PHASES: tuple[Phase, ...] = (Phase.DELAYED, Phase.SPONSORED_BLOCKED)

PHASE_LABELS: dict[Phase, str] = {
    Phase.IDEAS: "Ideas",
    Phase.STARTED: "Started",
    Phase.MATERIAL_DONE: "Material Done",
    Phase.EDIT_REQUESTED: "Edit Requested",
    Phase.PUBLISH_PENDING: "Publish Pending",
    Phase.PUBLISHED: "Published",
    Phase.DELAYED: "Delayed",
    Phase.SPONSORED_BLOCKED: "Sponsored Blocked",
}


def compute_progress(item: Item) -> int:
    """Count the leading finished stages, stopping at the first unfinished one."""
    progress = 0
    for stage in STAGE_ORDER:
        if not item.stage(stage).is_done:
            break
        progress += 1
    return progress


def compute_phase(item: Item) -> Phase:
    """Classify *item* into exactly one :class:`Phase`."""
    progress = compute_progress(item)
    if item.sponsorship_blocked:
        return Phase.SPONSORED_BLOCKED
    # A published item's delay flag is history, not an active state.
    if item.delayed and progress < len(STAGE_ORDER):
        return Phase.DELAYED
    return NORMAL_PATH[progress]
