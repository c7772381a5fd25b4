"""Production stages and their completion predicate.

Five stages in fixed order. A stage is done either through an explicit
boolean or through a completed/total counter.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Stage(StrEnum):
    """Ordered production stages."""

    INITIATION = "initiation"
    MATERIAL = "material"
    DEFINITION = "definition"
    EDIT = "edit"
    PUBLISH = "publish"


STAGE_ORDER: tuple[Stage, ...] = (
    Stage.INITIATION,
    Stage.MATERIAL,
    Stage.DEFINITION,
    Stage.EDIT,
    Stage.PUBLISH,
)


class StageState(BaseModel):
    """Completion state of one stage.

    Attributes:
        completed: Number of completed tasks in the stage.
        total: Number of tasks in the stage.
        done: Explicit override. When set it wins over the counter.
    """

    model_config = {"frozen": True}

    completed: int = 0
    total: int = 0
    done: bool | None = None

    @property
    def is_done(self) -> bool:
        """Whether the stage counts as finished.

        Malformed counters (negative, or completed above total) are never done.
        """
        if self.done is not None:
            return self.done
        if self.total <= 0 or self.completed < 0:
            return False
        return self.completed == self.total
