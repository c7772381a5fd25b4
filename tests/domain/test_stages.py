"""Tests for StageState completion semantics."""

from __future__ import annotations

import pytest

from vidctl.domain.stages import STAGE_ORDER, Stage, StageState


class TestStageOrder:
    def test_fixed_order(self) -> None:
        assert [s.value for s in STAGE_ORDER] == [
            "initiation",
            "material",
            "definition",
            "edit",
            "publish",
        ]

    def test_every_stage_ordered(self) -> None:
        assert set(STAGE_ORDER) == set(Stage)


class TestStageStateIsDone:
    def test_default_not_done(self) -> None:
        assert StageState().is_done is False

    def test_counter_complete(self) -> None:
        assert StageState(completed=3, total=3).is_done is True

    def test_counter_incomplete(self) -> None:
        assert StageState(completed=2, total=3).is_done is False

    @pytest.mark.parametrize(
        ("completed", "total"),
        [(0, 0), (-1, -1), (5, 3), (-1, 3)],
    )
    def test_malformed_counter_not_done(self, completed: int, total: int) -> None:
        assert StageState(completed=completed, total=total).is_done is False

    def test_explicit_done_wins_over_counter(self) -> None:
        assert StageState(completed=0, total=4, done=True).is_done is True
        assert StageState(completed=4, total=4, done=False).is_done is False

    def test_frozen(self) -> None:
        state = StageState()
        with pytest.raises(Exception):
            state.completed = 1  # type: ignore[misc]
