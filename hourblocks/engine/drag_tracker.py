"""Drag-to-create gesture tracking for hourblocks.

A pointer-down over a day cell starts a gesture pinned to that project/week
row, pointer-enters on the same row add cells, and a global pointer-up ends
it. A gesture covering two or more cells becomes a pending block spanning
the min/max envelope of the visited cells; anything smaller is discarded.

    idle --down--> dragging --up(>=2 cells)--> pending_block --clear--> idle
                           \\--up(<2 cells)--> idle
"""

import logging
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence, Set

from pydantic import BaseModel, Field

from hourblocks.models.block import Block
from hourblocks.models.constants import DAYS_PER_WEEK, MIN_BLOCK_DAYS

logger = logging.getLogger(__name__)


class GestureState(str, Enum):
    """Gesture state machine states."""
    IDLE = "idle"
    DRAGGING = "dragging"
    PENDING_BLOCK = "pending_block"


class DragState(BaseModel):
    """Transient state between pointer-down and pointer-up."""

    project_id: str = Field(..., description="Project row the gesture started on")
    week_key: str = Field(..., description="Week row the gesture started on")
    day_indices: Set[int] = Field(default_factory=set, description="Column indices (0-6) touched so far")


class PendingBlock(BaseModel):
    """Contiguous column range proposed by a finished gesture."""

    project_id: str = Field(..., description="Project row of the gesture")
    week_key: str = Field(..., description="Week row of the gesture")
    start_index: int = Field(..., ge=0, lt=DAYS_PER_WEEK, description="First column (inclusive)")
    end_index: int = Field(..., ge=0, lt=DAYS_PER_WEEK, description="Last column (inclusive)")

    def indices(self) -> List[int]:
        return list(range(self.start_index, self.end_index + 1))

    def to_block(self, days: Sequence[date]) -> Block:
        """Resolve the column range against the week's days, with zero hours."""
        dates = [days[i] for i in self.indices()]
        return Block(
            project_id=self.project_id,
            dates=dates,
            distribution={d: 0.0 for d in dates},
            start_index=self.start_index,
        )


def _check_index(day_index: int) -> None:
    if not 0 <= day_index < DAYS_PER_WEEK:
        raise ValueError(f"day index must be in 0..{DAYS_PER_WEEK - 1}, got {day_index}")


class DragTracker:
    """Finite-state machine turning pointer events into a pending block."""

    def __init__(self):
        self.state: GestureState = GestureState.IDLE
        self.drag: Optional[DragState] = None
        self.pending: Optional[PendingBlock] = None

    def pointer_down(self, project_id: str, week_key: str, day_index: int) -> bool:
        """Start a gesture on a cell. Returns True if a gesture started."""
        _check_index(day_index)
        if self.state == GestureState.PENDING_BLOCK:
            # The pending block must be committed or discarded first.
            logger.debug(f"Ignoring pointer-down on {project_id}/{week_key}: block pending")
            return False
        self.drag = DragState(project_id=project_id, week_key=week_key, day_indices={day_index})
        self.state = GestureState.DRAGGING
        return True

    def pointer_enter(self, project_id: str, week_key: str, day_index: int) -> bool:
        """Add a cell to the active gesture. Returns True if the cell was added."""
        _check_index(day_index)
        if self.state != GestureState.DRAGGING or self.drag is None:
            return False
        if project_id != self.drag.project_id or week_key != self.drag.week_key:
            return False
        if day_index in self.drag.day_indices:
            return False
        self.drag.day_indices.add(day_index)
        return True

    def pointer_up(self) -> Optional[PendingBlock]:
        """End the gesture (global release, wherever the pointer is).

        Returns:
            The pending block, or None if fewer than two cells were touched
        """
        if self.state != GestureState.DRAGGING or self.drag is None:
            return self.pending

        drag = self.drag
        self.drag = None
        if len(drag.day_indices) < MIN_BLOCK_DAYS:
            logger.debug(f"Discarding single-cell gesture on {drag.project_id}/{drag.week_key}")
            self.state = GestureState.IDLE
            return None

        self.pending = PendingBlock(
            project_id=drag.project_id,
            week_key=drag.week_key,
            start_index=min(drag.day_indices),
            end_index=max(drag.day_indices),
        )
        self.state = GestureState.PENDING_BLOCK
        return self.pending

    def clear_pending(self) -> None:
        """Drop the pending block once it has been committed or discarded."""
        self.pending = None
        if self.state == GestureState.PENDING_BLOCK:
            self.state = GestureState.IDLE

    def highlighted(self, project_id: str, week_key: str) -> Set[int]:
        """Cells to highlight on a row while a gesture is in progress."""
        if self.drag is None or (project_id, week_key) != (self.drag.project_id, self.drag.week_key):
            return set()
        return set(self.drag.day_indices)
