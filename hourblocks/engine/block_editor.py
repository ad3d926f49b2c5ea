"""Block editor for hourblocks.

Holds a local draft of a block's per-day hours and commits it through an
external write collaborator, one write per date. A failed commit leaves the
editor open with its draft intact so the user can retry; failures are
reported once per commit through ``notify``.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Union

from hourblocks.engine.cell import InvalidHourValue, parse_hours
from hourblocks.engine.distributor import distribute_over
from hourblocks.engine.drag_tracker import PendingBlock
from hourblocks.models.block import Block
from hourblocks.models.hour_entry import HourWrite, Mode, cleared_value, field_for_mode

logger = logging.getLogger(__name__)

HourWriteFn = Callable[[HourWrite], None]
HourDeleteFn = Callable[[str, List[date], Mode], None]


def _log_notify(message: str) -> None:
    logger.warning(message)


class CommitResult:
    """Outcome of a commit, quick entry or delete."""

    def __init__(self):
        self.written: List[date] = []
        self.failed: Dict[date, str] = {}

    @property
    def ok(self) -> bool:
        return not self.failed


class BlockEditor:
    """Edits one block at a time (existing or freshly drawn)."""

    def __init__(
        self,
        write: HourWriteFn,
        mode: Mode,
        *,
        delete: Optional[HourDeleteFn] = None,
        notify: Optional[Callable[[str], None]] = None,
        on_committed: Optional[Callable[[], None]] = None,
    ):
        """Create an editor.

        Args:
            write: Issues one write request; raises on failure
            mode: Active mode; only its field is ever written
            delete: Optional explicit delete collaborator (project_id, dates, mode)
            notify: Receives one user-facing message per failed operation
            on_committed: Called after any write lands, to trigger a refetch
        """
        self.write = write
        self.mode = Mode(mode)
        self.delete_fn = delete
        self.notify = notify or _log_notify
        self.on_committed = on_committed
        self.block: Optional[Block] = None
        self.draft: Dict[date, float] = {}

    @property
    def is_open(self) -> bool:
        return self.block is not None

    @property
    def draft_total(self) -> float:
        return sum(self.draft.values())

    def open(self, block: Block) -> None:
        """Snapshot the block's distribution into a local draft."""
        self.block = block
        self.draft = dict(block.distribution)

    def open_pending(self, pending: PendingBlock, days: Sequence[date]) -> Block:
        """Open a block drawn by a gesture; all of its days start at zero."""
        block = pending.to_block(days)
        self.open(block)
        return block

    def set_draft_value(self, day: date, value: Union[str, float, None]) -> bool:
        """Set one day of the draft. Negative values clamp to zero.

        Returns:
            False (draft unchanged) if the editor is closed, the day is not in
            the block, or the value is not a number
        """
        if self.block is None or day not in self.draft:
            return False
        try:
            self.draft[day] = parse_hours(value, clamp=True)
        except InvalidHourValue as e:
            logger.debug(f"Rejected draft value for {day}: {str(e)}")
            return False
        return True

    def commit(self) -> CommitResult:
        """Write the full draft (every date, not only changed ones)."""
        if self.block is None:
            return CommitResult()
        return self._write_all(dict(self.draft), "save")

    def quick_entry(self, total: Union[str, int, float]) -> Optional[CommitResult]:
        """Distribute a whole-hour total evenly and commit it.

        Returns:
            The commit result, or None if the input was rejected or not positive
        """
        if self.block is None:
            return None
        try:
            hours = parse_hours(total)
        except InvalidHourValue as e:
            logger.debug(f"Rejected quick entry {total!r}: {str(e)}")
            return None
        if hours <= 0:
            return None
        if not hours.is_integer():
            logger.debug(f"Rejected quick entry {total!r}: not a whole number of hours")
            return None

        self.draft = {d: float(v) for d, v in distribute_over(int(hours), self.block.dates).items()}
        return self.commit()

    def discard(self) -> None:
        """Close without writing anything."""
        self._close()

    def delete(self) -> CommitResult:
        """Remove the block's hours for the active mode.

        Uses the explicit delete collaborator when one was supplied, otherwise
        writes the cleared value (0 for plan, null for record) to every date.
        """
        if self.block is None:
            return CommitResult()

        if self.delete_fn is None:
            cleared = cleared_value(self.mode)
            return self._write_all({d: cleared for d in self.block.dates}, "delete")

        result = CommitResult()
        block = self.block
        try:
            self.delete_fn(block.project_id, list(block.dates), self.mode)
        except Exception as e:
            logger.error(f"Failed to delete block {block.project_id} {block.dates[0]}: {type(e).__name__}: {str(e)}")
            for d in block.dates:
                result.failed[d] = str(e)
            self.notify(f"Could not delete hours for {block.dates[0]} to {block.dates[-1]}: {str(e)}")
            return result

        result.written = list(block.dates)
        self._close()
        if self.on_committed:
            self.on_committed()
        return result

    def _write_all(self, values: Dict[date, Optional[float]], action: str) -> CommitResult:
        block = self.block
        field = field_for_mode(self.mode)
        result = CommitResult()

        for d in block.dates:
            request = HourWrite(project_id=block.project_id, date=d, field=field, value=values[d])
            try:
                self.write(request)
            except Exception as e:
                logger.error(f"Failed to {action} hours for {block.project_id} {d}: {type(e).__name__}: {str(e)}")
                result.failed[d] = str(e)
            else:
                result.written.append(d)

        if result.failed:
            days = ", ".join(d.isoformat() for d in sorted(result.failed))
            self.notify(f"Could not {action} hours for {days}")
        else:
            self._close()

        if result.written and self.on_committed:
            self.on_committed()
        return result

    def _close(self) -> None:
        self.block = None
        self.draft = {}
