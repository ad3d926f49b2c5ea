"""Block detection for hourblocks.

Scans one project's row of days and yields every maximal contiguous run of
positive hours spanning at least two days. Detection is a pure function of
(days, hour map, mode); blocks are recomputed on every render and never
stitched across the displayed range, so a run crossing a week boundary
becomes one block per week.
"""

from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple

from hourblocks.engine.hour_map import HourMap
from hourblocks.models.block import Block
from hourblocks.models.constants import MIN_BLOCK_DAYS
from hourblocks.models.hour_entry import Mode


def detect_blocks(
    project_id: str,
    days: Sequence[date],
    hour_map: HourMap,
    mode: Mode,
) -> List[Block]:
    """Detect blocks for one project over ``days``.

    Args:
        project_id: Project whose row is scanned
        days: Displayed days in order (usually one Monday-anchored week)
        hour_map: Hours keyed by (project_id, date)
        mode: Selects planned or recorded hours

    Returns:
        Blocks in day order; a single non-zero day yields no block
    """
    blocks: List[Block] = []
    run: List[Tuple[int, date, float]] = []

    def flush():
        if len(run) >= MIN_BLOCK_DAYS:
            blocks.append(
                Block(
                    project_id=project_id,
                    dates=[d for _, d, _ in run],
                    distribution={d: v for _, d, v in run},
                    start_index=run[0][0],
                )
            )
        run.clear()

    for index, day in enumerate(days):
        value = hour_map.lookup(project_id, day).value(mode)
        if value > 0:
            run.append((index, day, value))
        else:
            flush()
    flush()

    return blocks


def detect_all(
    project_ids: Iterable[str],
    days: Sequence[date],
    hour_map: HourMap,
    mode: Mode,
) -> Dict[str, List[Block]]:
    """Detect blocks independently for each project (blocks never span projects)."""
    return {pid: detect_blocks(pid, days, hour_map, mode) for pid in project_ids}


def block_covering(blocks: Iterable[Block], index: int):
    """Return the block whose column range contains ``index``, or None."""
    for block in blocks:
        if block.start_index <= index <= block.end_index:
            return block
    return None
