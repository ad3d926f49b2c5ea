"""Hour map for hourblocks.

Read-only lookup of planned/recorded hours keyed by (project, date), or by
(user, project, date) for the team-wide views. Built fresh from fetched
rows; a write is followed by a refetch, never by an in-place update.
"""

import logging
from datetime import date
from typing import Any, Dict, Hashable, Iterable, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from hourblocks.models.hour_entry import HourEntry, HourPair

logger = logging.getLogger(__name__)

# Absent keys read as zero hours in both modes.
EMPTY_PAIR = HourPair(planned=0.0, recorded=0.0)

RowLike = Union[HourEntry, Mapping[str, Any]]


def _coerce_row(row: RowLike) -> Optional[HourEntry]:
    if isinstance(row, HourEntry):
        return row
    try:
        return HourEntry.model_validate(row)
    except (ValidationError, TypeError) as e:
        logger.debug(f"Skipping malformed hour row: {type(e).__name__}: {str(e)}")
        return None


class HourMap:
    """Immutable mapping from a composite key to an HourPair."""

    def __init__(self, entries: Optional[Dict[Tuple[Hashable, ...], HourPair]] = None):
        self._entries: Dict[Tuple[Hashable, ...], HourPair] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def keys(self):
        return self._entries.keys()

    def lookup(self, *key: Hashable) -> HourPair:
        """Return the pair for ``key`` (absent keys read as zero hours)."""
        return self._entries.get(tuple(key), EMPTY_PAIR)

    def get(self, *key: Hashable) -> Optional[HourPair]:
        """Return the pair for ``key`` or None if absent."""
        return self._entries.get(tuple(key))


def _build(
    rows: Iterable[RowLike],
    key_fn,
    start: Optional[date],
    end: Optional[date],
) -> HourMap:
    entries: Dict[Tuple[Hashable, ...], HourPair] = {}
    skipped = 0
    for raw in rows:
        row = _coerce_row(raw)
        if row is None:
            skipped += 1
            continue
        if (start is not None and row.date < start) or (end is not None and row.date > end):
            logger.debug(f"Skipping hour row outside range: {row.project_id} {row.date}")
            skipped += 1
            continue
        key = key_fn(row)
        if key is None:
            skipped += 1
            continue
        # Duplicate keys should not occur (unique in storage); last write wins.
        entries[key] = HourPair(planned=row.planned_hours, recorded=row.recorded_hours)
    if skipped:
        logger.debug(f"Built hour map with {len(entries)} entries ({skipped} rows skipped)")
    return HourMap(entries)


def build_hour_map(
    rows: Iterable[RowLike],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> HourMap:
    """Build a (project_id, date) -> HourPair map for one user.

    Malformed rows (missing project, unparsable date, negative hours) and rows
    outside ``[start, end]`` are skipped without affecting the others.
    """
    return _build(rows, lambda row: (row.project_id, row.date), start, end)


def build_team_hour_map(
    rows: Iterable[RowLike],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> HourMap:
    """Build a (user_id, project_id, date) -> HourPair map for team views."""
    def key_fn(row: HourEntry):
        if not row.user_id:
            logger.debug(f"Skipping team hour row without user: {row.project_id} {row.date}")
            return None
        return (row.user_id, row.project_id, row.date)

    return _build(rows, key_fn, start, end)


def lookup(hour_map: HourMap, project_id: str, day: date) -> HourPair:
    """Module-level convenience for ``hour_map.lookup(project_id, day)``."""
    return hour_map.lookup(project_id, day)
