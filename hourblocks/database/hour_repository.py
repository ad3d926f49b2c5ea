"""Repository for HourEntry database operations.

This is the hour-storage collaborator the engine writes through: reads are
range queries, writes are upserts keyed on (user, project, date) that touch
only the field of the active mode.
"""

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from hourblocks.database.models import HourEntryDB
from hourblocks.models.constants import DEFAULT_PLANNED_HOURS
from hourblocks.models.hour_entry import HourEntry, HourField, HourWrite, Mode, cleared_value, field_for_mode

logger = logging.getLogger(__name__)


class HourRepository:
    """Repository for HourEntry database operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_range(self, user_id: str, start: date, end: date) -> List[HourEntry]:
        """Get a user's rows with ``start <= date <= end``."""
        rows = (
            self.db.query(HourEntryDB)
            .filter(
                HourEntryDB.user_id == user_id,
                HourEntryDB.date >= start,
                HourEntryDB.date <= end,
            )
            .order_by(HourEntryDB.project_id, HourEntryDB.date)
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def list_range_all(self, start: date, end: date) -> List[HourEntry]:
        """Get every user's rows in the range (team views)."""
        rows = (
            self.db.query(HourEntryDB)
            .filter(HourEntryDB.date >= start, HourEntryDB.date <= end)
            .order_by(HourEntryDB.user_id, HourEntryDB.project_id, HourEntryDB.date)
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def upsert(self, user_id: str, write: HourWrite) -> HourEntry:
        """Write one field for one day, creating the row if needed."""
        field = HourField(write.field)
        try:
            row = (
                self.db.query(HourEntryDB)
                .filter(
                    HourEntryDB.user_id == user_id,
                    HourEntryDB.project_id == write.project_id,
                    HourEntryDB.date == write.date,
                )
                .first()
            )
            if row is None:
                row = HourEntryDB(
                    user_id=user_id,
                    project_id=write.project_id,
                    date=write.date,
                    planned_hours=DEFAULT_PLANNED_HOURS,
                    recorded_hours=None,
                )
                self.db.add(row)
            if field == HourField.PLANNED_HOURS:
                row.planned_hours = write.value or 0.0
            else:
                row.recorded_hours = write.value
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Wrote {field.value}={write.value} for {user_id}/{write.project_id}/{write.date}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(
                f"Failed to write hours for {user_id}/{write.project_id}/{write.date}: {type(e).__name__}: {str(e)}"
            )
            raise

    def clear(self, user_id: str, project_id: str, dates: List[date], mode: Mode) -> int:
        """Clear the active field on the given days (rows are kept).

        Returns:
            Number of rows updated
        """
        if not dates:
            return 0
        field = field_for_mode(mode)
        try:
            updated = (
                self.db.query(HourEntryDB)
                .filter(
                    HourEntryDB.user_id == user_id,
                    HourEntryDB.project_id == project_id,
                    HourEntryDB.date.in_(dates),
                )
                .update({field.value: cleared_value(mode)}, synchronize_session=False)
            )
            self.db.commit()
            logger.debug(f"Cleared {field.value} on {updated} rows for {user_id}/{project_id}")
            return int(updated)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to clear hours for {user_id}/{project_id}: {type(e).__name__}: {str(e)}")
            raise


class UserHourWriter:
    """Binds a repository to one user so it plugs into the block editor."""

    def __init__(self, repository: HourRepository, user_id: str):
        self.repository = repository
        self.user_id = user_id

    def write(self, request: HourWrite) -> None:
        self.repository.upsert(self.user_id, request)

    def delete(self, project_id: str, dates: List[date], mode: Mode) -> None:
        self.repository.clear(self.user_id, project_id, dates, mode)
