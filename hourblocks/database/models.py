"""SQLAlchemy database models for hourblocks."""

import uuid
from sqlalchemy import Column, String, Float, Date, UniqueConstraint

from hourblocks.database.database import Base
from hourblocks.models.hour_entry import HourEntry


class HourEntryDB(Base):
    """Database model for HourEntry (one row per user, project and day)."""

    __tablename__ = "hours"
    __table_args__ = (
        UniqueConstraint("user_id", "project_id", "date", name="uq_hours_user_project_date"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    project_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    planned_hours = Column(Float, nullable=False, default=0.0)
    recorded_hours = Column(Float, nullable=True)

    def to_pydantic(self) -> HourEntry:
        """Convert database model to Pydantic model."""
        return HourEntry(
            project_id=self.project_id,
            date=self.date,
            planned_hours=self.planned_hours or 0.0,
            recorded_hours=self.recorded_hours,
            user_id=self.user_id,
        )
