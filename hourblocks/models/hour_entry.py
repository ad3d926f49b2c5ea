"""HourEntry data model for hourblocks."""

from datetime import date as Day
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Mode(str, Enum):
    """Which hour field is active for reading and writing."""
    PLAN = "plan"
    RECORD = "record"


class HourField(str, Enum):
    """Storage column targeted by a write."""
    PLANNED_HOURS = "planned_hours"
    RECORDED_HOURS = "recorded_hours"


def field_for_mode(mode: Mode) -> HourField:
    """Map a mode to the storage field it reads and writes."""
    if Mode(mode) == Mode.PLAN:
        return HourField.PLANNED_HOURS
    return HourField.RECORDED_HOURS


def cleared_value(mode: Mode) -> Optional[float]:
    """Value that represents "no hours" for a mode (0 for plan, null for record)."""
    if Mode(mode) == Mode.PLAN:
        return 0.0
    return None


class HourEntry(BaseModel):
    """One (project, date) record holding planned and recorded hours."""

    project_id: str = Field(..., min_length=1, description="Project the hours are booked against")
    date: Day = Field(..., description="Calendar day (no time-of-day or timezone)")
    planned_hours: float = Field(0.0, ge=0.0, description="Planned hours for the day")
    recorded_hours: Optional[float] = Field(None, ge=0.0, description="Recorded hours for the day (null if none)")
    user_id: Optional[str] = Field(None, description="Owner of the entry (set for team-wide fetches)")


class HourPair(BaseModel):
    """Planned/recorded pair stored in an HourMap."""

    planned: float = Field(0.0, description="Planned hours")
    recorded: Optional[float] = Field(None, description="Recorded hours (null if none)")

    class Config:
        frozen = True

    def value(self, mode: Mode) -> float:
        """Effective hours for the active mode (recorded null counts as 0)."""
        if Mode(mode) == Mode.PLAN:
            return self.planned
        return self.recorded or 0.0


class HourWrite(BaseModel):
    """Write request issued once per affected date."""

    project_id: str = Field(..., description="Project the hours are booked against")
    date: Day = Field(..., description="Calendar day to write")
    field: HourField = Field(..., description="Which column to write")
    value: Optional[float] = Field(None, ge=0.0, description="New value (null clears recorded hours)")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
