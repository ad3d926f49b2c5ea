"""Block data model for hourblocks."""

from datetime import date, timedelta
from typing import Dict, List
from pydantic import BaseModel, Field, field_validator, model_validator

from hourblocks.models.constants import MIN_BLOCK_DAYS


class Block(BaseModel):
    """A contiguous run of at least two days of hours for one project.

    Blocks are derived from the hour map on every render pass and are never
    persisted. They are correlated across renders by position only
    (``start_index``/``end_index`` within the displayed week).
    """

    project_id: str = Field(..., description="Project the block belongs to")
    dates: List[date] = Field(..., description="Consecutive calendar days covered by the block")
    distribution: Dict[date, float] = Field(..., description="Hours per date, covering exactly `dates`")
    start_index: int = Field(0, ge=0, description="Column index of the first date within the displayed week")

    @field_validator("dates")
    @classmethod
    def _validate_dates(cls, v):
        if len(v) < MIN_BLOCK_DAYS:
            raise ValueError(f"a block spans at least {MIN_BLOCK_DAYS} days")
        for prev, cur in zip(v, v[1:]):
            if cur - prev != timedelta(days=1):
                raise ValueError("block dates must be consecutive calendar days")
        return v

    @model_validator(mode="after")
    def _validate_distribution(self):
        if set(self.distribution) != set(self.dates):
            raise ValueError("distribution must cover exactly the block dates")
        return self

    @property
    def end_index(self) -> int:
        return self.start_index + len(self.dates) - 1

    @property
    def total(self) -> float:
        return sum(self.distribution.values())

    def ordered_hours(self) -> List[float]:
        """Hours in date order."""
        return [self.distribution[d] for d in self.dates]
