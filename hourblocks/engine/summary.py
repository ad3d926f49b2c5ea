"""Time booking summary for hourblocks.

Splits each project's hours for a month into normal and overtime hours.
Overtime is computed per week: anything beyond the standard weekly hours is
overtime, apportioned to projects by their share of that week's total.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence

from pydantic import BaseModel, Field

from hourblocks.engine.day_grid import week_days
from hourblocks.engine.hour_map import HourMap
from hourblocks.models.constants import STANDARD_WEEK_HOURS, SUMMARY_PRECISION
from hourblocks.models.hour_entry import Mode


def round_hours(hours: float) -> float:
    """Round to SUMMARY_PRECISION decimals, halves rounding up."""
    step = Decimal(1).scaleb(-SUMMARY_PRECISION)
    return float(Decimal(str(hours)).quantize(step, rounding=ROUND_HALF_UP))


class SummaryRow(BaseModel):
    """Normal/overtime hours for one project."""

    project_id: str = Field(..., description="Project identifier")
    normal_hours: float = Field(..., description="Hours within the standard week")
    ot_hours: float = Field(..., description="Overtime hours")

    @property
    def total_hours(self) -> float:
        return round_hours(self.normal_hours + self.ot_hours)


class TimeSummary(BaseModel):
    """Summary rows plus totals."""

    rows: List[SummaryRow] = Field(default_factory=list)
    total_normal: float = 0.0
    total_ot: float = 0.0


def weekly_project_hours(
    project_ids: Sequence[str],
    hour_map: HourMap,
    week_start: date,
    mode: Mode,
) -> Dict[str, float]:
    """Total hours per project for one week."""
    days = week_days(week_start)
    return {
        pid: sum(hour_map.lookup(pid, day).value(mode) for day in days)
        for pid in project_ids
    }


def summarize(
    project_ids: Sequence[str],
    hour_map: HourMap,
    weeks: Iterable[date],
    mode: Mode,
    standard_hours: float = STANDARD_WEEK_HOURS,
) -> TimeSummary:
    """Build the time booking summary over ``weeks``.

    Args:
        project_ids: Projects in display order
        hour_map: Hours keyed by (project_id, date)
        weeks: Monday week-starts to include
        mode: Selects planned or recorded hours
        standard_hours: Weekly hours before overtime starts

    Returns:
        TimeSummary with projects that have any hours, in display order
    """
    normal: Dict[str, float] = {pid: 0.0 for pid in project_ids}
    overtime: Dict[str, float] = {pid: 0.0 for pid in project_ids}

    for week_start in weeks:
        per_project = weekly_project_hours(project_ids, hour_map, week_start, mode)
        week_total = sum(per_project.values())
        week_ot = max(0.0, week_total - standard_hours)
        for pid, hours in per_project.items():
            if week_ot > 0 and hours > 0:
                project_ot = week_ot * (hours / week_total)
                normal[pid] += hours - project_ot
                overtime[pid] += project_ot
            else:
                normal[pid] += hours

    summary = TimeSummary()
    for pid in project_ids:
        if normal[pid] <= 0 and overtime[pid] <= 0:
            continue
        summary.rows.append(
            SummaryRow(
                project_id=pid,
                normal_hours=round_hours(normal[pid]),
                ot_hours=round_hours(overtime[pid]),
            )
        )
    summary.total_normal = round_hours(sum(r.normal_hours for r in summary.rows))
    summary.total_ot = round_hours(sum(r.ot_hours for r in summary.rows))
    return summary
